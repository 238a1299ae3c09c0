"""Output routing for generated template text.

A router takes generated text, an OutputInfo descriptor and the run's
diagnostics, and persists the text. Routers never raise for I/O problems:
failures are reported into the shared diagnostics so the template contract
stays uniform.

Public API:
    OutputRouter: Protocol implemented by all routers
    FileSystemRouter: Writes files atomically under a base directory
    MemoryRouter: Keeps outputs in memory (dry runs, tests)
    get_default_router / set_default_router: Process-wide default router
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from codegen_toolbox.core.types import DiagnosticCollection
from codegen_toolbox.output.descriptor import OutputInfo

logger = logging.getLogger(__name__)

# Suffix for temporary files during atomic write
TEMP_FILE_SUFFIX = ".tmp"

__all__ = [
    "FileSystemRouter",
    "MemoryRouter",
    "OutputRouter",
    "RouterCall",
    "get_default_router",
    "set_default_router",
]


@runtime_checkable
class OutputRouter(Protocol):
    """Persists generated text according to an output descriptor."""

    def persist(
        self, text: str, output: OutputInfo, diagnostics: DiagnosticCollection
    ) -> None:
        """Save text, overwriting any existing destination."""
        ...

    def persist_if_absent(
        self, text: str, output: OutputInfo, diagnostics: DiagnosticCollection
    ) -> None:
        """Save text only if the destination does not exist yet."""
        ...


class FileSystemRouter:
    """Router that writes generated text to files.

    Destinations are resolved with OutputInfo.resolve() against `base_dir`
    (the current working directory when None). Writes are atomic
    (temp file + os.replace) and skipped when the file already holds the
    same content.

    Attributes:
        base_dir: Directory relative destinations are resolved against.
        written: Paths actually written by this router, in order.

    """

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self.base_dir = Path(base_dir).expanduser() if base_dir is not None else None
        self.written: list[Path] = []

    def persist(
        self, text: str, output: OutputInfo, diagnostics: DiagnosticCollection
    ) -> None:
        """Save text, overwriting any existing destination.

        Honors OutputInfo.preserve_existing by delegating to
        persist_if_absent().
        """
        if output.preserve_existing:
            self.persist_if_absent(text, output, diagnostics)
            return
        path = self._resolve(output, diagnostics)
        if path is None:
            return
        self._write(path, text, output, diagnostics)

    def persist_if_absent(
        self, text: str, output: OutputInfo, diagnostics: DiagnosticCollection
    ) -> None:
        """Save text only if the destination does not exist yet."""
        path = self._resolve(output, diagnostics)
        if path is None:
            return
        if path.exists():
            logger.debug("Output %s already exists, skipping", path)
            return
        self._write(path, text, output, diagnostics)

    def _resolve(self, output: OutputInfo, diagnostics: DiagnosticCollection) -> Path | None:
        base_dir = self.base_dir if self.base_dir is not None else Path.cwd()
        path = output.resolve(base_dir)
        if path is None:
            diagnostics.error("Output file is not specified")
        return path

    def _write(
        self,
        path: Path,
        text: str,
        output: OutputInfo,
        diagnostics: DiagnosticCollection,
    ) -> None:
        """Write text atomically, reporting failures as diagnostics."""
        try:
            data = text.encode(output.encoding)
        except UnicodeEncodeError as e:
            diagnostics.error(f"Cannot encode output for {path} as {output.encoding}: {e}")
            return

        try:
            if path.is_file() and path.read_bytes() == data:
                logger.debug("Output %s is unchanged, not rewriting", path)
                return
        except OSError as e:
            logger.debug("Cannot compare existing output %s: %s", path, e)

        temp_path = path.with_name(path.name + TEMP_FILE_SUFFIX)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        except OSError as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Cannot remove temp file %s", temp_path)
            diagnostics.error(f"Failed to write output to {path}: {e}")
            logger.warning("Failed to write output to %s: %s", path, e)
            return

        self.written.append(path)
        logger.info("Wrote %s (%d bytes)", path, len(data))


@dataclass(frozen=True)
class RouterCall:
    """One call recorded by MemoryRouter.

    Attributes:
        method: "persist" or "persist_if_absent".
        destination: Destination key, or None if no file was set.
        text: Text passed to the router.
        wrote: Whether the call changed the stored outputs.

    """

    method: str
    destination: str | None
    text: str
    wrote: bool


class MemoryRouter:
    """Router that keeps generated outputs in memory.

    Useful for dry runs and for verifying generators without touching disk.
    Keys are the resolved destination paths as POSIX strings.
    """

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.outputs: dict[str, str] = {}
        self.calls: list[RouterCall] = []

    def persist(
        self, text: str, output: OutputInfo, diagnostics: DiagnosticCollection
    ) -> None:
        """Store text, replacing any previous output at the destination."""
        if output.preserve_existing:
            self.persist_if_absent(text, output, diagnostics)
            return
        key = self._key(output, diagnostics)
        if key is not None:
            self.outputs[key] = text
        self.calls.append(RouterCall("persist", key, text, key is not None))

    def persist_if_absent(
        self, text: str, output: OutputInfo, diagnostics: DiagnosticCollection
    ) -> None:
        """Store text only if nothing is stored at the destination yet."""
        key = self._key(output, diagnostics)
        wrote = key is not None and key not in self.outputs
        if wrote:
            self.outputs[key] = text
        self.calls.append(RouterCall("persist_if_absent", key, text, wrote))

    def _key(self, output: OutputInfo, diagnostics: DiagnosticCollection) -> str | None:
        path = output.resolve(self.base_dir)
        if path is None:
            diagnostics.error("Output file is not specified")
            return None
        return path.as_posix()


_default_router: OutputRouter | None = None


def get_default_router() -> OutputRouter:
    """Return the process-wide default router.

    Creates a FileSystemRouter rooted at the current working directory on
    first use.
    """
    global _default_router
    if _default_router is None:
        _default_router = FileSystemRouter()
    return _default_router


def set_default_router(router: OutputRouter | None) -> None:
    """Replace the process-wide default router (None restores lazy default)."""
    global _default_router
    _default_router = router

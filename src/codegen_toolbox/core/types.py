"""Core type definitions for codegen-toolbox.

This module provides the diagnostic data types shared by templates,
generators and output routers:
- Severity: Error/Warning classification
- Diagnostic: a single recorded message (frozen)
- DiagnosticCollection: the ordered, mutable sink threaded through every
  stage of a template run
- BuildAction: labels telling a downstream build system how to treat a
  generated file
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import overload

__all__ = [
    "BuildAction",
    "Diagnostic",
    "DiagnosticCollection",
    "Severity",
]


class Severity(str, Enum):
    """Diagnostic severity levels.

    Any ERROR in a collection marks the run as failed.
    """

    ERROR = "error"
    WARNING = "warning"


class BuildAction(str, Enum):
    """Known build actions for generated project items."""

    NONE = "None"  # No action is taken
    COMPILE = "Compile"  # The file is compiled
    CONTENT = "Content"  # Included in the content output group
    EMBEDDED_RESOURCE = "EmbeddedResource"  # Embedded in the built artifact


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single error or warning produced during a template run.

    Attributes:
        severity: Error or warning.
        message: Human-readable message, already formatted.
        source: Name of the template or generator that reported it, if known.

    """

    severity: Severity
    message: str
    source: str | None = None

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic is an error."""
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        """Return 'severity: message' with an optional source prefix."""
        prefix = f"{self.source}: " if self.source else ""
        return f"{prefix}{self.severity.value}: {self.message}"


class DiagnosticCollection:
    """Ordered, mutable collection of diagnostics.

    Preserves insertion order. Shared by reference between a template,
    its output router and any composing generator, so every stage of a
    run reports into the same sink.

    Example:
        >>> diagnostics = DiagnosticCollection()
        >>> diagnostics.warning("missing optional parameter")
        >>> diagnostics.has_errors
        False
        >>> len(diagnostics)
        1

    """

    def __init__(self, items: Iterable[Diagnostic] | None = None) -> None:
        self._items: list[Diagnostic] = list(items) if items is not None else []

    def add(self, diagnostic: Diagnostic) -> None:
        """Append a diagnostic."""
        self._items.append(diagnostic)

    def error(self, message: str, source: str | None = None) -> None:
        """Append an error with an already-formatted message."""
        self.add(Diagnostic(Severity.ERROR, message, source))

    def warning(self, message: str, source: str | None = None) -> None:
        """Append a warning with an already-formatted message."""
        self.add(Diagnostic(Severity.WARNING, message, source))

    def extend(self, diagnostics: Iterable[Diagnostic], source: str | None = None) -> None:
        """Append several diagnostics in order.

        Args:
            diagnostics: Diagnostics to copy.
            source: If given, fills in the source of diagnostics that have none.

        """
        for diagnostic in diagnostics:
            if source is not None and diagnostic.source is None:
                diagnostic = Diagnostic(diagnostic.severity, diagnostic.message, source)
            self._items.append(diagnostic)

    def clear(self) -> None:
        """Remove all diagnostics."""
        self._items.clear()

    @property
    def has_errors(self) -> bool:
        """Return True if any diagnostic is an error."""
        return any(d.is_error for d in self._items)

    @property
    def has_warnings(self) -> bool:
        """Return True if any diagnostic is a warning."""
        return any(not d.is_error for d in self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        """Return errors in insertion order."""
        return [d for d in self._items if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        """Return warnings in insertion order."""
        return [d for d in self._items if not d.is_error]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @overload
    def __getitem__(self, index: int) -> Diagnostic: ...

    @overload
    def __getitem__(self, index: slice) -> list[Diagnostic]: ...

    def __getitem__(self, index: int | slice) -> Diagnostic | list[Diagnostic]:
        return self._items[index]

    def __repr__(self) -> str:
        return (
            f"DiagnosticCollection(errors={len(self.errors)}, "
            f"warnings={len(self.warnings)})"
        )

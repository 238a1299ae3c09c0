"""Shared CLI utilities for codegen-toolbox.

Exit codes, the stderr console, message helpers, and logging setup used by
the CLI commands. Generated text is the only thing written to stdout, so
`codegen-toolbox transform TARGET > file` captures nothing else.
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from codegen_toolbox.core.types import DiagnosticCollection

# Exit codes following Unix conventions
EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1  # Run finished with error diagnostics
EXIT_CONFIG_ERROR: int = 2  # Configuration/target/usage error

# Environment variable overriding the CLI log level
LOG_LEVEL_ENV_VAR = "CODEGEN_TOOLBOX_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Messages and logs share stderr; markup is only rendered on a terminal
_is_tty = sys.stderr.isatty()

console = Console(stderr=True, force_terminal=_is_tty, no_color=not _is_tty)

logger = logging.getLogger(__name__)


def _print(label: str, message: str) -> None:
    console.print(f"{label} {message}", highlight=False)


def _error(message: str) -> None:
    """Report a failure that stops the command."""
    _print("[red]Error:[/red]", message)


def _warning(message: str) -> None:
    """Report a problem that does not stop the command."""
    _print("[yellow]Warning:[/yellow]", message)


def _info(message: str) -> None:
    _print("[blue]Info:[/blue]", message)


def _success(message: str) -> None:
    _print("[green]✓[/green]", message)


def _print_diagnostics(diagnostics: DiagnosticCollection) -> None:
    """Display every diagnostic in insertion order."""
    for diagnostic in diagnostics:
        text = diagnostic.message
        if diagnostic.source:
            text = f"{diagnostic.source}: {text}"
        if diagnostic.is_error:
            _error(text)
        else:
            _warning(text)


def _resolve_log_level(verbose: bool, quiet: bool, default_level: str) -> int:
    """Pick the effective log level.

    Precedence: CODEGEN_TOOLBOX_LOG_LEVEL, then --verbose, then --quiet,
    then the configured default.
    """
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper()
    if env_level in _LOG_LEVELS:
        return logging.getLevelName(env_level)
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    default_level = default_level.upper()
    if default_level in _LOG_LEVELS:
        return logging.getLevelName(default_level)
    return logging.WARNING


def _setup_logging(verbose: bool, quiet: bool, default_level: str = "WARNING") -> None:
    """Route log records to the stderr console through RichHandler.

    Args:
        verbose: Log at DEBUG.
        quiet: Log at ERROR only.
        default_level: Level name used when neither flag is given.

    """
    level = _resolve_log_level(verbose, quiet, default_level)

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setLevel(level)

    # force=True drops handlers left by a previous command in the same process
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logger.debug("Logging at %s", logging.getLevelName(level))

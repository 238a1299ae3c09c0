"""Command-line interface for codegen-toolbox.

Commands:
    render: Transform a template and save its output
    transform: Transform a template and print its output

TARGET arguments use 'module:attribute' form and may name a Template
instance, a Template subclass, or a zero-argument factory returning one.
"""

import importlib
import inspect
import logging
import sys
from pathlib import Path

import typer

from codegen_toolbox import __version__
from codegen_toolbox.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    _error,
    _info,
    _print_diagnostics,
    _setup_logging,
    _success,
)
from codegen_toolbox.config import ToolboxConfig, apply_config, load_config
from codegen_toolbox.core.exceptions import ConfigError, TargetError
from codegen_toolbox.output.routing import FileSystemRouter
from codegen_toolbox.template import Template

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="codegen-toolbox",
    help="Run code generation templates and save their output",
    no_args_is_help=True,
)


def resolve_target(target: str) -> Template:
    """Resolve a 'module:attribute' target to a Template instance.

    The current working directory is importable, so templates defined in
    local modules can be run directly.

    Args:
        target: Target string, e.g. "templates.models:UserTemplate".

    Returns:
        Template instance.

    Raises:
        TargetError: If the target cannot be resolved to a Template.

    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetError(f"Target must be 'module:attribute', got '{target}'", target)

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetError(f"Cannot import module '{module_name}': {e}", target) from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise TargetError(
                f"Module '{module_name}' has no attribute '{attr_path}'", target
            ) from None

    if isinstance(obj, Template):
        return obj
    if inspect.isclass(obj):
        if not issubclass(obj, Template):
            raise TargetError(f"'{target}' is a class but not a Template subclass", target)
        return obj()
    if callable(obj):
        result = obj()
        if isinstance(result, Template):
            return result
        raise TargetError(
            f"Factory '{target}' returned {type(result).__name__}, expected Template", target
        )
    raise TargetError(f"'{target}' is not a Template, got {type(obj).__name__}", target)


def _load_config_or_exit(config_path: str | None) -> ToolboxConfig:
    if config_path is None:
        return ToolboxConfig()
    try:
        return load_config(Path(config_path))
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from e


def _resolve_target_or_exit(target: str) -> Template:
    try:
        return resolve_target(target)
    except TargetError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from e


@app.command("render")
def render(
    target: str = typer.Argument(..., help="Template target as 'module:attribute'"),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (defaults to the template's own output settings)",
    ),
    if_not_exists: bool = typer.Option(
        False,
        "--if-not-exists",
        help="Do not overwrite the output file if it already exists",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML configuration file",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
) -> None:
    """Transform a template and save its output."""
    toolbox_config = _load_config_or_exit(config)
    _setup_logging(verbose, quiet, toolbox_config.log_level)

    template = _resolve_target_or_exit(target)
    template.router = FileSystemRouter(toolbox_config.output_dir)
    apply_config(template, toolbox_config)

    # Rendering handlers may set the destination or disable the template,
    # so both are only known after render() has started.
    keep_existing = if_not_exists or toolbox_config.if_not_exists
    if output is not None:
        if keep_existing:
            template.render_to_file_if_not_exists(output)
        else:
            template.render_to_file(output)
    else:
        if keep_existing:
            template.output.preserve_existing = True
        template.render()

    if not template.enabled:
        _info(f"Template {template.name} is disabled, nothing rendered")
        raise typer.Exit(code=EXIT_SUCCESS)

    _print_diagnostics(template.diagnostics)
    if template.diagnostics.has_errors:
        raise typer.Exit(code=EXIT_ERROR)
    _success(f"Rendered {template.name}")


@app.command("transform")
def transform(
    target: str = typer.Argument(..., help="Template target as 'module:attribute'"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
) -> None:
    """Transform a template and print its output without saving it."""
    _setup_logging(verbose, quiet)
    template = _resolve_target_or_exit(target)

    content = template.transform()
    typer.echo(content, nl=False)

    _print_diagnostics(template.diagnostics)
    if template.diagnostics.has_errors:
        raise typer.Exit(code=EXIT_ERROR)


@app.command("version")
def version() -> None:
    """Show the installed version."""
    typer.echo(__version__)


def main() -> None:
    """Console script entry point."""
    app()

"""Template runner: the generation and diagnostics lifecycle.

A Template drives one generation attempt at a time:

    initialize() -> validate() -> transform_text() -> router

Expected failures are reported through diagnostics (error()/warning() or
by raising TransformationError). Anything else is a programming defect and
propagates with its full traceback.

Templates can be customized either by subclassing (override initialize,
validate and transform_text) or by injecting callables:

    >>> template = Template(
    ...     name="greeting",
    ...     validate=lambda t: t.warning("missing optional parameter"),
    ...     emit=lambda t: "hello",
    ... )
    >>> template.transform()
    'hello'
    >>> len(template.diagnostics.warnings)
    1
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from codegen_toolbox.core.exceptions import TransformationError
from codegen_toolbox.core.types import DiagnosticCollection
from codegen_toolbox.output.descriptor import OutputInfo
from codegen_toolbox.output.routing import OutputRouter, get_default_router

logger = logging.getLogger(__name__)

Hook = Callable[["Template"], None]
Emitter = Callable[["Template"], "str | None"]
RenderingHandler = Callable[["Template"], None]

__all__ = ["Emitter", "Hook", "RenderingHandler", "Template", "format_message"]


def format_message(format: str, args: tuple[Any, ...]) -> str:
    """Format a diagnostic message with positional arguments.

    str.format is locale-independent, so messages read the same on every
    host. Without arguments the format string is used verbatim, which keeps
    literal braces intact.
    """
    if not args:
        return format
    return format.format(*args)


class Template:
    """Base class for code generation templates.

    Attributes:
        name: Template name used in logs and as the diagnostic source
            when a composite generator merges diagnostics.
        router: Output router used by render(); None means the process-wide
            default router at render time.

    """

    def __init__(
        self,
        *,
        emit: Emitter | None = None,
        initialize: Hook | None = None,
        validate: Hook | None = None,
        router: OutputRouter | None = None,
        enabled: bool = True,
        name: str | None = None,
    ) -> None:
        self.name = name or type(self).__name__
        self.router = router
        self._emit = emit
        self._initialize = initialize
        self._validate = validate
        self._enabled = enabled
        self._output = OutputInfo()
        self._diagnostics = DiagnosticCollection()
        self._buffer = io.StringIO()
        self._rendering_handlers: list[RenderingHandler] = []

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        """Whether render() generates and saves output. Defaults to True.

        Lets users of a composite generator switch off one output type
        without reimplementing the generator.
        """
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = bool(value)

    @property
    def diagnostics(self) -> DiagnosticCollection:
        """Errors and warnings from the most recent transformation."""
        return self._diagnostics

    @property
    def output(self) -> OutputInfo:
        """Where and how render() saves generated text."""
        return self._output

    @output.setter
    def output(self, value: OutputInfo) -> None:
        if not isinstance(value, OutputInfo):
            raise TypeError(f"output must be OutputInfo, got {type(value).__name__}")
        self._output = value

    @property
    def generation_environment(self) -> str:
        """Text written to the generation buffer so far."""
        return self._buffer.getvalue()

    # ------------------------------------------------------------------
    # Diagnostics and emission helpers
    # ------------------------------------------------------------------

    def error(self, format: str, *args: Any) -> None:
        """Add an error to diagnostics.

        Args:
            format: str.format template of the message.
            *args: Positional arguments for the template.

        """
        self._diagnostics.error(format_message(format, args))

    def warning(self, format: str, *args: Any) -> None:
        """Add a warning to diagnostics.

        Args:
            format: str.format template of the message.
            *args: Positional arguments for the template.

        """
        self._diagnostics.warning(format_message(format, args))

    def write(self, text: str) -> None:
        """Append text to the generation buffer."""
        self._buffer.write(text)

    def write_line(self, text: str = "") -> None:
        """Append text and a newline to the generation buffer."""
        self._buffer.write(text)
        self._buffer.write("\n")

    # ------------------------------------------------------------------
    # Rendering notification
    # ------------------------------------------------------------------

    def add_rendering_handler(self, handler: RenderingHandler) -> RenderingHandler:
        """Register a handler called at the start of every render.

        Composite generators use this to update `output` just in time.
        Returns the handler so the method can be used as a decorator.
        """
        self._rendering_handlers.append(handler)
        return handler

    def remove_rendering_handler(self, handler: RenderingHandler) -> None:
        """Unregister a rendering handler. Raises ValueError if unknown."""
        self._rendering_handlers.remove(handler)

    def on_rendering(self) -> None:
        """Invoke rendering handlers in registration order."""
        for handler in list(self._rendering_handlers):
            handler(self)

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Prepare the template before validation.

        Runs the injected initializer, if any. Override to resolve shared
        context the template needs.
        """
        if self._initialize is not None:
            self._initialize(self)

    def validate(self) -> None:
        """Validate template parameters.

        Runs the injected validator, if any. Override to check required and
        optional parameters; report problems with error(), warning() or by
        raising TransformationError.
        """
        if self._validate is not None:
            self._validate(self)

    def transform_text(self) -> str:
        """Generate the template output.

        The default implementation calls the injected emitter. An emitter
        may return the text or write it to the buffer and return None.

        Raises:
            NotImplementedError: If there is no emitter and the method is
                not overridden.

        """
        if self._emit is None:
            raise NotImplementedError(
                f"{type(self).__name__} must override transform_text() or pass emit="
            )
        result = self._emit(self)
        if result is None:
            return self.generation_environment
        return result

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def transform(self) -> str:
        """Transform the template into output without saving it.

        Clears the previous run's diagnostics and buffer, initializes,
        validates and, if validation reported no errors, generates text.
        TransformationError is recorded as an error diagnostic; any other
        exception propagates.

        Returns:
            Generated text, or the buffer contents if generation did not run
            or failed with TransformationError.

        """
        self._diagnostics.clear()
        self._buffer = io.StringIO()

        try:
            logger.debug("Initializing template %s", self.name)
            self.initialize()

            logger.debug("Validating template %s", self.name)
            self.validate()
            if not self._diagnostics.has_errors:
                logger.debug("Generating template %s", self.name)
                return self.transform_text()
            logger.debug(
                "Template %s failed validation with %d error(s)",
                self.name,
                len(self._diagnostics.errors),
            )
        except TransformationError as e:
            # Expected errors are reported without a call stack
            logger.debug("Template %s raised TransformationError: %s", self.name, e)
            self._diagnostics.error(str(e))

        return self.generation_environment

    def render(self) -> None:
        """Transform the template and save the output per `output` settings."""
        self._render(if_not_exists=False)

    def render_to_file(self, path: str | Path) -> None:
        """Transform the template and save the output to the given file."""
        self._output.file = path
        self.render()

    def render_to_file_if_not_exists(self, path: str | Path) -> None:
        """Transform the template and save the output to the given file,
        only if the file does not already exist.
        """
        self._output.file = path
        self._render(if_not_exists=True)

    def _render(self, *, if_not_exists: bool) -> None:
        self.on_rendering()
        if not self._enabled:
            logger.debug("Template %s is disabled, skipping render", self.name)
            return

        content = self.transform()
        router = self.router if self.router is not None else get_default_router()
        if if_not_exists:
            router.persist_if_absent(content, self._output, self._diagnostics)
        else:
            router.persist(content, self._output, self._diagnostics)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, enabled={self._enabled})"

"""Composite generators.

A Generator drives several templates from one object. It validates its own
inputs, then renders each template, using the templates' rendering
notification to route every output just in time. Users of a generator can
register their own rendering handlers or disable individual templates to
change where and whether output is saved, without modifying the generator.

Example:
    >>> class ModelGenerator(Generator):
    ...     def __init__(self, names: list[str], router: OutputRouter) -> None:
    ...         super().__init__(name="models")
    ...         self.names = names
    ...         self.template = self.add_template(
    ...             ModelTemplate(router=router), configure=self._route
    ...         )
    ...
    ...     def _route(self, template: Template) -> None:
    ...         template.output.directory = "models"
    ...
    ...     def run_core(self) -> None:
    ...         for name in self.names:
    ...             self.template.model_name = name
    ...             self.render_template(self.template, f"{name}.py")

"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from codegen_toolbox.core.exceptions import TransformationError
from codegen_toolbox.core.types import DiagnosticCollection
from codegen_toolbox.template import RenderingHandler, Template, format_message

logger = logging.getLogger(__name__)

__all__ = ["Generator"]


class Generator:
    """Base class for generators that render several templates.

    Customize by subclassing (override validate and run_core) or by
    injecting callables with the signature `(generator) -> None`.

    Attributes:
        name: Generator name used in logs.
        templates: Templates registered with add_template(), in order.

    """

    def __init__(
        self,
        *,
        run_core: Callable[[Generator], None] | None = None,
        validate: Callable[[Generator], None] | None = None,
        name: str | None = None,
    ) -> None:
        self.name = name or type(self).__name__
        self.templates: list[Template] = []
        self._run_core = run_core
        self._validate = validate
        self._diagnostics = DiagnosticCollection()

    @property
    def diagnostics(self) -> DiagnosticCollection:
        """Errors and warnings of the most recent run, including templates'."""
        return self._diagnostics

    def error(self, format: str, *args: Any) -> None:
        """Add an error to diagnostics."""
        self._diagnostics.error(format_message(format, args), self.name)

    def warning(self, format: str, *args: Any) -> None:
        """Add a warning to diagnostics."""
        self._diagnostics.warning(format_message(format, args), self.name)

    def add_template(
        self, template: Template, configure: RenderingHandler | None = None
    ) -> Template:
        """Register a template owned by this generator.

        Args:
            template: Template to register.
            configure: Optional rendering handler, typically used to set the
                template's output properties right before each render. It
                runs before handlers registered later by users of the
                generator, so users can override what it sets.

        Returns:
            The registered template.

        """
        if configure is not None:
            template.add_rendering_handler(configure)
        self.templates.append(template)
        return template

    def render_template(
        self,
        template: Template,
        path: str | Path | None = None,
        *,
        if_not_exists: bool = False,
    ) -> None:
        """Render a template and merge its diagnostics into the generator's.

        Args:
            template: Template to render.
            path: Destination file; when None the template's current output
                settings are used.
            if_not_exists: Save only if the destination does not exist.

        """
        if if_not_exists:
            if path is None:
                raise ValueError("if_not_exists rendering requires a path")
            template.render_to_file_if_not_exists(path)
        elif path is not None:
            template.render_to_file(path)
        else:
            template.render()
        if template.enabled:
            self._diagnostics.extend(template.diagnostics, template.name)

    def validate(self) -> None:
        """Validate generator parameters.

        Runs the injected validator, if any. Report problems with error(),
        warning() or by raising TransformationError.
        """
        if self._validate is not None:
            self._validate(self)

    def run_core(self) -> None:
        """Render the generator's templates."""
        if self._run_core is None:
            raise NotImplementedError(
                f"{type(self).__name__} must override run_core() or pass run_core="
            )
        self._run_core(self)

    def run(self) -> DiagnosticCollection:
        """Validate the generator and, if valid, render its templates.

        Returns:
            The generator's diagnostics.

        """
        self._diagnostics.clear()
        try:
            self.validate()
            if self._diagnostics.has_errors:
                logger.debug("Generator %s failed validation", self.name)
            else:
                logger.debug("Running generator %s", self.name)
                self.run_core()
        except TransformationError as e:
            self._diagnostics.error(str(e), self.name)

        logger.info(
            "Generator %s finished: %d error(s), %d warning(s)",
            self.name,
            len(self._diagnostics.errors),
            len(self._diagnostics.warnings),
        )
        return self._diagnostics

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, templates={len(self.templates)})"

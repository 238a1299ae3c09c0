"""Custom exception hierarchy for codegen-toolbox.

All custom exceptions inherit from ToolboxError to enable:
- Unified exception handling
- Clear distinction from built-in exceptions
- A structural split between expected, user-reportable failures
  (TransformationError) and programming defects (everything else)
"""

__all__ = [
    "ToolboxError",
    "TransformationError",
    "ConfigError",
    "TargetError",
]


class ToolboxError(Exception):
    """Base exception for all codegen-toolbox errors.

    All custom exceptions in codegen-toolbox should inherit from this class
    to enable unified exception handling and clear error boundaries.
    """

    pass


class TransformationError(ToolboxError):
    """Expected, user-reportable failure during template transformation.

    Raised by template code when:
    - A required template parameter is missing or malformed
    - Input data the template depends on cannot be used
    - Any other precondition violation the template author wants to
      report to the user without an exception call stack

    Template.transform() and Generator.run() catch exactly this kind and
    record its message as an Error diagnostic. It never reaches the caller.

    Example:
        >>> class ModelTemplate(Template):
        ...     def transform_text(self) -> str:
        ...         if not self.model_name:
        ...             raise TransformationError("model_name is required")
        ...         return f"class {self.model_name}: ..."

    """

    pass


class ConfigError(ToolboxError):
    """Configuration loading or validation error.

    Raised when:
    - Configuration file does not exist or cannot be read
    - Configuration file exceeds the size limit
    - Configuration data is not a YAML mapping
    - Pydantic validation of the configuration fails
    """

    pass


class TargetError(ToolboxError):
    """CLI render target resolution error.

    Raised when:
    - Target is not in 'module:attribute' form
    - Module cannot be imported or attribute does not exist
    - Resolved object is not a Template, a Template subclass, or a
      factory returning a Template

    Attributes:
        target: The target string that failed to resolve.

    """

    def __init__(self, message: str, target: str = "") -> None:
        """Initialize TargetError with message and the offending target.

        Args:
            message: Human-readable error message.
            target: Target string as given on the command line.

        """
        super().__init__(message)
        self.target = target

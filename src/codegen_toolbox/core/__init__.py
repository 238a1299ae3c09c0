"""Core types and exceptions shared across codegen-toolbox."""

from codegen_toolbox.core.exceptions import (
    ConfigError,
    TargetError,
    ToolboxError,
    TransformationError,
)
from codegen_toolbox.core.types import BuildAction, Diagnostic, DiagnosticCollection, Severity

__all__ = [
    "BuildAction",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCollection",
    "Severity",
    "TargetError",
    "ToolboxError",
    "TransformationError",
]

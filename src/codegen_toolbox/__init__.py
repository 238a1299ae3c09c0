"""codegen-toolbox - Template lifecycle controller for code generation.

Runs code generation templates, collects their diagnostics, and routes
generated text to files.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from codegen_toolbox.core.exceptions import ToolboxError, TransformationError  # noqa: E402
from codegen_toolbox.core.types import (  # noqa: E402
    BuildAction,
    Diagnostic,
    DiagnosticCollection,
    Severity,
)
from codegen_toolbox.generator import Generator  # noqa: E402
from codegen_toolbox.output.descriptor import OutputInfo  # noqa: E402
from codegen_toolbox.output.routing import (  # noqa: E402
    FileSystemRouter,
    MemoryRouter,
    OutputRouter,
)
from codegen_toolbox.template import Template  # noqa: E402

__all__ = [
    "BuildAction",
    "Diagnostic",
    "DiagnosticCollection",
    "FileSystemRouter",
    "Generator",
    "MemoryRouter",
    "OutputInfo",
    "OutputRouter",
    "Severity",
    "Template",
    "ToolboxError",
    "TransformationError",
    "__version__",
]

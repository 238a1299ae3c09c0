"""Output descriptors and routers for generated text."""

from codegen_toolbox.output.descriptor import OutputInfo
from codegen_toolbox.output.routing import (
    FileSystemRouter,
    MemoryRouter,
    OutputRouter,
    RouterCall,
    get_default_router,
    set_default_router,
)

__all__ = [
    "FileSystemRouter",
    "MemoryRouter",
    "OutputInfo",
    "OutputRouter",
    "RouterCall",
    "get_default_router",
    "set_default_router",
]

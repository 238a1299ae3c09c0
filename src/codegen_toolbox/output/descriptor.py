"""Output descriptor model.

OutputInfo tells an output router where and how a template's generated
text should be saved. It is deliberately mutable: callers (and rendering
handlers of composite generators) update it right before each render.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from codegen_toolbox.core.types import BuildAction

__all__ = ["OutputInfo"]


class OutputInfo(BaseModel):
    """Destination and placement options for generated output.

    Attributes:
        file: Destination file path. Relative paths are resolved by the
            router (against `directory`, then the router's base directory).
            None means no destination has been set.
        directory: Optional directory joined in front of a relative `file`.
        encoding: Text encoding used when writing the file.
        build_action: How a downstream build system should treat the file.
        project: Name of the project the file belongs to, if any.
        preserve_existing: If True, an existing destination is never
            overwritten, even by an unconditional persist.
        metadata: Free-form placement options passed through to routers.

    Example:
        >>> output = OutputInfo()
        >>> output.file = "models/user.py"
        >>> output.build_action = BuildAction.COMPILE

    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    file: str | None = Field(default=None, description="Destination file path")
    directory: str | None = Field(
        default=None, description="Directory joined in front of a relative file"
    )
    encoding: str = Field(default="utf-8", min_length=1, description="Output text encoding")
    build_action: BuildAction | None = Field(
        default=None, description="Build action label for the generated file"
    )
    project: str | None = Field(default=None, description="Owning project name")
    preserve_existing: bool = Field(
        default=False, description="Never overwrite an existing destination"
    )
    metadata: dict[str, str] = Field(default_factory=dict, description="Extra options")

    @field_validator("file", "directory", mode="before")
    @classmethod
    def coerce_path(cls, v: object) -> object:
        """Accept pathlib paths and store them as strings."""
        if isinstance(v, Path):
            return str(v)
        return v

    @field_validator("encoding", mode="after")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to Python codecs."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding '{v}'") from None
        return v

    def resolve(self, base_dir: Path | None = None) -> Path | None:
        """Resolve the full destination path.

        Args:
            base_dir: Directory relative destinations are resolved against.

        Returns:
            Destination path, or None if `file` is not set.

        """
        if not self.file:
            return None
        path = Path(self.file).expanduser()
        if not path.is_absolute() and self.directory:
            path = Path(self.directory).expanduser() / path
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        return path

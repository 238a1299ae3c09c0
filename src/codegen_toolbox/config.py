"""Toolbox configuration model.

Parses and validates YAML configuration for rendering runs:

    output_dir: generated
    encoding: utf-8
    log_level: INFO
    if_not_exists: false
    disabled_templates:
      - ClientTemplate
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from codegen_toolbox.core.exceptions import ConfigError
from codegen_toolbox.template import Template

logger = logging.getLogger(__name__)

# Maximum configuration file size (1MB)
MAX_CONFIG_SIZE: int = 1024 * 1024

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

__all__ = ["MAX_CONFIG_SIZE", "ToolboxConfig", "apply_config", "load_config"]


class ToolboxConfig(BaseModel):
    """Configuration for rendering runs.

    Attributes:
        output_dir: Base directory relative output paths are resolved against.
        encoding: Output encoding applied to templates. None keeps each
            template's own encoding.
        log_level: Log level used by the CLI unless overridden by flags.
        disabled_templates: Names of templates that must not be rendered.
        if_not_exists: Never overwrite existing output files.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_dir: Path | None = Field(default=None, description="Base output directory")
    encoding: str | None = Field(
        default=None, min_length=1, description="Output encoding override"
    )
    log_level: str = Field(default="WARNING", description="CLI log level")
    disabled_templates: list[str] = Field(
        default_factory=list, description="Templates that are not rendered"
    )
    if_not_exists: bool = Field(default=False, description="Never overwrite outputs")

    @field_validator("encoding", mode="after")
    @classmethod
    def validate_encoding(cls, v: str | None) -> str | None:
        """Ensure the encoding is known to Python codecs."""
        if v is None:
            return None
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding '{v}'") from None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Upper-case and check the log level name."""
        if isinstance(v, str):
            v = v.upper()
            if v not in LOG_LEVELS:
                raise ValueError(f"Invalid log level '{v}', expected one of {LOG_LEVELS}")
        return v


def load_config(path: Path) -> ToolboxConfig:
    """Load and validate toolbox configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated ToolboxConfig. An empty file yields defaults.

    Raises:
        ConfigError: On file/parse/validation errors.

    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Configuration path is not a file: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigError(f"Configuration {path} exceeds 1MB limit")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be YAML mapping, got {type(data).__name__}")

    try:
        config = ToolboxConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e

    logger.debug("Loaded configuration from %s", path)
    return config


def apply_config(template: Template, config: ToolboxConfig) -> None:
    """Apply configuration to a template before rendering.

    Disables the template if its name is listed in disabled_templates and,
    when an encoding is configured, overrides the output encoding.
    """
    if template.name in config.disabled_templates:
        logger.info("Template %s disabled by configuration", template.name)
        template.enabled = False
    if config.encoding is not None:
        template.output.encoding = config.encoding

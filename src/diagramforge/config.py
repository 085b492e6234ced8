"""Configuration management for diagramforge using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

CONFIG_FILENAME = ".diagramforge.json"


class OutputFormat(str, Enum):
    """Output format types."""
    DOT = "dot"
    PNG = "png"
    SVG = "svg"
    PDF = "pdf"


class LayoutDirection(str, Enum):
    """Default layout direction for rendered diagrams."""
    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class OutputConfig(BaseModel):
    """Output configuration section."""
    dir: str = "diagrams"
    format: OutputFormat = OutputFormat.DOT

    model_config = ConfigDict(use_enum_values=True)


class RenderConfig(BaseModel):
    """Render defaults applied when a description does not set them."""
    direction: LayoutDirection = LayoutDirection.LR
    splines: str = "ortho"
    fail_on_dangling: bool = Field(alias="failOnDangling", default=False)

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class DiagramforgeConfig(BaseModel):
    """Complete diagramforge configuration model."""
    output: OutputConfig = Field(default_factory=OutputConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> DiagramforgeConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .diagramforge.json

    Returns:
        DiagramforgeConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return DiagramforgeConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .diagramforge.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> DiagramforgeConfig:
    """Create default configuration."""
    return DiagramforgeConfig()

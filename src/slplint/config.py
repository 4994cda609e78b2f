"""Configuration management for slplint using Pydantic models."""

import json
import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slplint.exceptions import ConfigError

CONFIG_FILE_NAME = ".slplint.json"


class ValidationMode(str, Enum):
    """Document model construction strategies."""
    FAST = "fast"
    STRICT = "strict"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class DocumentConfig(BaseModel):
    """Pipeline document vocabulary."""
    discriminator_key: str = Field(alias="discriminatorKey", default="class_id")
    discriminator: str = "com-snaplogic-pipeline"
    node_section: str = Field(alias="nodeSection", default="snap_map")
    edge_section: str = Field(alias="edgeSection", default="link_map")
    metadata_section: str = Field(alias="metadataSection", default="property_map")
    layout_section: str = Field(alias="layoutSection", default="render_map")
    required_fields: list[str] = Field(alias="requiredFields", default_factory=lambda: [
        "class_version",
        "property_map",
        "snap_map",
        "link_map",
    ])
    identifier_pattern: str = Field(
        alias="identifierPattern",
        default=r"^11111111-1111-1111-1111-[0-9]{12}$",
    )

    @field_validator("identifier_pattern")
    @classmethod
    def validate_identifier_pattern(cls, v):
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"identifier_pattern is not a valid regex: {e}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class ValidationConfig(BaseModel):
    """Validation configuration section."""
    fast_referential_check: bool = Field(alias="fastReferentialCheck", default=True)
    check_layout: bool = Field(alias="checkLayout", default=True)

    model_config = ConfigDict(populate_by_name=True)


class CatalogConfig(BaseModel):
    """Snap schema catalog configuration section."""
    base_url: str = Field(alias="baseUrl", default="https://elastic.snaplogic.com")
    org: str = ""
    username: str = ""
    password: str = ""
    ttl_seconds: int = Field(alias="ttlSeconds", default=24 * 60 * 60)
    timeout: float = 30.0
    cache_file: str | None = Field(alias="cacheFile", default=None)

    @field_validator("ttl_seconds")
    @classmethod
    def validate_ttl(cls, v):
        if v <= 0:
            raise ValueError("ttl_seconds must be > 0")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    model_config = ConfigDict(populate_by_name=True)


class ScaffoldConfig(BaseModel):
    """Pipeline scaffolding configuration section."""
    pipeline_class_version: int = Field(alias="pipelineClassVersion", default=8)
    author: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class SlplintConfig(BaseModel):
    """Complete slplint configuration model."""
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> SlplintConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .slplint.json

    Returns:
        SlplintConfig: Loaded and validated configuration

    Raises:
        ConfigError: If the configuration file is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return SlplintConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ConfigError(f"Failed to load config from {config_path}: {e}")

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .slplint.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> SlplintConfig:
    """Create zero-config defaults for SnapLogic pipeline exports."""
    return SlplintConfig()

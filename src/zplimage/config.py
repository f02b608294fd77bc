"""Configuration management for zplimage."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from zplimage.converters.bitmap import DEFAULT_THRESHOLD
from zplimage.converters.dimensions import DEFAULT_WIDTH
from zplimage.converters.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class ConverterConfig(BaseModel):
    """Conversion parameters.

    Only ``width`` shapes the bitmap size; the rest tune how it prints.
    """

    width: int = Field(default=DEFAULT_WIDTH, gt=0, strict=True)
    threshold: int = Field(default=DEFAULT_THRESHOLD, ge=1, le=255, strict=True)
    darkness: int | None = Field(default=None, ge=0, le=30)
    label_offset_x: int = Field(default=0, ge=0)
    label_offset_y: int = Field(default=0, ge=0)
    uppercase_hex: bool = True

    @classmethod
    def create(cls, **values) -> "ConverterConfig":
        """Validate values, raising InvalidConfigurationError on bad input."""
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid converter configuration: {e}") from e


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="ZPLIMAGE_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("config.yaml")
    host: str = "0.0.0.0"
    port: int = 7980
    debug: bool = False
    max_upload_bytes: int = 10 * 1024 * 1024
    # Largest label width the service will render, in dots
    max_width: int = 4096
    # API key for external access (optional, if not set API is open)
    api_key: str | None = None


def load_config(config_path: Path) -> ConverterConfig:
    """Load converter defaults from a YAML file.

    A missing file yields the built-in defaults.

    Raises:
        InvalidConfigurationError: If the file is not valid YAML or holds
            out-of-range values.
    """
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return ConverterConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(f"Cannot parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"{config_path} must contain a mapping, got {type(data).__name__}")

    return ConverterConfig.create(**data)


# Global settings instance
settings = Settings()

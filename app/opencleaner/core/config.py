"""User configuration for opencleaner.

Configuration is stored in ~/.config/opencleaner/config.toml and holds
the display language, extra whitelist entries, and whether a local
snapshot is taken before every cleanup.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from opencleaner.core.paths import get_config_path
from opencleaner.models.item import Language

logger = logging.getLogger(__name__)


class OpenCleanerConfig(BaseModel):
    """Persisted opencleaner settings.

    Attributes:
        language: Language for reasons and reports.
        whitelist: Extra path substrings protected from deletion, on top
            of the built-in whitelist.
        snapshot_before_cleanup: Create a local snapshot before cleanups.
    """

    model_config = ConfigDict(extra="forbid")

    language: Annotated[
        Language,
        Field(description="Display language (en or ja)"),
    ] = Language.EN
    whitelist: Annotated[
        list[str],
        Field(description="Additional protected path substrings"),
    ] = []
    snapshot_before_cleanup: Annotated[
        bool,
        Field(description="Create a local snapshot before cleanup"),
    ] = False

    @field_validator("whitelist")
    @classmethod
    def validate_whitelist(cls, v: list[str]) -> list[str]:
        """Reject empty whitelist entries; an empty substring matches every path."""
        for entry in v:
            if not entry.strip():
                msg = "whitelist entries cannot be empty"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> OpenCleanerConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated OpenCleanerConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return OpenCleanerConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> OpenCleanerConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default OpenCleanerConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return OpenCleanerConfig()


def save_config(config: OpenCleanerConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The OpenCleanerConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(mode="json"), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def require_config(path: Path | None = None) -> OpenCleanerConfig:
    """Load configuration or exit with a helpful error message.

    A missing file yields the defaults; a broken one aborts the command.

    Args:
        path: Optional custom config path.

    Returns:
        Loaded or default OpenCleanerConfig.

    Raises:
        typer.Exit: If the config file exists but cannot be loaded.
    """
    import typer

    from opencleaner.utils.formatting import print_error, print_info

    config_path = path or get_config_path()
    try:
        return load_config_or_default(config_path)
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        print_info(f"Fix or remove {config_path} to continue.")
        raise typer.Exit(code=1) from e

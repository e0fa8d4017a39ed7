"""treefs configuration and settings.

This module provides the configuration model and I/O functions for
treefs. Configuration is stored in ~/.config/treefs/config.toml:

    driver = "local"
    root = "/srv/files"
    page_size = 100
    lock = false
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from treefs.core.lister import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from treefs.core.xdg import get_config_path
from treefs.errors import ConfigError, ConfigNotFoundError, ConfigParseError

logger = logging.getLogger(__name__)

DriverName = Literal["local"]


class TreefsConfig(BaseModel):
    """Configuration for treefs.

    Attributes:
        driver: Storage driver name.
        root: Root directory virtual paths are resolved against.
        page_size: Default number of entries per listing page (1-1000).
        lock: Default for advisory locking on reads and writes.
    """

    model_config = ConfigDict(extra="forbid")

    driver: Annotated[
        DriverName,
        Field(description="Storage driver name"),
    ] = "local"
    root: Annotated[
        Path,
        Field(default_factory=Path.cwd, description="Root directory for virtual paths"),
    ]
    page_size: Annotated[
        int,
        Field(
            ge=MIN_PAGE_SIZE,
            le=MAX_PAGE_SIZE,
            description=f"Listing page size ({MIN_PAGE_SIZE}-{MAX_PAGE_SIZE})",
        ),
    ] = DEFAULT_PAGE_SIZE
    lock: Annotated[
        bool,
        Field(description="Use advisory file locks by default"),
    ] = False

    def driver_config(self) -> dict[str, object]:
        """Settings passed to the driver's configure()."""
        return {"root": str(self.root.expanduser())}


def load_config(path: Path | None = None) -> TreefsConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated TreefsConfig object.

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
        return TreefsConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> TreefsConfig:
    """Load configuration, falling back to defaults if the file is missing.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return TreefsConfig()


def save_config(config: TreefsConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace().

    Args:
        config: The TreefsConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

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
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: TreefsConfig) -> dict[str, object]:
    """Convert TreefsConfig to a dictionary for TOML serialization.

    Only includes non-default values besides driver and root.
    """
    result: dict[str, object] = {
        "driver": config.driver,
        "root": str(config.root),
    }

    if config.page_size != DEFAULT_PAGE_SIZE:
        result["page_size"] = config.page_size

    if config.lock:
        result["lock"] = config.lock

    return result

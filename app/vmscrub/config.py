"""Cleanup configuration.

This module provides the configuration model and loader for a cleanup
run. Every setting has a default, so the configuration file is optional.

Configuration is read from /etc/vmscrub/config.toml, or from the file
named by $VMSCRUB_CONFIG or ``--config``.
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vmscrub.core.paths import get_config_path, get_env_config_path
from vmscrub.core.theme import ThemeColors

logger = logging.getLogger(__name__)

# journalctl time span: "1s", "2d", "1h 30min", ...
_TIME_SPAN_PATTERN = r"^\d+\s*[a-zA-Z]*(\s+\d+\s*[a-zA-Z]*)*$"


class CleanupConfig(BaseModel):
    """Tunable settings of a cleanup run.

    The defaults leave an Ubuntu cloud image with only its base package
    groups, root's SSH keys, and an empty journal.

    Attributes:
        base_packages: Package groups marked manual so they survive the purge.
        dependency_root: Package whose direct dependencies are also protected.
        min_uid: Accounts with a uid at or above this value are deleted.
        passwd_file: Colon-delimited account database.
        wipe_globs: Paths whose contents are removed.
        root_dir: Superuser home; emptied except for ``root_keep``.
        root_keep: Pattern (relative to root_dir) of entries kept in root_dir.
        log_globs: Log paths removed after the data wipe.
        journal_vacuum_time: Journal entries older than this are vacuumed.
        command_timeout: Per-command timeout in seconds (None = no limit).
        colors: Theme color overrides.
    """

    model_config = ConfigDict(extra="forbid")

    base_packages: Annotated[
        list[str],
        Field(min_length=1, description="Package groups to protect"),
    ] = ["ubuntu-minimal", "ubuntu-standard"]
    dependency_root: Annotated[
        str,
        Field(min_length=1, description="Package whose Depends are protected"),
    ] = "ubuntu-standard"
    min_uid: Annotated[
        int,
        Field(ge=1, description="Lowest uid of deleted accounts"),
    ] = 1000
    passwd_file: Path = Path("/etc/passwd")
    wipe_globs: list[str] = ["/home/*", "/var/tmp/*", "/tmp/*"]
    root_dir: Path = Path("/root")
    root_keep: Annotated[
        str,
        Field(min_length=1, description="Entries of root_dir that survive"),
    ] = ".ssh*"
    log_globs: list[str] = ["/var/log/*"]
    journal_vacuum_time: Annotated[
        str,
        Field(pattern=_TIME_SPAN_PATTERN, description="journalctl --vacuum-time value"),
    ] = "1s"
    command_timeout: Annotated[
        float | None,
        Field(gt=0, description="Timeout in seconds for each command"),
    ] = None
    colors: ThemeColors = ThemeColors()

    @property
    def root_keep_path(self) -> str:
        """Absolute ``find -path`` pattern of the entries kept in root_dir."""
        return f"{self.root_dir}/{self.root_keep}"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> CleanupConfig:
    """Load cleanup configuration from a TOML file.

    A missing file at the default location is not an error; the defaults
    are used. A file requested explicitly (argument or environment) must
    exist.

    Args:
        path: Path to the config file. If None, uses the default location.

    Returns:
        Validated CleanupConfig object.

    Raises:
        ConfigNotFoundError: If an explicitly requested file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    required = path is not None or get_env_config_path() is not None
    config_path = path or get_config_path()

    if not config_path.exists():
        if required:
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return CleanupConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)

    try:
        return CleanupConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

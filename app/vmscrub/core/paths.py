"""Path management for vmscrub.

The configuration lives under /etc rather than an XDG directory: the
cleanup run wipes /root, including /root/.config.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "vmscrub"

# Environment variable overriding the configuration file location
CONFIG_ENV_VAR = "VMSCRUB_CONFIG"

SYSTEM_CONFIG_PATH = Path("/etc") / APP_NAME / "config.toml"


def get_env_config_path() -> Path | None:
    """Get the configuration path requested through the environment.

    Returns:
        Path from $VMSCRUB_CONFIG, or None if unset or empty.
    """
    value = os.environ.get(CONFIG_ENV_VAR)
    if value:
        return Path(value)
    return None


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        $VMSCRUB_CONFIG if set, otherwise /etc/vmscrub/config.toml.
    """
    return get_env_config_path() or SYSTEM_CONFIG_PATH

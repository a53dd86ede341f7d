"""Well-known file locations.

User configuration follows the XDG base directory layout
(``$XDG_CONFIG_HOME/ovlspace``, default ~/.config/ovlspace). The watch
loop's runtime files live in /tmp so they vanish with the session.
"""

import os
from pathlib import Path

APP_NAME = "ovlspace"

DEFAULT_LOCK_FILE = Path("/tmp/overlay-space-watch.lock")
DEFAULT_STATE_FILE = Path("/tmp/overlay-space-watch.state")


def get_config_dir() -> Path:
    """Return the configuration directory, honouring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def get_config_path() -> Path:
    """Return the default configuration file path."""
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Return the user theme override path."""
    return get_config_dir() / "theme.toml"

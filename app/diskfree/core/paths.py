"""XDG-compliant path management for diskfree.

diskfree keeps no state between runs; the only file it ever reads from
the user's home is an optional theme override under the config directory.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "diskfree"

# Fixed location under which macOS mounts every volume
MOUNT_ROOT = Path("/Volumes")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/diskfree/ (or XDG_CONFIG_HOME/diskfree/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME

"""Elevated privilege checks.

Cleanup and relocation rewrite paths owned by root, so they refuse to
run without an effective UID of 0. Status and watch need no privilege.
"""

import os


class PrivilegeError(Exception):
    """Raised when an operation needs root but the process is unprivileged."""


def is_root() -> bool:
    """Check whether the current process runs with root privilege.

    Returns:
        True if the effective user ID is 0.
    """
    return os.geteuid() == 0


def require_root() -> None:
    """Abort the current operation unless running as root.

    Raises:
        PrivilegeError: If the effective user ID is not 0.
    """
    if not is_root():
        msg = "This tool needs root (EasyOS usually runs as root)."
        raise PrivilegeError(msg)

"""adapter between the host package manager's plugin contract and the installer."""
from .events import InstallEvent, POST_INSTALL_CMD, POST_UPDATE_CMD
from .plugin import Plugin

__all__ = [
    "InstallEvent",
    "Plugin",
    "POST_INSTALL_CMD",
    "POST_UPDATE_CMD",
]

"""
install-extension: installs the Claude Code VSCode extension from a local checkout
"""

__version__ = "1.0.0"
__author__ = "Your Name"
__email__ = "your.email@example.com"

from .installer import ExtensionInstaller
from .capabilities import ManifestEditor, InstallMode, ToolCapabilities, detect_capabilities
from .exceptions import (
    InstallationError,
    ValidationError,
    PermissionError,
    ToolNotFoundError,
    PackagingError,
)

__all__ = [
    "ExtensionInstaller",
    "ManifestEditor",
    "InstallMode",
    "ToolCapabilities",
    "detect_capabilities",
    "InstallationError",
    "ValidationError",
    "PermissionError",
    "ToolNotFoundError",
    "PackagingError",
]

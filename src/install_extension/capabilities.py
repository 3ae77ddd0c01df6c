"""
Detection of the external tools the installer can delegate to
"""

import enum
import logging
import shutil
from dataclasses import dataclass
from typing import Callable, Optional

from .constants import IDE_CLI, PACKAGING_TOOL, JSON_TOOL

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]


class ManifestEditor(enum.Enum):
    """How the manifest version field gets rewritten"""
    STRUCTURED = "jq"
    TEXTUAL = "text substitution"


class InstallMode(enum.Enum):
    """How the extension gets into the IDE"""
    PACKAGE = "vsix"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class ToolCapabilities:
    manifest_editor: ManifestEditor
    install_mode: InstallMode
    ide_cli: Optional[str]
    packaging_tool: Optional[str] = None
    json_tool: Optional[str] = None

    @property
    def has_ide_cli(self) -> bool:
        return self.ide_cli is not None


def detect_capabilities(which: Which = shutil.which) -> ToolCapabilities:
    """Probe PATH once for every external tool the run may need"""
    ide_cli = which(IDE_CLI)
    packaging_tool = which(PACKAGING_TOOL)
    json_tool = which(JSON_TOOL)

    capabilities = ToolCapabilities(
        manifest_editor=ManifestEditor.STRUCTURED if json_tool else ManifestEditor.TEXTUAL,
        install_mode=InstallMode.PACKAGE if packaging_tool else InstallMode.SYMLINK,
        ide_cli=ide_cli,
        packaging_tool=packaging_tool,
        json_tool=json_tool,
    )
    logger.debug("Detected tool capabilities: %s", capabilities)
    return capabilities

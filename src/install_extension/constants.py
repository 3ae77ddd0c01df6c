"""
Constants used throughout the install-extension tool
"""

import os

# Extension checkout layout
MANIFEST_FILE = "package.json"
NATIVE_BINARY_DIR = os.path.join("resources", "native-binary")
NATIVE_BINARY_NAME = "claude"
VSIX_PATTERN = "*.vsix"

# Manifest fallbacks when publisher/name are missing
DEFAULT_PUBLISHER = "Anthropic"
DEFAULT_EXTENSION_NAME = "claude-code"

# IDE user extensions directory, relative to the home directory
IDE_EXTENSIONS_DIR = os.path.join(".vscode", "extensions")

# External tools
IDE_CLI = "code"
PACKAGING_TOOL = "vsce"
JSON_TOOL = "jq"

# Terminal colors
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
RED = "\033[0;31m"
RESET = "\033[0m"

# Environment switches
NO_COLOR_ENV = "NO_COLOR"
DEBUG_ENV = "INSTALL_EXTENSION_DEBUG"

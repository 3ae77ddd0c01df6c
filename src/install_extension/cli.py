"""
Command-line interface for install-extension tool
"""

import os
import sys
import logging
import argparse

from . import console
from .constants import DEBUG_ENV
from .installer import ExtensionInstaller


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    return argparse.ArgumentParser(
        prog="install-extension",
        description="Install the Claude Code VSCode extension from this checkout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Run from the extension checkout (the directory holding package.json).
All parameters are prompted for:

  Claude Code version     written into package.json
  Claude binary path      symlinked to resources/native-binary/claude

The extension is packaged with 'vsce' and installed with 'code'. Without
'vsce' the checkout is linked into ~/.vscode/extensions instead.

Set INSTALL_EXTENSION_DEBUG=1 to trace the external commands being run.
        """
    )


def configure_logging() -> None:
    level = logging.DEBUG if os.environ.get(DEBUG_ENV) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Main entry point for CLI"""
    parser = create_parser()
    parser.parse_args()
    configure_logging()

    console.banner("Claude Code VSCode Extension Installer")
    print()

    installer = ExtensionInstaller()
    try:
        success = installer.install()
    except KeyboardInterrupt:
        print()
        console.error("Installation interrupted")
        sys.exit(1)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

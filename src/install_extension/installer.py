"""
Main installer functionality for install-extension tool
"""

import os
import stat
import shutil
import logging
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from . import console
from .capabilities import InstallMode, ToolCapabilities, detect_capabilities
from .constants import (
    MANIFEST_FILE,
    NATIVE_BINARY_DIR,
    NATIVE_BINARY_NAME,
    VSIX_PATTERN,
    DEFAULT_PUBLISHER,
    DEFAULT_EXTENSION_NAME,
    IDE_EXTENSIONS_DIR,
    IDE_CLI,
    PACKAGING_TOOL,
    YELLOW,
)
from .exceptions import (
    InstallationError,
    ValidationError,
    PermissionError,
    ToolNotFoundError,
    PackagingError,
)
from .manifest import check_manifest, load_metadata, update_version

logger = logging.getLogger(__name__)

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class ExtensionInstaller:
    """Wires a local Claude binary into the extension checkout and installs it"""

    def __init__(self, extension_dir: Optional[Union[str, Path]] = None,
                 home_dir: Optional[Union[str, Path]] = None,
                 which: Optional[Callable[[str], Optional[str]]] = None) -> None:
        self.extension_dir = Path(extension_dir) if extension_dir else Path.cwd()
        self.home_dir = Path(home_dir) if home_dir else Path.home()
        self.which = which or shutil.which

    @property
    def manifest_path(self) -> Path:
        return self.extension_dir / MANIFEST_FILE

    @property
    def binary_link(self) -> Path:
        return self.extension_dir / NATIVE_BINARY_DIR / NATIVE_BINARY_NAME

    @property
    def extensions_root(self) -> Path:
        return self.home_dir / IDE_EXTENSIONS_DIR

    # Input acquisition

    def prompt_version(self) -> str:
        try:
            answer = input("Enter the Claude Code version (e.g., 2.0.29): ")
        except EOFError:
            answer = ""
        return self.validate_version(answer)

    def validate_version(self, version: str) -> str:
        version = version.strip()
        if not version:
            raise ValidationError("Claude version is required")
        return version

    def prompt_binary_path(self) -> Path:
        print()
        print("Enter the path to your Node.js Claude binary to symlink:")
        print("(e.g., /usr/local/bin/claude or ~/bin/claude)")
        try:
            answer = input("Claude binary path: ")
        except EOFError:
            answer = ""
        return self.expand_binary_path(answer)

    def expand_binary_path(self, raw_path: Union[str, Path]) -> Path:
        """Expand a leading ~ to the home directory and make the path absolute"""
        raw = str(raw_path).strip()
        if not raw:
            raise ValidationError("Claude binary path is required")

        if raw == "~" or raw.startswith("~/"):
            path = self.home_dir / raw[2:]
        else:
            path = Path(os.path.expanduser(raw))
        return path.absolute()

    # Binary validation

    def validate_binary(self, binary_path: Path) -> Path:
        """Require an existing regular file, offering to fix a missing execute bit"""
        if not binary_path.is_file():
            raise ValidationError(f"Binary not found at {binary_path}")

        if not os.access(binary_path, os.X_OK):
            console.warning(f"{binary_path} is not executable")
            try:
                response = input("Do you want to make it executable? (y/n): ")
            except EOFError:
                response = ""
            if response in ("y", "Y"):
                self.make_executable(binary_path)
                console.success("Made binary executable")
            else:
                print("Continuing with a non-executable binary")
        return binary_path

    def make_executable(self, binary_path: Path) -> None:
        try:
            mode = binary_path.stat().st_mode
            binary_path.chmod(mode | EXECUTE_BITS)
        except OSError as e:
            raise PermissionError(f"Cannot make {binary_path} executable: {e}")

    # Preconditions

    def require_ide_cli(self, capabilities: ToolCapabilities) -> Optional[str]:
        if not capabilities.has_ide_cli:
            raise ToolNotFoundError(
                f"VSCode CLI '{IDE_CLI}' command not found. "
                f"Please ensure VSCode is installed and the '{IDE_CLI}' command is in your PATH. "
                "You can install it from VSCode: Cmd+Shift+P -> "
                "'Shell Command: Install code command in PATH'"
            )
        return capabilities.ide_cli

    # Filesystem mutation

    def update_manifest(self, version: str, capabilities: ToolCapabilities) -> None:
        console.step(f"Step 1: Updating {MANIFEST_FILE} with version {version}")
        update_version(self.manifest_path, version, capabilities.manifest_editor,
                       jq=capabilities.json_tool)
        console.success(f"Version updated using {capabilities.manifest_editor.value}")

    def create_binary_symlink(self, binary_path: Path) -> Path:
        """Replace whatever sits at the resource path with a link to the binary"""
        console.step("Step 2: Creating symlink to Claude binary")
        link = self.binary_link

        try:
            link.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            if e.errno == 13:  # EACCES
                raise PermissionError(f"Permission denied creating directory: {e}")
            raise InstallationError(f"Failed to create directory: {e}")

        if link.is_symlink() or link.exists():
            if link.is_dir() and not link.is_symlink():
                raise ValidationError(f"{link} is a directory, refusing to replace it")
            link.unlink()
            print("Removed existing file/symlink")

        link.symlink_to(binary_path)

        if not link.is_symlink():
            raise ValidationError("Failed to create symlink")

        console.success(f"Symlink created: {NATIVE_BINARY_DIR}/{NATIVE_BINARY_NAME} -> {binary_path}")
        return link

    # Packaging / installation

    def run_tool(self, command: List[str]) -> None:
        logger.debug("Running %s in %s", command, self.extension_dir)
        try:
            subprocess.run(command, cwd=self.extension_dir, check=True)
        except subprocess.CalledProcessError as e:
            raise PackagingError(
                f"'{Path(command[0]).name}' exited with status {e.returncode}"
            )
        except OSError as e:
            raise PackagingError(f"Cannot run '{command[0]}': {e}")

    def vsix_snapshot(self) -> Dict[Path, int]:
        """Modification times of the packaged extensions already in the checkout"""
        return {p: p.stat().st_mtime_ns
                for p in self.extension_dir.glob(VSIX_PATTERN) if p.is_file()}

    def find_latest_vsix(self, before: Optional[Dict[Path, int]] = None) -> Optional[Path]:
        """Most recently modified packaged extension, ignoring ones unchanged since `before`"""
        before = before or {}
        candidates = [p for p, mtime in self.vsix_snapshot().items()
                      if before.get(p) != mtime]
        if not candidates:
            return None
        return max(candidates, key=lambda p: p.stat().st_mtime_ns)

    def package_and_install(self, capabilities: ToolCapabilities) -> Path:
        print("Packaging extension with vsce...")
        existing = self.vsix_snapshot()
        self.run_tool([capabilities.packaging_tool or PACKAGING_TOOL,
                       "package", "--no-dependencies"])

        vsix = self.find_latest_vsix(existing)
        if vsix is None:
            raise PackagingError("Failed to create VSIX package")
        console.success(f"Extension packaged: {vsix.name}")

        print("Installing extension from VSIX...")
        self.run_tool([capabilities.ide_cli or IDE_CLI,
                       "--install-extension", str(vsix), "--force"])
        console.success("Extension installed successfully!")
        return vsix

    def extension_id(self, version: str) -> str:
        """Directory name the IDE expects: <publisher>.<name>-<version>"""
        metadata = load_metadata(self.manifest_path)
        publisher = metadata.get("publisher") or DEFAULT_PUBLISHER
        name = metadata.get("name") or DEFAULT_EXTENSION_NAME
        return f"{publisher}.{name}-{version}"

    def extension_target(self, version: str) -> Path:
        """Extension directory entry, confined to the IDE extensions directory"""
        extension_id = self.extension_id(version)

        # Prevent directory traversal out of the extensions directory
        if '/' in extension_id or '\\' in extension_id or '..' in extension_id:
            raise ValidationError(
                f"Invalid extension directory name '{extension_id}': "
                "contains path separators"
            )

        target = self.extensions_root / extension_id
        if target.parent.resolve() != self.extensions_root.resolve():
            raise ValidationError(
                f"Target path {target} is outside allowed directory {self.extensions_root}"
            )
        return target

    def symlink_install(self, version: str) -> Path:
        """Link the checkout straight into the IDE extensions directory"""
        console.warning("vsce not found. Installing extension from directory...")
        print("Note: For production use, install vsce with: npm install -g @vscode/vsce")

        target = self.extension_target(version)
        target.parent.mkdir(parents=True, exist_ok=True)

        if target.is_symlink() or target.is_file():
            print("Removing existing extension...")
            target.unlink()
        elif target.is_dir():
            print("Removing existing extension...")
            shutil.rmtree(target)

        target.symlink_to(self.extension_dir.resolve(), target_is_directory=True)
        console.success("Extension linked to VSCode extensions directory")
        return target

    def install_extension(self, version: str, capabilities: ToolCapabilities) -> Path:
        console.step("Step 3: Installing extension to VSCode")
        if capabilities.install_mode is InstallMode.PACKAGE:
            return self.package_and_install(capabilities)
        return self.symlink_install(version)

    # Orchestration

    def report(self, version: str, binary_path: Path) -> None:
        print()
        console.banner("Installation Complete!")
        print()
        print(f"Extension version: {version}")
        print(f"Claude binary: {binary_path}")
        print()
        print(console.colorize("Next steps:", YELLOW))
        print("1. Restart VSCode for the changes to take effect")
        print("2. Open the Command Palette (Cmd+Shift+P / Ctrl+Shift+P)")
        print("3. Search for 'Claude Code' to start using the extension")

    def install(self, version: Optional[str] = None,
                binary_path: Optional[Union[str, Path]] = None) -> bool:
        """
        Run the whole installation sequence.

        Inputs not supplied are prompted for. Every precondition (inputs,
        binary, required tools, manifest) is checked before the manifest or
        the symlink is touched; a failure after that point leaves earlier
        changes in place.
        """
        try:
            if version is None:
                version = self.prompt_version()
            else:
                version = self.validate_version(version)

            if binary_path is None:
                binary = self.prompt_binary_path()
            else:
                binary = self.expand_binary_path(binary_path)
            self.validate_binary(binary)

            capabilities = detect_capabilities(self.which)
            self.require_ide_cli(capabilities)
            check_manifest(self.manifest_path, capabilities.manifest_editor)
            if capabilities.install_mode is InstallMode.SYMLINK:
                self.extension_target(version)

            self.update_manifest(version, capabilities)
            self.create_binary_symlink(binary)
            self.install_extension(version, capabilities)

            self.report(version, binary)
            return True

        except InstallationError as e:
            console.error(f"Installation failed: {e}")
            return False
        except OSError as e:
            console.error(f"Installation failed: {e}")
            return False
        except Exception as e:
            console.error(f"Unexpected error during installation: {e}")
            return False

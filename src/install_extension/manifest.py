"""
Manifest (package.json) version editing
"""

import os
import re
import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

from .capabilities import ManifestEditor
from .constants import JSON_TOOL
from .exceptions import InstallationError, ValidationError

logger = logging.getLogger(__name__)

# Same pattern the sed fallback used: greedy, one line at a time
VERSION_PATTERN = re.compile(r'"version": ".*"')


def load_metadata(manifest_path: Path) -> Dict[str, Any]:
    """Parse the manifest, returning an empty mapping if it is not valid JSON"""
    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.debug("Manifest %s is not valid JSON: %s", manifest_path, e)
        return {}
    except OSError as e:
        raise ValidationError(f"Cannot read manifest {manifest_path}: {e}")
    return data if isinstance(data, dict) else {}


def check_manifest(manifest_path: Path, editor: ManifestEditor) -> None:
    """Verify the manifest can be edited with the selected editor"""
    if not manifest_path.is_file():
        raise ValidationError(f"Manifest not found: {manifest_path}")

    if editor is ManifestEditor.TEXTUAL:
        with open(manifest_path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
        if not VERSION_PATTERN.search(content):
            raise ValidationError(
                f'No "version": "..." field found in {manifest_path}'
            )


def _replace_atomically(manifest_path: Path, content: str) -> None:
    temp_path = manifest_path.with_name(manifest_path.name + '.tmp')
    try:
        with open(temp_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        os.replace(temp_path, manifest_path)
    except OSError:
        try:
            temp_path.unlink()
        except OSError:
            pass
        raise


def set_version_structured(manifest_path: Path, version: str,
                           jq: Optional[str] = None) -> None:
    """Set the version field by running jq over the manifest"""
    command = [jq or JSON_TOOL, '--arg', 'version', version, '.version = $version',
               str(manifest_path)]
    logger.debug("Running %s", command)
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        raise InstallationError(
            f"{JSON_TOOL} failed to update {manifest_path}: {(e.stderr or '').strip()}"
        )
    _replace_atomically(manifest_path, result.stdout)


def set_version_textual(manifest_path: Path, version: str) -> int:
    """
    Rewrite every '"version": "..."' occurrence in place.

    Only the exact '"version": "' spelling is recognised and any nested
    version keys are rewritten as well.
    """
    with open(manifest_path, 'r', encoding='utf-8', newline='') as f:
        content = f.read()

    replacement = f'"version": "{version}"'
    updated, count = VERSION_PATTERN.subn(lambda _: replacement, content)
    if count == 0:
        raise ValidationError(f'No "version": "..." field found in {manifest_path}')
    if count > 1:
        logger.debug("Replaced %d version fields in %s", count, manifest_path)

    _replace_atomically(manifest_path, updated)
    return count


def update_version(manifest_path: Path, version: str, editor: ManifestEditor,
                   jq: Optional[str] = None) -> None:
    """Set the manifest version using the selected editor"""
    if editor is ManifestEditor.STRUCTURED:
        set_version_structured(manifest_path, version, jq)
    else:
        set_version_textual(manifest_path, version)

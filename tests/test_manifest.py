#!/usr/bin/env python3
"""
Test suite for manifest version editing
"""

import pytest
import json
import os
import sys
import shutil
import subprocess
from unittest.mock import patch

# Add the parent directory to the path to import our module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.install_extension import ManifestEditor, InstallationError, ValidationError
from src.install_extension.manifest import (
    check_manifest,
    load_metadata,
    set_version_structured,
    set_version_textual,
    update_version,
)


MANIFEST = """{
  "name": "claude-code",
  "displayName": "Claude Code for VS Code",
  "publisher": "Anthropic",
  "version": "1.0.0",
  "engines": {
    "vscode": "^1.94.0"
  },
  "main": "./extension.js"
}
"""


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "package.json"
    path.write_text(MANIFEST)
    return path


class TestTextualEdit:
    """Test the text substitution used when jq is unavailable"""

    def test_only_version_changes(self, manifest):
        count = set_version_textual(manifest, "2.0.29")

        assert count == 1
        assert manifest.read_text() == MANIFEST.replace('"1.0.0"', '"2.0.29"')

    def test_rewrites_every_version_line(self, tmp_path):
        """Nested version keys match the same pattern and are rewritten too"""
        path = tmp_path / "package.json"
        path.write_text('{\n  "version": "1.0.0",\n  "dep": {\n    "version": "3.1.0"\n  }\n}\n')

        count = set_version_textual(path, "2.0.0")

        assert count == 2
        assert "3.1.0" not in path.read_text()

    def test_version_is_written_verbatim(self, manifest):
        set_version_textual(manifest, r"2.0.0-\g<0>")

        assert '"version": "2.0.0-\\g<0>"' in manifest.read_text()

    def test_compact_spelling_not_recognised(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "x", "version":"1.0.0"}')

        with pytest.raises(ValidationError, match="No \"version\""):
            set_version_textual(path, "2.0.0")

        assert path.read_text() == '{"name": "x", "version":"1.0.0"}'

    def test_preserves_line_endings(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_bytes(b'{\r\n  "version": "1.0.0"\r\n}\r\n')

        set_version_textual(path, "2.0.0")

        assert path.read_bytes() == b'{\r\n  "version": "2.0.0"\r\n}\r\n'

    def test_no_temp_file_left_behind(self, manifest):
        set_version_textual(manifest, "2.0.0")

        assert sorted(p.name for p in manifest.parent.iterdir()) == ["package.json"]


class TestStructuredEdit:
    """Test the jq-backed edit"""

    def test_writes_jq_output(self, manifest):
        rewritten = '{\n  "name": "claude-code",\n  "version": "2.0.29"\n}\n'
        completed = subprocess.CompletedProcess([], 0, stdout=rewritten, stderr="")

        with patch('src.install_extension.manifest.subprocess.run',
                   return_value=completed) as mock_run:
            set_version_structured(manifest, "2.0.29", jq="/usr/bin/jq")

        command = mock_run.call_args[0][0]
        assert command == ["/usr/bin/jq", "--arg", "version", "2.0.29",
                           ".version = $version", str(manifest)]
        assert manifest.read_text() == rewritten

    def test_jq_failure(self, manifest):
        failure = subprocess.CalledProcessError(5, ["jq"], stderr="parse error\n")

        with patch('src.install_extension.manifest.subprocess.run', side_effect=failure):
            with pytest.raises(InstallationError, match="jq failed to update"):
                set_version_structured(manifest, "2.0.29")

        assert manifest.read_text() == MANIFEST

    @pytest.mark.skipif(shutil.which("jq") is None, reason="jq not installed")
    def test_real_jq_keeps_other_fields(self, manifest):
        original = json.loads(MANIFEST)

        set_version_structured(manifest, "2.0.29", jq=shutil.which("jq"))

        updated = json.loads(manifest.read_text())
        assert updated.pop("version") == "2.0.29"
        original.pop("version")
        assert updated == original


class TestUpdateVersion:
    """Test editor dispatch"""

    def test_textual_dispatch(self, manifest):
        with patch('src.install_extension.manifest.set_version_structured') as structured:
            update_version(manifest, "3.0.0", ManifestEditor.TEXTUAL)

        structured.assert_not_called()
        assert '"version": "3.0.0"' in manifest.read_text()

    def test_structured_dispatch(self, manifest):
        with patch('src.install_extension.manifest.set_version_structured') as structured:
            update_version(manifest, "3.0.0", ManifestEditor.STRUCTURED, jq="/opt/jq")

        structured.assert_called_once_with(manifest, "3.0.0", "/opt/jq")


class TestCheckManifest:
    """Test manifest preconditions"""

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(ValidationError, match="Manifest not found"):
            check_manifest(tmp_path / "package.json", ManifestEditor.STRUCTURED)

    def test_textual_requires_version_field(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "claude-code"}')

        with pytest.raises(ValidationError):
            check_manifest(path, ManifestEditor.TEXTUAL)

        # jq adds the key itself
        check_manifest(path, ManifestEditor.STRUCTURED)

    def test_valid_manifest(self, manifest):
        check_manifest(manifest, ManifestEditor.TEXTUAL)


class TestLoadMetadata:
    """Test manifest metadata reading"""

    def test_reads_fields(self, manifest):
        metadata = load_metadata(manifest)

        assert metadata["publisher"] == "Anthropic"
        assert metadata["name"] == "claude-code"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("{'invalid': json}")

        assert load_metadata(path) == {}

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("[1, 2, 3]")

        assert load_metadata(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Cannot read manifest"):
            load_metadata(tmp_path / "package.json")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

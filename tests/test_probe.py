"""Unit tests for local tool version probing."""

import logging
import shutil
import subprocess
import sys

import pytest

from mcp_tools.exceptions import MalformedVersionError, ProbeError
from tools.probe import SemanticVersion, VersionProbe, extract_version_token, parse_version


class TestParseVersion:
    """Test version string parsing."""

    def test_plain_version(self):
        """Test a dotted three-part version."""
        assert parse_version("3.3.0") == SemanticVersion(3, 3, 0)

    def test_prerelease_suffix_is_ignored(self):
        """Test that segments after the third are ignored."""
        assert parse_version("0.25.0-rc1") == SemanticVersion(0, 25, 0)

    def test_build_metadata_separator(self):
        """Test '+' splits segments like '.' and '-'."""
        assert parse_version("1+84-2") == SemanticVersion(1, 84, 2)

    def test_four_part_version(self):
        """Test Xtensa toolchain style four-part versions."""
        assert parse_version("1.84.0.0") == SemanticVersion(1, 84, 0)

    def test_large_components_are_accepted(self):
        """Test components are not limited to eight bits."""
        assert parse_version("1.300.0") == SemanticVersion(1, 300, 0)

    @pytest.mark.parametrize("text", ["3.3", "1", "", "nightly"])
    def test_too_few_segments(self, text):
        """Test fewer than three segments is malformed."""
        with pytest.raises(MalformedVersionError):
            parse_version(text)

    @pytest.mark.parametrize("text", ["1.x.0", "1..0", "v1.2.3", "1.2.-3", "1. 2.3"])
    def test_non_numeric_segment(self, text):
        """Test a segment that is not an unsigned integer is malformed."""
        with pytest.raises(MalformedVersionError) as exc_info:
            parse_version(text)
        assert exc_info.value.text == text

    def test_malformed_is_probe_error(self):
        """Test MalformedVersionError belongs to the probe error family."""
        with pytest.raises(ProbeError):
            parse_version("a.b.c")

    def test_str_formats_dotted(self):
        """Test SemanticVersion renders as major.minor.patch."""
        assert str(SemanticVersion(1, 84, 0)) == "1.84.0"

    def test_version_is_immutable(self):
        """Test SemanticVersion cannot be changed once parsed."""
        version = parse_version("3.3.0")
        with pytest.raises(AttributeError):
            version.major = 4


class TestExtractVersionToken:
    """Test picking the version token from tool output."""

    def test_second_token(self):
        """Test cargo-style output with trailing commit info."""
        assert extract_version_token("cargo 1.84.0 (66221abde 2024-11-19)\n") == "1.84.0"

    def test_single_token(self):
        """Test output with only a program name."""
        assert extract_version_token("espflash\n") is None

    def test_empty_output(self):
        """Test empty output."""
        assert extract_version_token("") is None

    def test_token_may_come_from_second_line(self):
        """Test whitespace splitting spans the whole output."""
        assert extract_version_token("probe-rs\n0.25.0\n") == "0.25.0"


class TestVersionProbe:
    """Test running tools and parsing their output."""

    def test_probe_success(self, fake_tools):
        """Test a tool printing a valid version."""
        fake_tools["espflash"] = "espflash 3.3.0\n"
        assert VersionProbe().probe("espflash") == SemanticVersion(3, 3, 0)

    def test_command_line(self, fake_tools):
        """Test leading arguments come before --version."""
        fake_tools["cargo"] = "cargo 1.84.0 (66221abde 2024-11-19)\n"
        VersionProbe().probe("cargo", ("+esp",))
        assert fake_tools["__calls__"] == [["cargo", "+esp", "--version"]]

    def test_timeout_is_passed(self, monkeypatch):
        """Test the configured timeout reaches subprocess.run."""
        seen = {}

        def fake_run(cmd, **kwargs):
            seen.update(kwargs)
            return subprocess.CompletedProcess(cmd, 0, stdout=b"probe-rs 0.25.0", stderr=b"")

        monkeypatch.setattr(subprocess, "run", fake_run)
        VersionProbe(timeout=5).probe("probe-rs")
        assert seen["timeout"] == 5
        assert seen["capture_output"] is True
        assert "text" not in seen

    def test_missing_binary_for_real(self):
        """Test probing a command that does not exist returns None."""
        assert VersionProbe().probe("esp-toolcheck-no-such-tool-4f1c") is None

    def test_missing_binary(self, fake_tools):
        """Test spawn failure returns None."""
        assert VersionProbe().probe("probe-rs") is None

    def test_permission_denied(self, fake_tools):
        """Test permission errors return None."""
        fake_tools["espflash"] = PermissionError(13, "Permission denied")
        assert VersionProbe().probe("espflash") is None

    def test_non_zero_exit(self, fake_tools):
        """Test a failing command returns None even if it printed a version."""
        fake_tools["cargo"] = (1, "cargo 1.84.0\n")
        assert VersionProbe().probe("cargo", ("+esp",)) is None

    def test_timeout_expired(self, fake_tools, test_logger, caplog):
        """Test a hanging tool returns None with a warning."""
        fake_tools["espflash"] = subprocess.TimeoutExpired(["espflash", "--version"], 30)
        with caplog.at_level(logging.WARNING):
            assert VersionProbe(logger=test_logger).probe("espflash") is None
        assert "timed out" in caplog.text

    def test_undecodable_output(self, fake_tools):
        """Test output that is not UTF-8 returns None."""
        fake_tools["espflash"] = b"espflash \xff3.3.0\n"
        assert VersionProbe().probe("espflash") is None

    def test_no_version_token(self, fake_tools):
        """Test output with only a banner returns None."""
        fake_tools["espflash"] = "espflash\n"
        assert VersionProbe().probe("espflash") is None

    def test_malformed_output_is_missing_with_diagnostic(self, fake_tools, test_logger, caplog):
        """Test unparseable output returns None and logs a warning."""
        fake_tools["probe-rs"] = "probe-rs unknown-build\n"
        with caplog.at_level(logging.WARNING):
            assert VersionProbe(logger=test_logger).probe("probe-rs") is None
        assert "probe-rs --version" in caplog.text
        assert "unknown-build" in caplog.text

    def test_probe_without_logger(self, fake_tools):
        """Test malformed output without a logger still returns None."""
        fake_tools["probe-rs"] = "probe-rs 0.x"
        assert VersionProbe().probe("probe-rs") is None


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
class TestVersionProbeScripts:
    """Test probing real executables."""

    def _script(self, tmp_path, body):
        script = tmp_path / "fakeflash"
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(0o755)
        return str(script)

    def test_binary_stderr_is_ignored(self, tmp_path):
        """Test non UTF-8 bytes on stderr do not hide a valid version."""
        script = self._script(tmp_path, "echo 'fakeflash 3.3.0'\nprintf '\\377\\376 warn\\n' >&2")
        assert VersionProbe().probe(script) == SemanticVersion(3, 3, 0)

    def test_binary_stdout_is_missing(self, tmp_path):
        """Test non UTF-8 bytes on stdout make the tool unusable."""
        script = self._script(tmp_path, "printf 'fakeflash \\3773.3.0\\n'")
        assert VersionProbe().probe(script) is None

    def test_script_arguments(self, tmp_path):
        """Test leading arguments and --version reach the executable."""
        script = self._script(tmp_path, 'echo "fakeflash $1 $2"')
        assert VersionProbe().probe(script, ("1.2.3",)) == SemanticVersion(1, 2, 3)


@pytest.mark.toolchain
def test_installed_espflash():
    """Probe a real espflash installation (select with '-m toolchain')."""
    if shutil.which("espflash") is None:
        pytest.skip("espflash is not installed")
    version = VersionProbe().probe("espflash")
    assert version is not None
    assert version.major >= 1

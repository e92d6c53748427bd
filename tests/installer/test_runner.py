"""
Unit tests for command execution.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from bootstrapkit.core.exceptions import ConfigurationError, ExecutionError
from bootstrapkit.core.platform import PlatformInfo
from bootstrapkit.installer.runner import exec_command, executable_path, split_command

TOOL_DIR = Path("/cache/my-app/1.0.0")


def completed(returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestSplitCommand:
    """Test split_command function."""

    def test_simple(self):
        assert split_command("my_app --key val") == ("my_app", ["--key", "val"])

    def test_quoted_arguments(self):
        assert split_command('my_app --msg "hello world"') == (
            "my_app",
            ["--msg", "hello world"],
        )

    def test_no_arguments(self):
        assert split_command("my_app") == ("my_app", [])

    @pytest.mark.parametrize("command", ["", "   ", '""'])
    def test_empty(self, command):
        with pytest.raises(ExecutionError, match="Invalid command"):
            split_command(command)

    def test_unbalanced_quotes(self):
        with pytest.raises(ExecutionError, match="Invalid command"):
            split_command('my_app "unterminated')


class TestExecutablePath:
    """Test executable_path function."""

    @pytest.mark.parametrize("os_name", ["linux", "macos"])
    def test_posix(self, os_name):
        assert executable_path(TOOL_DIR, "my_app", PlatformInfo(os_name, "x64")) == (
            TOOL_DIR / "my_app"
        )

    def test_windows(self):
        assert executable_path(TOOL_DIR, "my_app", PlatformInfo("windows", "x64")) == (
            TOOL_DIR / "my_app.exe"
        )

    @pytest.mark.parametrize("os_name", ["linux", "macos", "windows"])
    def test_platform_suffix(self, os_name):
        platform = PlatformInfo(os_name, "arm64")

        assert executable_path(TOOL_DIR, "my_app", platform).name == (
            f"my_app{platform.executable_suffix()}"
        )

    def test_unsupported(self):
        with pytest.raises(ConfigurationError, match="Unsupported runner OS"):
            executable_path(TOOL_DIR, "my_app", PlatformInfo("android", "arm64"))


class TestExecCommand:
    """Test exec_command function."""

    @pytest.mark.parametrize(
        "os_name,binary",
        [("linux", "my_app"), ("macos", "my_app"), ("windows", "my_app.exe")],
    )
    def test_runs_binary_from_path(self, os_name, binary):
        with patch(
            "bootstrapkit.installer.runner.subprocess.run", return_value=completed()
        ) as mock_run:
            assert exec_command("my_app --key val", TOOL_DIR, PlatformInfo(os_name, "x64")) == 0

        mock_run.assert_called_once_with(
            [str(TOOL_DIR / binary), "--key", "val"], check=False
        )

    def test_detects_platform(self, monkeypatch):
        monkeypatch.setenv("RUNNER_OS", "Windows")
        monkeypatch.setenv("RUNNER_ARCH", "X64")

        with patch(
            "bootstrapkit.installer.runner.subprocess.run", return_value=completed()
        ) as mock_run:
            exec_command("my_app", TOOL_DIR)

        assert mock_run.call_args.args[0] == [str(TOOL_DIR / "my_app.exe")]

    def test_invalid(self):
        """Test nothing is executed for unsupported OS or empty commands."""
        with patch("bootstrapkit.installer.runner.subprocess.run") as mock_run:
            with pytest.raises(ConfigurationError):
                exec_command("my_app", TOOL_DIR, PlatformInfo("android", "x64"))
            with pytest.raises(ExecutionError):
                exec_command("", TOOL_DIR, PlatformInfo("linux", "x64"))

        mock_run.assert_not_called()

    def test_non_zero_exit(self):
        with patch(
            "bootstrapkit.installer.runner.subprocess.run", return_value=completed(3)
        ):
            with pytest.raises(ExecutionError) as exc_info:
                exec_command("my_app", TOOL_DIR, PlatformInfo("linux", "x64"))

        assert exc_info.value.exit_code == 3

    def test_missing_executable(self):
        with patch(
            "bootstrapkit.installer.runner.subprocess.run",
            side_effect=FileNotFoundError("no such file"),
        ):
            with pytest.raises(ExecutionError, match="Failed to run"):
                exec_command("my_app", TOOL_DIR, PlatformInfo("linux", "x64"))

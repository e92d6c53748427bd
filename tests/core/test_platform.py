"""
Unit tests for platform detection.
"""

from unittest.mock import patch

import pytest

from bootstrapkit.core.platform import (
    PlatformInfo,
    _normalize_architecture,
    _normalize_os,
    detect_platform,
    is_supported_platform,
    platform_from_environ,
)


class TestPlatformInfo:
    """Test PlatformInfo dataclass."""

    def test_platform_string(self):
        assert PlatformInfo("linux", "x64").platform_string() == "linux-x64"
        assert str(PlatformInfo("macos", "arm64")) == "macos-arm64"

    def test_executable_suffix(self):
        assert PlatformInfo("windows", "x64").executable_suffix() == ".exe"
        assert PlatformInfo("linux", "x64").executable_suffix() == ""

    def test_frozen(self):
        info = PlatformInfo("linux", "x64")
        with pytest.raises(AttributeError):
            info.os = "windows"


class TestNormalization:
    """Test OS and architecture normalization."""

    @pytest.mark.parametrize(
        "system,expected",
        [
            ("Linux", "linux"),
            ("Darwin", "macos"),
            ("macOS", "macos"),
            ("Windows", "windows"),
            ("Android", "android"),
        ],
    )
    def test_os(self, system, expected):
        assert _normalize_os(system) == expected

    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("x86_64", "x64"),
            ("AMD64", "x64"),
            ("X64", "x64"),
            ("aarch64", "arm64"),
            ("ARM64", "arm64"),
            ("i686", "x86"),
            ("X86", "x86"),
            ("armv7l", "arm"),
            ("ARM", "arm"),
            ("riscv64", "riscv64"),
        ],
    )
    def test_architecture(self, machine, expected):
        assert _normalize_architecture(machine) == expected


class TestPlatformFromEnviron:
    """Test runner variable handling."""

    def test_runner_variables(self):
        info = platform_from_environ({"RUNNER_OS": "macOS", "RUNNER_ARCH": "ARM64"})

        assert info == PlatformInfo("macos", "arm64")

    def test_falls_back_to_interpreter(self):
        with patch("platform.system", return_value="Linux"), patch(
            "platform.machine", return_value="x86_64"
        ):
            assert platform_from_environ({}) == PlatformInfo("linux", "x64")

    def test_unknown_values_kept(self):
        info = platform_from_environ({"RUNNER_OS": "android", "RUNNER_ARCH": "x16"})

        assert info == PlatformInfo("android", "x16")
        assert is_supported_platform(info) is False


class TestDetectPlatform:
    """Test detect_platform caching."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RUNNER_OS", "Windows")
        monkeypatch.setenv("RUNNER_ARCH", "X86")

        assert detect_platform() == PlatformInfo("windows", "x86")

    def test_cached(self, monkeypatch):
        monkeypatch.setenv("RUNNER_OS", "Linux")
        monkeypatch.setenv("RUNNER_ARCH", "X64")
        first = detect_platform()

        monkeypatch.setenv("RUNNER_OS", "Windows")

        assert detect_platform() is first

    def test_supported(self):
        assert is_supported_platform(PlatformInfo("linux", "arm")) is True

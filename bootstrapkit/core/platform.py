"""
Platform detection for BootstrapKit.

This module detects the current operating system and CPU architecture so the
matching prebuilt release asset can be selected.

Values are normalized to the names used by GitHub Actions runners:
- OS: 'linux', 'macos', 'windows'
- Architecture: 'x86', 'x64', 'arm', 'arm64'

The ``RUNNER_OS`` and ``RUNNER_ARCH`` environment variables take precedence
over the values reported by the interpreter, which lets CI runners (and
tests) pin the platform explicitly.

Usage:
    from bootstrapkit.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"OS: {platform_info.os}")
    print(f"Architecture: {platform_info.arch}")
"""

import functools
import os
import platform
from dataclasses import dataclass
from typing import Mapping, Optional

SUPPORTED_OS = ("linux", "macos", "windows")
SUPPORTED_ARCH = ("x86", "x64", "arm", "arm64")


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform descriptor used for asset selection.

    Attributes:
        os: Operating system ('linux', 'macos', 'windows') or the raw
            lowercase name of an unrecognized system
        arch: CPU architecture ('x86', 'x64', 'arm', 'arm64') or the raw
            lowercase name of an unrecognized machine
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo('linux', 'x64').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def executable_suffix(self) -> str:
        """Suffix appended to executable names on this platform."""
        return ".exe" if self.os == "windows" else ""

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo instance with detected platform information

    Example:
        >>> platform_info = detect_platform()
        >>> print(f"Running on {platform_info.platform_string()}")
        Running on linux-x64
    """
    return platform_from_environ(os.environ)


def platform_from_environ(environ: Mapping[str, str]) -> PlatformInfo:
    """
    Build platform information honouring runner overrides in ``environ``.

    Args:
        environ: Environment mapping (usually ``os.environ``)

    Returns:
        PlatformInfo for the given environment
    """
    os_name = _normalize_os(environ.get("RUNNER_OS") or platform.system())
    arch = _normalize_architecture(environ.get("RUNNER_ARCH") or platform.machine())

    return PlatformInfo(os=os_name, arch=arch)


def _normalize_os(system: str) -> str:
    """
    Normalize an operating system name.

    Returns:
        'windows', 'linux', 'macos', or the lowercase input if unrecognized
    """
    system = system.strip().lower()

    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system in ("darwin", "macos"):
        return "macos"
    else:
        return system


def _normalize_architecture(machine: str) -> str:
    """
    Normalize a CPU architecture name.

    Returns:
        'x64', 'arm64', 'x86', 'arm', or the lowercase input if unrecognized
    """
    machine = machine.strip().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        # Return original for unknown architectures
        return machine


def is_supported_platform(info: Optional[PlatformInfo] = None) -> bool:
    """
    Check if platform has a known asset naming convention.

    Args:
        info: PlatformInfo to check. If None, detects current platform.

    Returns:
        True if platform is supported
    """
    if info is None:
        info = detect_platform()

    return info.os in SUPPORTED_OS and info.arch in SUPPORTED_ARCH


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    Useful for testing or when runner variables change.
    """
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "SUPPORTED_OS",
    "SUPPORTED_ARCH",
    "detect_platform",
    "platform_from_environ",
    "is_supported_platform",
    "clear_platform_cache",
]

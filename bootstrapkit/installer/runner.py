"""
Command execution against an acquired tool directory.
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from bootstrapkit.core.exceptions import ConfigurationError, ExecutionError
from bootstrapkit.core.platform import SUPPORTED_OS, PlatformInfo, detect_platform

logger = logging.getLogger(__name__)


def split_command(command: str) -> Tuple[str, List[str]]:
    """
    Split a command string into executable name and arguments.

    Tokenization follows shell rules: whitespace separated, quote aware.

    Raises:
        ExecutionError: If the command is empty or cannot be parsed

    Example:
        >>> split_command('my-app --key "some value"')
        ('my-app', ['--key', 'some value'])
    """
    try:
        args = shlex.split(command or "")
    except ValueError as e:
        raise ExecutionError(f"Invalid command: {command} ({e})") from e

    if not args or not args[0]:
        raise ExecutionError(f"Invalid command: {command}")

    return args[0], args[1:]


def executable_path(path: Path, binary: str, platform: PlatformInfo) -> Path:
    """
    Path of ``binary`` inside ``path`` on ``platform``.

    Raises:
        ConfigurationError: If the operating system is not supported
    """
    if platform.os not in SUPPORTED_OS:
        raise ConfigurationError(f"Unsupported runner OS: {platform.os}")

    return Path(path) / f"{binary}{platform.executable_suffix()}"


def exec_command(
    command: str, path: Path, platform: Optional[PlatformInfo] = None
) -> int:
    """
    Run ``command`` with its executable taken from ``path``.

    Args:
        command: Command string such as ``my-app --key val``
        path: Directory containing the executable
        platform: Platform deciding the executable suffix (detected if None)

    Returns:
        Exit status (always 0; failures raise)

    Raises:
        ExecutionError: If the command is invalid, cannot start, or exits non-zero
        ConfigurationError: If the operating system is not supported
    """
    if platform is None:
        platform = detect_platform()

    binary, args = split_command(command)
    executable = executable_path(path, binary, platform)

    logger.info(f"Running {executable} {' '.join(args)}".rstrip())

    try:
        result = subprocess.run([str(executable), *args], check=False)
    except OSError as e:
        raise ExecutionError(f"Failed to run {executable}: {e}") from e

    if result.returncode != 0:
        raise ExecutionError(
            f"Command '{command}' exited with code {result.returncode}",
            exit_code=result.returncode,
        )

    return result.returncode


__all__ = ["split_command", "executable_path", "exec_command"]

"""
Directory layout for BootstrapKit.

Global cache (~/.bootstrapkit/ or %USERPROFILE%\\.bootstrapkit\\):
    - cache/          : Extracted release assets, one folder per tool/version
    - lock/           : Concurrent access control files

Working directory (<cwd>/.bootstrapkit/):
    - state.json      : Handoff between the ``run`` and ``post`` commands
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from bootstrapkit.core.exceptions import ConfigurationError


def get_global_dir() -> Path:
    """
    Get the platform-specific BootstrapKit home directory.

    Returns:
        - Windows: %USERPROFILE%\\.bootstrapkit
        - Linux/macOS: ~/.bootstrapkit/
    """
    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise ConfigurationError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine global cache directory."
            )
        return Path(user_profile) / ".bootstrapkit"
    else:
        return Path.home() / ".bootstrapkit"


def get_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the tool cache root.

    ``BOOTSTRAPKIT_CACHE`` wins, then the runner tool cache
    (``RUNNER_TOOL_CACHE``), then ``<global dir>/cache``.
    """
    if environ is None:
        environ = os.environ

    override = environ.get("BOOTSTRAPKIT_CACHE") or environ.get("RUNNER_TOOL_CACHE")
    if override:
        return Path(override)

    return get_global_dir() / "cache"


def get_state_file(
    environ: Optional[Mapping[str, str]] = None, cwd: Optional[Path] = None
) -> Path:
    """Get the default run state file path."""
    if environ is None:
        environ = os.environ

    override = environ.get("BOOTSTRAPKIT_STATE")
    if override:
        return Path(override)

    return (cwd or Path.cwd()) / ".bootstrapkit" / "state.json"

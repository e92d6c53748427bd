"""
Core functionality for BootstrapKit.

This package contains the foundational modules that other components depend on.
"""

from .directory import (
    get_global_dir,
    get_cache_dir,
    get_state_file,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    platform_from_environ,
    is_supported_platform,
    clear_platform_cache,
)

from .cache import ToolCache

from .state import RunState, StateManager

from .exceptions import (
    BootstrapKitError,
    ConfigurationError,
    ResolutionError,
    RefNotFoundError,
    ReleaseNotFoundError,
    TransportError,
    ExtractionError,
    UnsupportedArchiveFormat,
    InsecureArchiveError,
    CacheError,
    CacheLockTimeout,
    StateError,
    ExecutionError,
)

__all__ = [
    "get_global_dir",
    "get_cache_dir",
    "get_state_file",
    "PlatformInfo",
    "detect_platform",
    "platform_from_environ",
    "is_supported_platform",
    "clear_platform_cache",
    "ToolCache",
    "RunState",
    "StateManager",
    "BootstrapKitError",
    "ConfigurationError",
    "ResolutionError",
    "RefNotFoundError",
    "ReleaseNotFoundError",
    "TransportError",
    "ExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "CacheError",
    "CacheLockTimeout",
    "StateError",
    "ExecutionError",
]

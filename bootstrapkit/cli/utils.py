"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging

from bootstrapkit.config.settings import BootstrapConfig, load_config
from bootstrapkit.core.cache import ToolCache
from bootstrapkit.core.download import DownloadProgress
from bootstrapkit.core.platform import detect_platform, is_supported_platform
from bootstrapkit.installer.acquisition import AssetAcquirer
from bootstrapkit.registry.github import GitHubRegistry

logger = logging.getLogger(__name__)


def config_from_args(args) -> BootstrapConfig:
    """
    Build the configuration from parsed command-line arguments.

    Flags a subcommand does not define are treated as not given.
    """
    return load_config(
        repo=getattr(args, "repo", None),
        tags=getattr(args, "tags", None),
        name=getattr(args, "name", None),
        main=getattr(args, "main", None),
        post=getattr(args, "post", None),
        cache_dir=getattr(args, "cache_dir", None),
        state_file=getattr(args, "state_file", None),
        config_file=getattr(args, "config", None),
    )


def log_progress(progress: DownloadProgress) -> None:
    logger.debug(f"  {progress}")


def create_acquirer(config: BootstrapConfig) -> AssetAcquirer:
    """
    Create the asset acquirer described by ``config``.

    Example:
        >>> acquirer = create_acquirer(config_from_args(args))
        >>> acquirer.acquire("latest").path
    """
    platform = detect_platform()
    logger.debug(f"Detected platform: {platform}")
    if not is_supported_platform(platform):
        logger.warning(
            f"Platform {platform} has no known asset naming; release assets will not match"
        )

    return AssetAcquirer(
        registry=GitHubRegistry(token=config.token),
        repository=config.repository,
        name=config.name,
        cache=ToolCache(config.cache_dir),
        platform=platform,
        token=config.token,
        progress_callback=log_progress,
    )


__all__ = ["config_from_args", "create_acquirer", "log_progress"]

"""
Release asset selection for the current platform.

Assets are expected to follow the Rust target triple naming convention,
e.g. ``my-app-1.0.0-x86_64-unknown-linux-gnu.tar.gz``.
"""

import logging
from typing import Dict, List, Tuple

from bootstrapkit.core.exceptions import ResolutionError
from bootstrapkit.core.platform import PlatformInfo
from bootstrapkit.registry.base import Asset, Release

logger = logging.getLogger(__name__)

OS_TARGETS: Dict[str, Tuple[str, ...]] = {
    "linux": (
        "-unknown-linux-gnu",
        "-unknown-linux-musl",
        "-unknown-linux-gnueabihf",
    ),
    "macos": ("-apple-darwin",),
    "windows": ("-pc-windows-gnu", "-pc-windows-msvc"),
}

ARCH_TARGETS: Dict[str, Tuple[str, ...]] = {
    "x86": ("i686-",),
    "x64": ("x86_64-",),
    "arm": ("arm-", "armv7-"),
    "arm64": ("aarch64-",),
}


def _contains_any(name: str, targets: Tuple[str, ...]) -> bool:
    return any(target in name for target in targets)


def matching_assets(release: Release, name: str, platform: PlatformInfo) -> List[Asset]:
    """
    Filter the assets of ``release`` down to those built for ``platform``.

    Unknown operating systems or architectures match nothing.

    Returns:
        Matching assets in release order
    """
    prefix = f"{name.lower()}-"
    os_targets = OS_TARGETS.get(platform.os, ())
    arch_targets = ARCH_TARGETS.get(platform.arch, ())

    return [
        asset
        for asset in release.assets
        if asset.name.lower().startswith(prefix)
        and _contains_any(asset.name.lower(), os_targets)
        and _contains_any(asset.name.lower(), arch_targets)
    ]


def select_asset(release: Release, name: str, platform: PlatformInfo) -> Asset:
    """
    Select the asset of ``release`` for tool ``name`` on ``platform``.

    When several assets match (e.g. both gnu and musl builds), the first one
    in release order is picked.

    Args:
        release: Release metadata
        name: Tool name the asset names start with
        platform: Target platform

    Returns:
        The selected asset

    Raises:
        ResolutionError: If no asset matches

    Example:
        >>> select_asset(release, "my-app", PlatformInfo("linux", "x64")).name
        'my-app-1.0.0-x86_64-unknown-linux-gnu.tar.gz'
    """
    candidates = matching_assets(release, name, platform)

    if not candidates:
        raise ResolutionError(
            f"Could not find matching asset for {name} in release {release.tag_name}."
        )

    asset = candidates[0]
    logger.debug(
        f"Selected {asset.name} for {platform} "
        f"({len(candidates)} candidate(s) in {release.tag_name})"
    )
    return asset


__all__ = ["select_asset", "matching_assets", "OS_TARGETS", "ARCH_TARGETS"]

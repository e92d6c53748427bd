"""
Release resolution for BootstrapKit.

This package provides:
- Tag resolution from loose versions to full release tags
- Release lookup (including the ``latest`` release)
- Asset selection for the current platform
"""

from bootstrapkit.release.assets import (
    ARCH_TARGETS,
    OS_TARGETS,
    matching_assets,
    select_asset,
)
from bootstrapkit.release.locator import LATEST, get_latest_release, get_release
from bootstrapkit.release.tags import is_full_version, resolve_release_tag

__all__ = [
    "ARCH_TARGETS",
    "OS_TARGETS",
    "matching_assets",
    "select_asset",
    "LATEST",
    "get_latest_release",
    "get_release",
    "is_full_version",
    "resolve_release_tag",
]

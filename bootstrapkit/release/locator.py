"""
Release lookup for a tag or the literal ``latest``.
"""

import logging

from bootstrapkit.core.exceptions import ResolutionError
from bootstrapkit.registry.base import Release, ReleaseRegistry, Repository
from bootstrapkit.release.tags import is_full_version, resolve_release_tag

logger = logging.getLogger(__name__)

LATEST = "latest"


def get_release(registry: ReleaseRegistry, repository: Repository, tag: str) -> Release:
    """
    Get the release for ``tag``.

    ``latest`` is never cross-referenced against tag refs: it is served by
    the registry's latest release endpoint, and the tag of that release
    must be a full version.

    Args:
        registry: Release registry
        repository: Repository to search
        tag: Loose version, full version or ``latest``

    Returns:
        Release metadata

    Raises:
        ResolutionError: If no release matches
        TransportError: If the registry cannot be reached
    """
    if tag == LATEST:
        return get_latest_release(registry, repository)

    resolved = resolve_release_tag(registry, repository, tag)
    return registry.get_release_by_tag(repository, resolved)


def get_latest_release(registry: ReleaseRegistry, repository: Repository) -> Release:
    """
    Get the latest release, rejecting tags without an ``x.y.z`` version.

    Raises:
        ResolutionError: If the latest release tag has no full version
    """
    release = registry.get_latest_release(repository)

    if not is_full_version(release.tag_name):
        raise ResolutionError(f"Latest release has invalid tag: {release.tag_name}")

    logger.debug(f"Latest release of {repository} is {release.tag_name}")
    return release


__all__ = ["get_release", "get_latest_release", "LATEST"]

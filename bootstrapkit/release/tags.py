"""
Release tag resolution.

Turns a loose version such as ``1`` or ``1.0`` into the full ``x.y.z`` tag
a release is published under.

Registries rarely publish releases for partial versions, but projects
often move a ``1.0`` tag along with their latest ``1.0.z`` release. When
such a tag exists its commit is used as an anchor, and the full version tag
pointing at the same commit wins. Without an anchor the last full version
tag in listing order is picked.
"""

import logging
import re
from typing import List, Optional

from bootstrapkit.core.exceptions import RefNotFoundError, ResolutionError
from bootstrapkit.registry.base import GitRef, ReleaseRegistry, Repository

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+")
TAG_REF_PATTERN = re.compile(r"refs/tags/(\d+\.\d+\.\d+)")
TAG_REF_PREFIX = "refs/tags/"


def is_full_version(version: str) -> bool:
    """
    Check whether ``version`` contains a full ``x.y.z`` version.

    Example:
        >>> is_full_version("1.0.0")
        True
        >>> is_full_version("v1.0.0")
        True
        >>> is_full_version("1.0")
        False
    """
    return VERSION_PATTERN.search(version) is not None


def resolve_release_tag(
    registry: ReleaseRegistry, repository: Repository, version: str
) -> str:
    """
    Resolve ``version`` to a full release tag.

    Args:
        registry: Release registry
        repository: Repository to search
        version: Loose version (``1``, ``1.0``) or full version

    Returns:
        Full ``x.y.z`` tag name

    Raises:
        ResolutionError: If no matching full version tag exists

    Example:
        >>> resolve_release_tag(registry, Repository("octocat", "hello-world"), "1.0")
        '1.0.2'
    """
    if is_full_version(version):
        return version

    anchor = _resolve_anchor_sha(registry, repository, version)
    matches = registry.list_matching_refs(repository, f"tags/{version}")
    logger.debug(f"Found {len(matches)} refs matching tags/{version} in {repository}")

    if anchor:
        tag = _find_tag_for_commit(registry, repository, matches, anchor)
    else:
        tag = _last_full_version(matches)

    if not tag:
        raise ResolutionError(f"Could not find matching release for {version}.")

    logger.info(f"Resolved {version} to {tag}")
    return tag


def _resolve_anchor_sha(
    registry: ReleaseRegistry, repository: Repository, version: str
) -> Optional[str]:
    """Commit SHA the ``tags/<version>`` ref points at, if the ref exists."""
    try:
        ref = registry.get_ref(repository, f"tags/{version}")
    except RefNotFoundError:
        logger.debug(f"No tag ref for {version} in {repository}")
        return None

    return _commit_sha(registry, repository, ref)


def _commit_sha(registry: ReleaseRegistry, repository: Repository, ref: GitRef) -> str:
    # Annotated tags are dereferenced once
    if ref.is_annotated_tag:
        return registry.get_tag_object(repository, ref.sha).object_sha

    return ref.sha


def _find_tag_for_commit(
    registry: ReleaseRegistry,
    repository: Repository,
    matches: List[GitRef],
    anchor: str,
) -> Optional[str]:
    for ref in reversed(matches):
        match = TAG_REF_PATTERN.fullmatch(ref.ref)
        if not match:
            continue

        if _commit_sha(registry, repository, ref) == anchor:
            return match.group(1)

    return None


def _last_full_version(matches: List[GitRef]) -> Optional[str]:
    # Assumes the registry lists refs in ascending order
    tags = [
        match.group(1)
        for match in (TAG_REF_PATTERN.fullmatch(ref.ref) for ref in matches)
        if match
    ]

    return tags[-1] if tags else None


__all__ = ["resolve_release_tag", "is_full_version", "VERSION_PATTERN"]

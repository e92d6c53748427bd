"""
Release asset download, extraction and caching.

This module orchestrates acquiring one version candidate:
1. Resolve the release for the candidate
2. Check if already cached under the concrete release tag
3. Select the asset for the current platform
4. Download the asset to a scratch directory
5. Extract it
6. Store the extracted directory in the tool cache
7. Cleanup scratch files
"""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from bootstrapkit.core.cache import ToolCache
from bootstrapkit.core.download import DownloadProgress, download_file
from bootstrapkit.core.filesystem import extract_asset, temporary_directory
from bootstrapkit.core.platform import PlatformInfo
from bootstrapkit.registry.base import Release, ReleaseRegistry, Repository
from bootstrapkit.release.assets import select_asset
from bootstrapkit.release.locator import LATEST, get_release
from bootstrapkit.release.tags import is_full_version

logger = logging.getLogger(__name__)

ASSET_CONTENT_TYPE = "application/octet-stream"


@dataclass
class AcquisitionResult:
    """Result of acquiring a version candidate."""

    candidate: str
    """Version candidate as given by the caller"""

    tag: str
    """Concrete release tag the cache entry is stored under"""

    path: Path
    """Cached directory containing the tool"""

    was_cached: bool
    """Whether the tool was already cached (no download needed)"""

    download_time: float = 0.0
    """Time spent downloading in seconds"""


def cache_key(repository: Repository, name: str) -> str:
    """
    Cache key for tool ``name`` from ``repository``.

    Example:
        >>> cache_key(Repository("Octocat", "hello-world"), "my-app")
        'bootstrapkit-octocat-hello-world-my-app'
    """
    return f"bootstrapkit-{repository.owner}-{repository.repo}-{name}".lower()


def _version_key(version: str) -> tuple:
    """Convert version string to sortable tuple."""
    return tuple(int(p) for p in re.findall(r"\d+", version))


class AssetAcquirer:
    """
    Acquires release assets of one tool into the tool cache.

    Example:
        >>> acquirer = AssetAcquirer(
        ...     registry=GitHubRegistry(),
        ...     repository=Repository("octocat", "hello-world"),
        ...     name="my-app",
        ...     cache=ToolCache(get_cache_dir()),
        ...     platform=detect_platform(),
        ... )
        >>> result = acquirer.acquire("1.0")
        >>> print(f"Installed at: {result.path}")
    """

    def __init__(
        self,
        registry: ReleaseRegistry,
        repository: Repository,
        name: str,
        cache: ToolCache,
        platform: PlatformInfo,
        token: Optional[str] = None,
        scratch_dir: Optional[Path] = None,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ):
        """
        Initialize asset acquirer.

        Args:
            registry: Release registry to resolve versions against
            repository: Repository publishing the releases
            name: Tool name the asset names start with
            cache: Tool cache
            platform: Platform to select assets for
            token: Optional token used to download assets
            scratch_dir: Parent of scratch directories (system temp if None)
            progress_callback: Optional download progress callback
        """
        self.registry = registry
        self.repository = repository
        self.name = name
        self.cache = cache
        self.platform = platform
        self.token = token
        self.scratch_dir = scratch_dir
        self.progress_callback = progress_callback

    @property
    def key(self) -> str:
        return cache_key(self.repository, self.name)

    def find_cached(self, candidate: str) -> Optional[Path]:
        """
        Look up ``candidate`` in the cache without downloading anything.

        ``latest`` needs a release lookup to learn the concrete tag. A full
        version is looked up as is. A loose version such as ``1.0`` matches
        the highest cached release version under it (``1.0.2`` but not
        ``1.1.0`` or ``1.0.3-rc.1``).

        Returns:
            Cached directory, or None on a miss
        """
        version = candidate
        if candidate == LATEST:
            version = get_release(self.registry, self.repository, candidate).tag_name
        elif not is_full_version(candidate):
            version = self._latest_cached(candidate)
            if version is None:
                return None

        return self.cache.find(self.key, version)

    def _latest_cached(self, prefix: str) -> Optional[str]:
        matching = [
            v
            for v in self.cache.list_versions(self.key)
            if v.startswith(f"{prefix}.") and is_full_version(v) and "-" not in v
        ]
        if not matching:
            return None

        latest = max(matching, key=_version_key)
        logger.debug(f"Cached {self.name} {latest} matches {prefix}")
        return latest

    def acquire(self, candidate: str) -> AcquisitionResult:
        """
        Resolve, download, extract and cache ``candidate``.

        Args:
            candidate: Loose version, full version or ``latest``

        Returns:
            AcquisitionResult with the cached directory

        Raises:
            ResolutionError: If no release or asset matches
            TransportError: If the download fails
            ExtractionError: If the asset cannot be extracted
            CacheError: If the cache cannot be populated
        """
        release = get_release(self.registry, self.repository, candidate)
        tag = release.tag_name

        cached = self.cache.find(self.key, tag)
        if cached is not None:
            logger.info(f"{self.name} {tag} already cached: {cached}")
            return AcquisitionResult(
                candidate=candidate, tag=tag, path=cached, was_cached=True
            )

        return self._download_and_extract(candidate, release)

    def _download_and_extract(self, candidate: str, release: Release) -> AcquisitionResult:
        asset = select_asset(release, self.name, self.platform)
        url = self.registry.asset_download_url(self.repository, asset)

        with temporary_directory(
            prefix="bootstrapkit_download_", parent=self.scratch_dir
        ) as scratch:
            logger.info(f"Downloading {asset.name} ({release.tag_name})")
            download_start = time.time()

            archive = download_file(
                url=url,
                destination=scratch / asset.name,
                token=self.token,
                headers={"Accept": ASSET_CONTENT_TYPE},
                progress_callback=self.progress_callback,
            )

            download_time = time.time() - download_start
            logger.info(f"Download complete in {download_time:.2f}s")

            extracted = extract_asset(archive)
            logger.debug(f"Extracted {asset.name} to {extracted}")

            path = self.cache.store(extracted, self.key, release.tag_name)

        return AcquisitionResult(
            candidate=candidate,
            tag=release.tag_name,
            path=path,
            was_cached=False,
            download_time=download_time,
        )


__all__ = ["AcquisitionResult", "AssetAcquirer", "cache_key"]

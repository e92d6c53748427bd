"""
Local content cache for extracted release assets.

Entries are addressed by a tool key and a concrete version and live at
``<root>/<key>/<version>/``. A ``<version>.complete`` marker is written once
an entry has been fully populated, so partially copied entries are never
returned by :meth:`ToolCache.find`.

Writers serialize on a per-entry file lock, which gives single-writer-per-key
semantics across processes.
"""

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from filelock import FileLock, Timeout

from bootstrapkit.core.exceptions import CacheError, CacheLockTimeout
from bootstrapkit.core.filesystem import safe_rmtree

logger = logging.getLogger(__name__)

COMPLETE_SUFFIX = ".complete"


class ToolCache:
    """
    Manages the tool cache with process-safe writes.

    Example:
        >>> cache = ToolCache(Path('/home/user/.bootstrapkit/cache'))
        >>> path = cache.store(Path('/tmp/my-app'), 'bootstrapkit-octocat-hello-world-my-app', '1.0.0')
        >>> cache.find('bootstrapkit-octocat-hello-world-my-app', '1.0.0') == path
        True
    """

    def __init__(self, root: Path, lock_timeout: int = 300):
        """
        Initialize tool cache.

        Args:
            root: Cache root directory
            lock_timeout: Timeout in seconds for acquiring an entry lock
        """
        self.root = Path(root)
        self.lock_dir = self.root / ".locks"
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized tool cache at {self.root}")

    def entry_path(self, key: str, version: str) -> Path:
        """Directory holding the entry for ``key`` at ``version``."""
        _validate_component("key", key)
        _validate_component("version", version)
        return self.root / key / version

    def _marker_path(self, key: str, version: str) -> Path:
        return self.root / key / f"{version}{COMPLETE_SUFFIX}"

    @contextmanager
    def _lock(self, key: str, version: str):
        """
        Acquire the exclusive lock for one cache entry.

        Raises:
            CacheLockTimeout: If lock cannot be acquired within timeout
        """
        self.lock_dir.mkdir(parents=True, exist_ok=True)
        lock_path = self.lock_dir / f"{key}-{version}.lock"
        lock = FileLock(lock_path, timeout=self.lock_timeout)

        try:
            with lock:
                logger.debug(f"Acquired cache lock: {lock_path}")
                yield
            logger.debug(f"Released cache lock: {lock_path}")
        except Timeout as e:
            raise CacheLockTimeout(
                f"Could not acquire cache lock for {key} {version} "
                f"within {self.lock_timeout} seconds"
            ) from e

    def find(self, key: str, version: str) -> Optional[Path]:
        """
        Look up a completed cache entry.

        Args:
            key: Tool key
            version: Concrete version

        Returns:
            Path to the cached directory, or None on a miss
        """
        path = self.entry_path(key, version)

        if path.is_dir() and self._marker_path(key, version).exists():
            logger.debug(f"Cache hit: {key} {version} -> {path}")
            return path

        logger.debug(f"Cache miss: {key} {version}")
        return None

    def store(self, source: Path, key: str, version: str) -> Path:
        """
        Copy ``source`` into the cache under ``key`` and ``version``.

        An existing entry for the same key and version is replaced.

        Args:
            source: Directory to cache
            key: Tool key
            version: Concrete version

        Returns:
            Path to the cached directory

        Raises:
            CacheError: If the source is not a directory or copying fails
            CacheLockTimeout: If another process holds the entry too long
        """
        source = Path(source)
        if not source.is_dir():
            raise CacheError(f"Cannot cache '{source}': not a directory")

        destination = self.entry_path(key, version)
        marker = self._marker_path(key, version)

        with self._lock(key, version):
            marker.unlink(missing_ok=True)

            try:
                if destination.exists():
                    safe_rmtree(destination, require_prefix=self.root)
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copytree(source, destination, symlinks=True)
                marker.touch()
            except OSError as e:
                raise CacheError(
                    f"Failed to cache {key} {version} at {destination}: {e}"
                ) from e

        logger.info(f"Cached {key} {version} at {destination}")
        return destination

    def list_versions(self, key: str) -> List[str]:
        """
        List completed versions cached for ``key``.

        Returns:
            Sorted list of version strings
        """
        _validate_component("key", key)
        tool_dir = self.root / key

        if not tool_dir.is_dir():
            return []

        return sorted(
            marker.name[: -len(COMPLETE_SUFFIX)]
            for marker in tool_dir.glob(f"*{COMPLETE_SUFFIX}")
            if (tool_dir / marker.name[: -len(COMPLETE_SUFFIX)]).is_dir()
        )


def _validate_component(label: str, value: str) -> None:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        raise CacheError(f"Invalid cache {label}: {value!r}")


__all__ = ["ToolCache"]

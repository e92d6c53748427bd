"""
Release registry interface.

The resolver components only talk to a registry through ``ReleaseRegistry``,
which keeps them independent of the GitHub REST API and lets tests run
against an in-memory implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from bootstrapkit.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class Repository:
    """Repository identity (``owner/repo``)."""

    owner: str
    repo: str

    @classmethod
    def parse(cls, value: str) -> "Repository":
        """
        Parse an ``owner/repo`` string.

        Raises:
            ConfigurationError: If either part is missing

        Example:
            >>> Repository.parse("octocat/hello-world")
            Repository(owner='octocat', repo='hello-world')
        """
        parts = (value or "").strip().split("/")

        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ConfigurationError("Invalid input: repo")

        return cls(owner=parts[0], repo=parts[1])

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class GitRef:
    """A git reference such as ``refs/tags/1.0.0``."""

    ref: str
    object_type: str
    """Type of the referenced object: 'commit' or 'tag' (annotated tag)"""
    sha: str

    @property
    def is_annotated_tag(self) -> bool:
        return self.object_type == "tag"


@dataclass(frozen=True)
class TagObject:
    """An annotated tag object."""

    tag: str
    sha: str
    object_type: str
    object_sha: str
    """SHA of the object the tag points at (usually a commit)"""


@dataclass(frozen=True)
class Asset:
    """A downloadable file attached to a release."""

    name: str
    id: int
    size: int = 0
    url: str = ""


@dataclass(frozen=True)
class Release:
    """Release metadata."""

    tag_name: str
    assets: List[Asset] = field(default_factory=list)
    name: str = ""


class ReleaseRegistry(ABC):
    """
    Abstract interface for remote release registries.

    Implementations raise ``RefNotFoundError`` / ``ReleaseNotFoundError``
    for absent objects and ``TransportError`` for communication failures.
    """

    @abstractmethod
    def get_ref(self, repository: Repository, ref: str) -> GitRef:
        """
        Fetch a single ref.

        Args:
            repository: Repository identity
            ref: Ref name without the ``refs/`` prefix (e.g. ``tags/1.0``)

        Raises:
            RefNotFoundError: If the ref does not exist
        """
        pass

    @abstractmethod
    def get_tag_object(self, repository: Repository, sha: str) -> TagObject:
        """Fetch an annotated tag object by its SHA."""
        pass

    @abstractmethod
    def list_matching_refs(self, repository: Repository, prefix: str) -> List[GitRef]:
        """
        List refs whose name starts with ``prefix`` (e.g. ``tags/1.0``).

        Returns:
            Refs in registry listing order (empty if nothing matches)
        """
        pass

    @abstractmethod
    def get_release_by_tag(self, repository: Repository, tag: str) -> Release:
        """
        Fetch release metadata for ``tag``.

        Raises:
            ReleaseNotFoundError: If no release exists for the tag
        """
        pass

    @abstractmethod
    def get_latest_release(self, repository: Repository) -> Release:
        """Fetch the release the registry marks as latest."""
        pass

    @abstractmethod
    def asset_download_url(self, repository: Repository, asset: Asset) -> str:
        """URL serving the binary content of ``asset``."""
        pass


__all__ = [
    "Repository",
    "GitRef",
    "TagObject",
    "Asset",
    "Release",
    "ReleaseRegistry",
]

"""
GitHub REST API implementation of the release registry.
"""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from requests.exceptions import RequestException

from bootstrapkit.core.exceptions import (
    RefNotFoundError,
    ReleaseNotFoundError,
    TransportError,
)
from bootstrapkit.registry.base import (
    Asset,
    GitRef,
    Release,
    ReleaseRegistry,
    Repository,
    TagObject,
)

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubRegistry(ReleaseRegistry):
    """
    Release registry backed by the GitHub REST API.

    Example:
        >>> registry = GitHubRegistry(token=os.environ.get("GITHUB_TOKEN"))
        >>> registry.get_latest_release(Repository("octocat", "hello-world")).tag_name
        '1.0.0'
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = GITHUB_API_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize GitHub registry client.

        Args:
            token: Optional API token; requests are unauthenticated without it
            base_url: API root (GitHub Enterprise installs differ)
            timeout: Request timeout in seconds
            session: Optional preconfigured session
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str) -> Optional[Any]:
        """
        GET ``path`` and decode the JSON body.

        Returns:
            Decoded body, or None when the API answers 404

        Raises:
            TransportError: On connection failures and non-404 error statuses
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            return None

        if not response.ok:
            raise TransportError(
                f"GitHub API error {response.status_code} for {url}: {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}: {e}") from e

    def _repo_path(self, repository: Repository) -> str:
        return f"/repos/{quote(repository.owner)}/{quote(repository.repo)}"

    def get_ref(self, repository: Repository, ref: str) -> GitRef:
        data = self._get(f"{self._repo_path(repository)}/git/ref/{quote(ref)}")

        # A prefix match answers with a list instead of a single ref
        if data is None or not isinstance(data, dict):
            raise RefNotFoundError(str(repository), ref)

        return _parse_ref(data)

    def get_tag_object(self, repository: Repository, sha: str) -> TagObject:
        data = self._get(f"{self._repo_path(repository)}/git/tags/{quote(sha)}")

        if data is None:
            raise RefNotFoundError(str(repository), sha)

        return TagObject(
            tag=data.get("tag", ""),
            sha=data["sha"],
            object_type=data["object"]["type"],
            object_sha=data["object"]["sha"],
        )

    def list_matching_refs(self, repository: Repository, prefix: str) -> List[GitRef]:
        data = self._get(
            f"{self._repo_path(repository)}/git/matching-refs/{quote(prefix)}"
        )

        if not data:
            return []

        return [_parse_ref(item) for item in data]

    def get_release_by_tag(self, repository: Repository, tag: str) -> Release:
        data = self._get(f"{self._repo_path(repository)}/releases/tags/{quote(tag)}")

        if data is None:
            raise ReleaseNotFoundError(str(repository), tag)

        return _parse_release(data)

    def get_latest_release(self, repository: Repository) -> Release:
        data = self._get(f"{self._repo_path(repository)}/releases/latest")

        if data is None:
            raise ReleaseNotFoundError(str(repository), "latest")

        return _parse_release(data)

    def asset_download_url(self, repository: Repository, asset: Asset) -> str:
        return f"{self.base_url}{self._repo_path(repository)}/releases/assets/{asset.id}"


def _parse_ref(data: dict) -> GitRef:
    return GitRef(
        ref=data["ref"],
        object_type=data["object"]["type"],
        sha=data["object"]["sha"],
    )


def _parse_release(data: dict) -> Release:
    return Release(
        tag_name=data["tag_name"],
        name=data.get("name") or "",
        assets=[
            Asset(
                name=item["name"],
                id=item["id"],
                size=item.get("size", 0),
                url=item.get("url", ""),
            )
            for item in data.get("assets", [])
        ],
    )


__all__ = ["GitHubRegistry", "GITHUB_API_URL"]

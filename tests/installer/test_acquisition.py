"""
Unit tests for asset acquisition.

Downloads are replaced by a function writing a real archive, so extraction
and caching run for real.
"""

import io
import tarfile
from pathlib import Path
from unittest.mock import patch

import pytest

from bootstrapkit.core.exceptions import ResolutionError, TransportError
from bootstrapkit.installer.acquisition import AssetAcquirer, cache_key
from bootstrapkit.registry.base import Repository

LINUX_ASSET = "my-app-1.0.0-x86_64-unknown-linux-gnu.tar.gz"


def write_archive(destination: Path) -> Path:
    """Write a release archive wrapping its files in a same-named folder."""
    inner = destination.name[: -len(".tar.gz")]
    data = b"#!/bin/sh\necho my-app\n"
    with tarfile.open(destination, "w:gz") as tar:
        info = tarfile.TarInfo(f"{inner}/my-app")
        info.size = len(data)
        info.mode = 0o755
        tar.addfile(info, io.BytesIO(data))
    return destination


def fake_download(url, destination, **kwargs):
    return write_archive(Path(destination))


@pytest.fixture
def acquirer(registry, repository, tool_cache, linux_x64, temp_dir):
    return AssetAcquirer(
        registry=registry,
        repository=repository,
        name="my-app",
        cache=tool_cache,
        platform=linux_x64,
        token="secret",
        scratch_dir=temp_dir / "scratch",
    )


class TestCacheKey:
    """Test cache_key function."""

    def test_lowercase(self):
        assert (
            cache_key(Repository("OctoCat", "Hello-World"), "My-App")
            == "bootstrapkit-octocat-hello-world-my-app"
        )


class TestAcquire:
    """Test AssetAcquirer.acquire."""

    def test_download_extract_cache(self, acquirer, registry):
        registry.add_release("1.0.0", [LINUX_ASSET])

        with patch(
            "bootstrapkit.installer.acquisition.download_file", side_effect=fake_download
        ) as mock_download:
            result = acquirer.acquire("1.0.0")

        assert result.was_cached is False
        assert result.tag == "1.0.0"
        assert result.candidate == "1.0.0"
        assert result.path == acquirer.cache.root / acquirer.key / "1.0.0"
        assert (result.path / "my-app").exists()

        kwargs = mock_download.call_args.kwargs
        assert kwargs["url"].endswith("/octocat/hello-world/assets/1")
        assert kwargs["token"] == "secret"
        assert kwargs["headers"] == {"Accept": "application/octet-stream"}

    def test_scratch_cleaned_up(self, acquirer, registry, temp_dir):
        registry.add_release("1.0.0", [LINUX_ASSET])

        with patch(
            "bootstrapkit.installer.acquisition.download_file", side_effect=fake_download
        ):
            acquirer.acquire("1.0.0")

        assert list((temp_dir / "scratch").iterdir()) == []

    def test_idempotent(self, acquirer, registry):
        """Test a second acquisition is served from the cache."""
        registry.add_release("1.0.0", [LINUX_ASSET])

        with patch(
            "bootstrapkit.installer.acquisition.download_file", side_effect=fake_download
        ) as mock_download:
            first = acquirer.acquire("1.0.0")
            second = acquirer.acquire("1.0.0")

        assert mock_download.call_count == 1
        assert second.was_cached is True
        assert second.path == first.path

    def test_loose_version_cached_under_release_tag(self, acquirer, registry):
        registry.add_tag("1.0.0", "commit-a")
        registry.add_tag("1.0.1", "commit-b")
        registry.add_release("1.0.1", [LINUX_ASSET.replace("1.0.0", "1.0.1")])

        with patch(
            "bootstrapkit.installer.acquisition.download_file", side_effect=fake_download
        ):
            result = acquirer.acquire("1.0")

        assert result.tag == "1.0.1"
        assert result.candidate == "1.0"
        assert result.path.name == "1.0.1"

    def test_latest_cached_under_release_tag(self, acquirer, registry):
        registry.add_release("2.0.0", [LINUX_ASSET], latest=True)

        with patch(
            "bootstrapkit.installer.acquisition.download_file", side_effect=fake_download
        ):
            result = acquirer.acquire("latest")

        assert result.path.name == "2.0.0"
        assert acquirer.find_cached("latest") == result.path

    def test_no_matching_asset(self, acquirer, registry):
        registry.add_release("1.0.0", ["my-app-1.0.0-x86_64-apple-darwin.tar.gz"])

        with patch("bootstrapkit.installer.acquisition.download_file") as mock_download:
            with pytest.raises(ResolutionError, match="Could not find matching asset"):
                acquirer.acquire("1.0.0")

        mock_download.assert_not_called()

    def test_download_failure_leaves_no_entry(self, acquirer, registry):
        registry.add_release("1.0.0", [LINUX_ASSET])

        with patch(
            "bootstrapkit.installer.acquisition.download_file",
            side_effect=TransportError("connection reset"),
        ):
            with pytest.raises(TransportError):
                acquirer.acquire("1.0.0")

        assert acquirer.cache.find(acquirer.key, "1.0.0") is None


class TestFindCached:
    """Test AssetAcquirer.find_cached."""

    def test_versioned(self, acquirer, registry, temp_dir):
        """Test non-latest candidates are looked up without remote calls."""
        source = temp_dir / "extracted"
        source.mkdir()
        acquirer.cache.store(source, acquirer.key, "1.0.0")

        assert acquirer.find_cached("1.0.0") == acquirer.cache.root / acquirer.key / "1.0.0"
        assert registry.calls == []

    def test_loose_version_miss(self, acquirer, registry):
        """Test loose candidates miss without remote calls when nothing is cached."""
        registry.add_tag("1.0.0", "commit-a")

        assert acquirer.find_cached("1.0") is None
        assert registry.calls == []

    @pytest.mark.parametrize(
        "candidate,expected",
        [("1", "1.10.0"), ("1.0", "1.0.10"), ("1.0.2", "1.0.2"), ("v2", "v2.0.1")],
    )
    def test_loose_version_picks_highest_cached(
        self, acquirer, registry, temp_dir, candidate, expected
    ):
        """Test loose candidates hit the highest cached version they prefix."""
        source = temp_dir / "extracted"
        source.mkdir()
        for version in ["1.0.2", "1.0.10", "1.10.0", "10.0.0", "1.0.11-rc.1", "v2.0.1"]:
            acquirer.cache.store(source, acquirer.key, version)

        assert acquirer.find_cached(candidate).name == expected
        assert registry.calls == []

    def test_loose_version_needs_dot_boundary(self, acquirer, temp_dir):
        """Test 1.1 never matches a cached 1.10.0."""
        source = temp_dir / "extracted"
        source.mkdir()
        acquirer.cache.store(source, acquirer.key, "1.10.0")

        assert acquirer.find_cached("1.1") is None

    def test_latest(self, acquirer, registry, temp_dir):
        """Test latest is resolved to its tag before the lookup."""
        registry.add_release("1.2.0", latest=True)
        source = temp_dir / "extracted"
        source.mkdir()
        acquirer.cache.store(source, acquirer.key, "1.2.0")

        assert acquirer.find_cached("latest").name == "1.2.0"
        assert registry.call_names() == ["get_latest_release"]

"""
Unit tests for release asset selection.
"""

import pytest

from bootstrapkit.core.exceptions import ResolutionError
from bootstrapkit.core.platform import PlatformInfo
from bootstrapkit.registry.base import Asset, Release
from bootstrapkit.release.assets import matching_assets, select_asset

ASSET_NAMES = [
    "my-app-1.0.0.tar.gz",
    "my-app-1.0.0-i686-unknown-linux-musl.tar.gz",
    "my-app-1.0.0-x86_64-unknown-linux-gnu.tar.gz",
    "my-app-1.0.0-x86_64-unknown-linux-musl.tar.gz",
    "my-app-1.0.0-armv7-unknown-linux-gnueabihf.tar.gz",
    "my-app-1.0.0-aarch64-unknown-linux-gnu.tar.gz",
    "my-app-1.0.0-x86_64-apple-darwin.tar.gz",
    "my-app-1.0.0-aarch64-apple-darwin.tar.gz",
    "my-app-1.0.0-i686-pc-windows-gnu.zip",
    "my-app-1.0.0-x86_64-pc-windows-msvc.zip",
    "other-tool-1.0.0-x86_64-unknown-linux-gnu.tar.gz",
]


@pytest.fixture
def release() -> Release:
    return Release(
        tag_name="1.0.0",
        assets=[Asset(name=name, id=index) for index, name in enumerate(ASSET_NAMES, 1)],
    )


class TestSelectAsset:
    """Test asset selection for each platform."""

    @pytest.mark.parametrize(
        "os_name,arch,expected",
        [
            ("linux", "x86", "my-app-1.0.0-i686-unknown-linux-musl.tar.gz"),
            ("linux", "x64", "my-app-1.0.0-x86_64-unknown-linux-gnu.tar.gz"),
            ("linux", "arm", "my-app-1.0.0-armv7-unknown-linux-gnueabihf.tar.gz"),
            ("linux", "arm64", "my-app-1.0.0-aarch64-unknown-linux-gnu.tar.gz"),
            ("macos", "x64", "my-app-1.0.0-x86_64-apple-darwin.tar.gz"),
            ("macos", "arm64", "my-app-1.0.0-aarch64-apple-darwin.tar.gz"),
            ("windows", "x86", "my-app-1.0.0-i686-pc-windows-gnu.zip"),
            ("windows", "x64", "my-app-1.0.0-x86_64-pc-windows-msvc.zip"),
        ],
    )
    def test_platforms(self, release, os_name, arch, expected):
        asset = select_asset(release, "my-app", PlatformInfo(os_name, arch))

        assert asset.name == expected

    def test_first_match_wins(self, release):
        """Test the first matching asset in release order is picked."""
        candidates = matching_assets(release, "my-app", PlatformInfo("linux", "x64"))

        assert [asset.name for asset in candidates] == [
            "my-app-1.0.0-x86_64-unknown-linux-gnu.tar.gz",
            "my-app-1.0.0-x86_64-unknown-linux-musl.tar.gz",
        ]

    def test_name_prefix_case_insensitive(self, release):
        asset = select_asset(release, "My-App", PlatformInfo("macos", "arm64"))

        assert asset.name == "my-app-1.0.0-aarch64-apple-darwin.tar.gz"

    def test_other_tool_not_selected(self, release):
        asset = select_asset(release, "other-tool", PlatformInfo("linux", "x64"))

        assert asset.name == "other-tool-1.0.0-x86_64-unknown-linux-gnu.tar.gz"

    def test_invalid_os(self, release):
        """Test unknown operating systems match nothing."""
        with pytest.raises(ResolutionError, match="Could not find matching asset for my-app"):
            select_asset(release, "my-app", PlatformInfo("android", "x64"))

    def test_invalid_arch(self, release):
        """Test unknown architectures match nothing."""
        with pytest.raises(ResolutionError):
            select_asset(release, "my-app", PlatformInfo("windows", "x16"))

    def test_missing_platform_build(self, release):
        """Test a known platform without a published build fails."""
        with pytest.raises(ResolutionError, match="in release 1.0.0"):
            select_asset(release, "my-app", PlatformInfo("windows", "arm64"))

    def test_release_without_assets(self):
        with pytest.raises(ResolutionError):
            select_asset(Release(tag_name="1.0.0"), "my-app", PlatformInfo("linux", "x64"))

"""
Pytest configuration and shared fixtures for BootstrapKit tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from bootstrapkit.core.cache import ToolCache
from bootstrapkit.core.platform import PlatformInfo, clear_platform_cache
from bootstrapkit.registry.base import Repository
from tests.mocks.registry import InMemoryRegistry

RUNNER_VARIABLES = (
    "INPUT_REPO",
    "INPUT_TAGS",
    "INPUT_NAME",
    "INPUT_MAIN",
    "INPUT_POST",
    "GITHUB_REPOSITORY",
    "GITHUB_TOKEN",
    "RUNNER_OS",
    "RUNNER_ARCH",
    "RUNNER_TOOL_CACHE",
    "BOOTSTRAPKIT_CACHE",
    "BOOTSTRAPKIT_STATE",
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove runner variables so the host CI does not leak into tests."""
    for name in RUNNER_VARIABLES:
        monkeypatch.delenv(name, raising=False)

    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = temp_dir / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))

    return fake_home


@pytest.fixture
def repository() -> Repository:
    """Repository used throughout the tests."""
    return Repository("octocat", "hello-world")


@pytest.fixture
def registry() -> InMemoryRegistry:
    """Empty in-memory release registry."""
    return InMemoryRegistry()


@pytest.fixture
def linux_x64() -> PlatformInfo:
    return PlatformInfo("linux", "x64")


@pytest.fixture
def tool_cache(temp_dir: Path) -> ToolCache:
    """Tool cache rooted in a temporary directory."""
    return ToolCache(temp_dir / "cache", lock_timeout=5)

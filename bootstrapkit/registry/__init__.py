"""
Release registry clients for BootstrapKit.
"""

from bootstrapkit.registry.base import (
    Asset,
    GitRef,
    Release,
    ReleaseRegistry,
    Repository,
    TagObject,
)
from bootstrapkit.registry.github import GITHUB_API_URL, GitHubRegistry

__all__ = [
    "Asset",
    "GitRef",
    "Release",
    "ReleaseRegistry",
    "Repository",
    "TagObject",
    "GitHubRegistry",
    "GITHUB_API_URL",
]

"""
Mock implementations for testing BootstrapKit components.

This package provides in-memory replacements for remote services so the
resolver and installer can be tested without network access.
"""

from .registry import InMemoryRegistry

__all__ = [
    "InMemoryRegistry",
]

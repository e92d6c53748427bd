"""
Tool installation for BootstrapKit.

This module provides functionality for:
- Acquiring release assets into the tool cache
- Falling back across ordered version candidates
- Running commands from an acquired tool directory
"""

from bootstrapkit.installer.acquisition import (
    AcquisitionResult,
    AssetAcquirer,
    cache_key,
)
from bootstrapkit.installer.orchestrator import CandidateOrchestrator
from bootstrapkit.installer.runner import exec_command, executable_path, split_command

__all__ = [
    "AcquisitionResult",
    "AssetAcquirer",
    "cache_key",
    "CandidateOrchestrator",
    "exec_command",
    "executable_path",
    "split_command",
]

"""
Ordered fallback across version candidates.

Candidates are evaluated in two passes. The first pass only consults the
cache, so a cached later candidate is preferred over downloading an earlier
one. The second pass acquires candidates in order until one succeeds; only
the failure of the final candidate is fatal.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from bootstrapkit.core.exceptions import BootstrapKitError, ConfigurationError
from bootstrapkit.core.platform import PlatformInfo
from bootstrapkit.installer.acquisition import AcquisitionResult, AssetAcquirer
from bootstrapkit.installer.runner import exec_command

logger = logging.getLogger(__name__)

CommandExecutor = Callable[[str, Path, PlatformInfo], int]


class CandidateOrchestrator:
    """
    Acquires the first workable version candidate and runs a command from it.

    Example:
        >>> orchestrator = CandidateOrchestrator(acquirer)
        >>> result = orchestrator.run(["1", "1.0", "latest"], command="my-app --version")
        >>> print(result.tag, result.path)
    """

    def __init__(
        self,
        acquirer: AssetAcquirer,
        executor: Optional[CommandExecutor] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            acquirer: Acquirer for the configured tool
            executor: Callable running a command against a directory
                (defaults to :func:`exec_command`)
        """
        self.acquirer = acquirer
        self.executor = executor or exec_command

    def run(
        self, candidates: Sequence[str], command: Optional[str] = None
    ) -> AcquisitionResult:
        """
        Acquire the first candidate that works and run ``command`` from it.

        Args:
            candidates: Version candidates in priority order
            command: Optional command to run against the acquired directory

        Returns:
            AcquisitionResult of the winning candidate

        Raises:
            ConfigurationError: If no candidates are given
            BootstrapKitError: The failure of the final candidate when every
                candidate failed, or a failure of ``command``
        """
        candidates = list(candidates)
        if not candidates:
            raise ConfigurationError("No version candidates given")

        result = self.find_cached(candidates)
        if result is None:
            result = self.acquire_first(candidates)

        if command:
            self.executor(command, result.path, self.acquirer.platform)

        return result

    def find_cached(self, candidates: List[str]) -> Optional[AcquisitionResult]:
        """
        Return the first candidate already in the cache, without downloading.

        Lookup failures (e.g. the registry being unreachable while resolving
        ``latest``) count as misses.
        """
        for candidate in candidates:
            try:
                path = self.acquirer.find_cached(candidate)
            except BootstrapKitError as e:
                logger.debug(f"Cache lookup for {candidate} failed: {e}")
                continue

            if path is not None:
                logger.info(f"Using cached {self.acquirer.name} for {candidate}: {path}")
                return AcquisitionResult(
                    candidate=candidate,
                    tag=path.name,
                    path=path,
                    was_cached=True,
                )

        return None

    def acquire_first(self, candidates: List[str]) -> AcquisitionResult:
        """
        Acquire candidates in order until one succeeds.

        Raises:
            BootstrapKitError: The final candidate's failure, unchanged
        """
        last_index = len(candidates) - 1

        for index, candidate in enumerate(candidates):
            try:
                result = self.acquirer.acquire(candidate)
            except BootstrapKitError as e:
                if index == last_index:
                    raise

                logger.warning(f"Failed to acquire {self.acquirer.name} {candidate}: {e}")
                continue

            logger.info(f"Acquired {self.acquirer.name} {result.tag} for {candidate}")
            return result

        # Unreachable for non-empty candidates
        raise ConfigurationError("No version candidates given")


__all__ = ["CandidateOrchestrator", "CommandExecutor"]

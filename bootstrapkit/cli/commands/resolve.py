"""
Resolve command implementation.

Prints the concrete release tag for each version candidate without
downloading anything.
"""

import logging

from bootstrapkit.cli.utils import config_from_args
from bootstrapkit.core.exceptions import BootstrapKitError
from bootstrapkit.registry.github import GitHubRegistry
from bootstrapkit.release.locator import get_release

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every candidate resolved, 1 otherwise)
    """
    config = config_from_args(args)
    registry = GitHubRegistry(token=config.token)

    failures = 0
    for candidate in config.tags:
        try:
            release = get_release(registry, config.repository, candidate)
        except BootstrapKitError as e:
            logger.warning(f"{candidate}: {e}")
            failures += 1
            continue

        print(f"{candidate}\t{release.tag_name}")

    return 1 if failures else 0

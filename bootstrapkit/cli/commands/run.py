"""
Run command implementation.

Acquires the tool from the first workable version candidate, runs the main
command from it and records the tool directory for the post command.
"""

import logging

from bootstrapkit.cli.utils import config_from_args, create_acquirer
from bootstrapkit.core.state import RunState, StateManager
from bootstrapkit.installer.orchestrator import CandidateOrchestrator

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    logger.info(
        f"Bootstrapping {config.name} from {config.repository} "
        f"(candidates: {', '.join(config.tags)})"
    )

    orchestrator = CandidateOrchestrator(create_acquirer(config))
    result = orchestrator.run(config.tags, command=config.main)

    StateManager(config.state_file).save(
        RunState(asset_path=result.path, tag=result.tag, candidate=result.candidate)
    )

    print(result.path)
    return 0

"""
Post command implementation.

Runs the post command from the tool directory recorded by a previous
``run`` invocation, then clears the recorded state once the command
succeeds.
"""

import logging
from typing import Optional

from bootstrapkit.config.settings import load_post_settings
from bootstrapkit.core.exceptions import StateError
from bootstrapkit.core.platform import PlatformInfo
from bootstrapkit.core.state import RunState, StateManager
from bootstrapkit.installer.runner import exec_command

logger = logging.getLogger(__name__)


def run_post_command(
    command: str, state: RunState, platform: Optional[PlatformInfo] = None
) -> int:
    """Run ``command`` against the directory recorded in ``state``."""
    logger.info(f"Running post command from {state.asset_path}")
    return exec_command(command, state.asset_path, platform)


def run(args) -> int:
    """
    Run the post command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    command, state_file = load_post_settings(
        post=args.post,
        state_file=args.state_file,
        config_file=args.config,
    )

    if not command:
        logger.debug("No post command configured")
        return 0

    state_manager = StateManager(state_file)
    state = state_manager.load()
    if state is None:
        raise StateError(f"No run state found at {state_file}; did 'run' succeed?")

    exit_code = run_post_command(command, state)
    state_manager.clear()
    logger.debug(f"Cleared run state at {state_file}")
    return exit_code

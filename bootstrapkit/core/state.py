"""
Run state handoff between the ``run`` and ``post`` commands.

The ``run`` command records which directory it resolved; a later ``post``
invocation loads that record and receives it as an explicit ``RunState``.

State File Format (.bootstrapkit/state.json):
    {
        "version": 1,
        "asset_path": "/home/user/.bootstrapkit/cache/bootstrapkit-octocat-hello-world-my-app/1.0.0",
        "tag": "1.0.0",
        "candidate": "1.0",
        "created": "2026-01-01T12:00:00"
    }
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from bootstrapkit.core.exceptions import StateError
from bootstrapkit.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

STATE_VERSION = 1


@dataclass
class RunState:
    """Result of a ``run`` invocation needed by the ``post`` command."""

    asset_path: Path
    tag: str = ""
    candidate: str = ""
    created: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict:
        return {
            "version": STATE_VERSION,
            "asset_path": str(self.asset_path),
            "tag": self.tag,
            "candidate": self.candidate,
            "created": self.created,
        }


class StateManager:
    """
    Loads and saves ``RunState`` to a JSON file.

    Example:
        >>> manager = StateManager(Path('.bootstrapkit/state.json'))
        >>> manager.save(RunState(asset_path=Path('/cache/my-app/1.0.0'), tag='1.0.0'))
        >>> manager.load().tag
        '1.0.0'
    """

    def __init__(self, state_file: Path):
        self.state_file = Path(state_file)

    def save(self, state: RunState) -> None:
        """
        Persist ``state`` atomically.

        Raises:
            StateError: If the file cannot be written
        """
        try:
            atomic_write(self.state_file, json.dumps(state.to_dict(), indent=2))
        except OSError as e:
            raise StateError(f"Failed to save state to {self.state_file}: {e}") from e

        logger.debug(f"Saved run state to {self.state_file}")

    def load(self) -> Optional[RunState]:
        """
        Load the persisted state.

        Returns:
            RunState, or None if no state has been saved

        Raises:
            StateError: If the file exists but is unreadable or malformed
        """
        if not self.state_file.exists():
            logger.debug(f"No run state at {self.state_file}")
            return None

        try:
            with open(self.state_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StateError(f"Failed to load state from {self.state_file}: {e}") from e

        if not isinstance(data, dict) or not data.get("asset_path"):
            raise StateError(f"Invalid state file: {self.state_file}")

        return RunState(
            asset_path=Path(data["asset_path"]),
            tag=data.get("tag", ""),
            candidate=data.get("candidate", ""),
            created=data.get("created", ""),
        )

    def clear(self) -> None:
        """Remove the state file if present."""
        self.state_file.unlink(missing_ok=True)


__all__ = ["RunState", "StateManager"]

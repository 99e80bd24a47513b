"""
Session state tracking for the mix pipeline
Idle -> Synthesizing -> Fetching -> Mixing -> Publishing -> Done, or Failed
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    SYNTHESIZING = "synthesizing"
    FETCHING = "fetching"
    MIXING = "mixing"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


STAGE_ORDER = [
    SessionState.IDLE,
    SessionState.SYNTHESIZING,
    SessionState.FETCHING,
    SessionState.MIXING,
    SessionState.PUBLISHING,
    SessionState.DONE,
]

TERMINAL_STATES = {SessionState.DONE, SessionState.FAILED}


class InvalidTransition(RuntimeError):
    pass


class SessionStateTracker:
    """
    Tracks one session through the pipeline stages.
    Only forward moves to the next stage, or to FAILED, are allowed.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.state = SessionState.IDLE
        self.error: Optional[str] = None
        self.history: List[Dict[str, Any]] = [
            {"state": SessionState.IDLE.value, "at": datetime.now().isoformat()}
        ]

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, next_state: SessionState):
        """Move to the next stage in order."""
        if self.is_terminal:
            raise InvalidTransition(f"Session {self.session_id} already {self.state.value}")
        expected = STAGE_ORDER[STAGE_ORDER.index(self.state) + 1]
        if next_state != expected:
            raise InvalidTransition(
                f"Session {self.session_id}: {self.state.value} -> {next_state.value} not allowed"
            )
        self._enter(next_state)

    def fail(self, error: str):
        if self.is_terminal:
            raise InvalidTransition(f"Session {self.session_id} already {self.state.value}")
        self.error = error
        self._enter(SessionState.FAILED, error=error)

    def _enter(self, state: SessionState, error: Optional[str] = None):
        previous = self.state
        self.state = state
        entry = {"state": state.value, "at": datetime.now().isoformat()}
        if error:
            entry["error"] = error
        self.history.append(entry)
        logger.info(f"Session {self.session_id}: {previous.value} -> {state.value}")

    def get_full_state(self) -> Dict:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "error": self.error,
            "history": list(self.history),
        }

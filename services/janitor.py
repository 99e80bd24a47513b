"""
Best-effort removal of a session's temp files
"""
import logging
from typing import List

from services.errors import CleanupError
from services.session import MixSession

logger = logging.getLogger(__name__)


class ResourceJanitor:
    """
    Deletes every existing slot of a session. Each slot is handled on its
    own: a failure is logged as a CleanupError and the next slot is still
    attempted. Nothing is raised to the caller.
    """

    def cleanup(self, session: MixSession) -> List[str]:
        removed = []
        for path in session.slots:
            try:
                if path.exists():
                    path.unlink()
                    removed.append(path.name)
            except OSError as e:
                err = CleanupError(f"Failed to remove {path}: {e}")
                logger.error(f"Cleanup error (session={session.session_id}): {err}")
        if removed:
            logger.info(f"Cleaned up session {session.session_id}: {', '.join(removed)}")
        return removed

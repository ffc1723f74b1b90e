import logging
from typing import Dict, Optional

from calibrator.services.calibration_engine.session import CalibrationSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Owns one CalibrationSession per client session id (in-memory only)."""

    def __init__(self):
        self._sessions: Dict[str, CalibrationSession] = {}

    def find(self, session_id: str) -> Optional[CalibrationSession]:
        """Looks a session up without creating it."""
        return self._sessions.get(session_id)

    def get(self, session_id: str) -> CalibrationSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = CalibrationSession()
            self._sessions[session_id] = session
            logger.info(f"Created calibration session {session_id}")
        return session

    def drop(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

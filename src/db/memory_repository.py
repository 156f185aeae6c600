"""Implementation of (Session)Repository that keeps everything in a dictionary. Lives as long as the process does."""

from copy import deepcopy
from uuid import UUID, uuid4

from src.core.models import SessionModel


class InMemorySessionRepository:
    """Data stored in a dictionary keyed by session ID"""

    def __init__(self) -> None:
        self._sessions: dict[UUID, SessionModel] = {}

    def get_session(self, session_id: UUID) -> SessionModel | None:
        """Get session by ID, if record exists."""
        stored = self._sessions.get(session_id)
        if stored is None:
            return None
        return deepcopy(stored)

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""
        new_id = uuid4()
        self._sessions[new_id] = deepcopy(session)
        return deepcopy(session), new_id

    def update_session(
        self, session_id: UUID, session: SessionModel
    ) -> SessionModel | None:
        """Replace the stored data of an existing record."""
        if session_id not in self._sessions:
            return None
        self._sessions[session_id] = deepcopy(session)
        return deepcopy(session)

    def delete_session(self, session_id: UUID) -> SessionModel | None:
        """Remove a session's record."""
        return self._sessions.pop(session_id, None)

    def clear(self) -> None:
        self._sessions.clear()

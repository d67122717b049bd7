"""In-memory session registry.

The session cookie only carries a signed token; a session is live while its
id is registered here and has not expired. Sessions are lost on restart.
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from storefront.core.config import SESSION_EXPIRE_MINUTES


class SessionStore:
    def __init__(self, expire_minutes: int = SESSION_EXPIRE_MINUTES):
        self.expire_minutes = expire_minutes
        self._sessions: Dict[str, Tuple[str, datetime]] = {}

    def create(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        self._purge_expired(now)
        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = (user_id, now + timedelta(minutes=self.expire_minutes))
        return session_id

    def _purge_expired(self, now: datetime) -> None:
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at < now]
        for sid in expired:
            del self._sessions[sid]

    def get_user_id(self, session_id: str) -> Optional[str]:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        user_id, expires_at = entry
        if expires_at < datetime.now(timezone.utc):
            self._sessions.pop(session_id, None)
            return None
        return user_id

    def destroy(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

import logging
from typing import Optional
from fastapi import Cookie, Depends, HTTPException, status
from jose import JWTError
from storefront.core.config import SESSION_COOKIE_NAME
from storefront.core.security import decode_token
from storefront.core.sessions import SessionStore
from storefront.db.storage import FileStorage, StorageError, get_storage
from storefront.models.schemas import User

logger = logging.getLogger(__name__)

session_store = None
def get_sessions() -> SessionStore:
    global session_store
    if session_store is None:
        session_store = SessionStore()
    return session_store

def get_session_id(token: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME)) -> Optional[str]:
    """Session id from a validly signed cookie, or None."""
    if not token:
        return None
    try:
        payload = decode_token(token)
    except JWTError:
        return None
    return payload.get("sid")

def get_session_user_id(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_sessions),
) -> Optional[str]:
    if not session_id:
        return None
    return sessions.get_user_id(session_id)

def require_user_id(user_id: Optional[str] = Depends(get_session_user_id)) -> str:
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user_id

def get_current_user(
    user_id: str = Depends(require_user_id),
    storage: FileStorage = Depends(get_storage),
) -> User:
    try:
        user = storage.get_user(user_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from storefront.api.deps import get_current_user, get_session_id, get_session_user_id, get_sessions
from storefront.core.config import SESSION_COOKIE_NAME, SESSION_EXPIRE_MINUTES
from storefront.core.security import create_token, verify_password
from storefront.core.sessions import SessionStore
from storefront.db.storage import FileStorage, StorageError, get_storage
from storefront.models.schemas import AuthResponse, Message, User, UserCreate, UserLogin, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

def start_session(response: Response, sessions: SessionStore, user: User, previous: Optional[str] = None) -> None:
    if previous:
        sessions.destroy(previous)
    session_id = sessions.create(user.id)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        create_token(user.id, session_id),
        max_age=SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )

@router.post("/register", response_model=AuthResponse)
def register(
    payload: UserCreate,
    response: Response,
    storage: FileStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
    previous: Optional[str] = Depends(get_session_id),
):
    try:
        if storage.get_user_by_email(payload.email):
            raise HTTPException(status_code=400, detail="User already exists with this email")
        user = storage.create_user(payload)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    start_session(response, sessions, user, previous)
    logger.info(f"Registered user {user.id}")
    return {"user": user.public()}

@router.post("/login", response_model=AuthResponse)
def login(
    payload: UserLogin,
    response: Response,
    storage: FileStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
    previous: Optional[str] = Depends(get_session_id),
):
    try:
        user = storage.get_user_by_email(payload.email)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not user or not verify_password(payload.password, user.password):
        logger.warning(f"Failed login for {payload.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    start_session(response, sessions, user, previous)
    logger.info(f"User {user.id} logged in")
    return {"user": user.public()}

@router.post("/logout", response_model=Message)
def logout(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_sessions),
):
    if session_id:
        sessions.destroy(session_id)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}

@router.get("/me", response_model=AuthResponse)
def me(
    user_id: Optional[str] = Depends(get_session_user_id),
    storage: FileStorage = Depends(get_storage),
):
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        user = storage.get_user(user_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": user.public()}

@router.patch("/me", response_model=AuthResponse)
def update_me(
    payload: UserUpdate,
    user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    try:
        updated = storage.update_user(user.id, payload)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": updated.public()}

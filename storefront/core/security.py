from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt
from typing import Optional
from storefront.core.config import SESSION_SECRET, SESSION_EXPIRE_MINUTES

ALGORITHM = "HS256"

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_ctx.verify(plain, hashed)

def create_token(subject: str, session_id: str, expires_minutes: Optional[int] = None) -> str:
    expires = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or SESSION_EXPIRE_MINUTES)
    to_encode = {"sub": subject, "sid": session_id, "exp": expires}
    return jwt.encode(to_encode, SESSION_SECRET, algorithm=ALGORITHM)

def decode_token(token: str) -> dict:
    # raises jose.JWTError on a bad signature or an expired token
    return jwt.decode(token, SESSION_SECRET, algorithms=[ALGORITHM])

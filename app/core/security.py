# app/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.core.errors import TokenExpired, TokenInvalid

def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Signed token carrying only the user id; roles are always re-read from the database."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    payload = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str) -> int:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise TokenExpired()
    except JWTError:
        raise TokenInvalid()

    sub = payload.get("sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise TokenInvalid()

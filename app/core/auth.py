# app/core/auth.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AccountBlocked, AccountInactive, Forbidden, MissingToken, UserNotFound
from app.core.security import decode_access_token
from app.database import get_db
from app.models.user import User
from app.services import users as user_service

# auto_error off: a missing header must go through our own error envelope
reusable_oauth2 = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    id: int
    email: str
    name: str
    surname: str


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: Optional[HTTPAuthorizationCredentials] = Depends(reusable_oauth2),
) -> User:
    """Checks run in a fixed order: token, user, inactive, blocked.

    Account state is re-read on every request, a valid token is not enough
    once the account has been deactivated or blocked.
    """
    if token is None or not token.credentials:
        raise MissingToken()

    user_id = decode_access_token(token.credentials)

    user = await user_service.find_by_id(db, user_id)
    if user is None:
        raise UserNotFound()
    if not user.is_active:
        raise AccountInactive("Account inactive")
    if user.is_blocked:
        raise AccountBlocked("Account blocked")
    return user


async def get_current_identity(user: User = Depends(get_current_user)) -> Identity:
    return Identity(id=user.id, email=user.email, name=user.name, surname=user.surname)


def require_roles(*roles: str):
    """Dependency factory: the caller's stored role must be one of ``roles``."""

    async def checker(
        identity: Identity = Depends(get_current_identity),
        db: AsyncSession = Depends(get_db),
    ) -> User:
        # reload, the role may have changed since the user was resolved
        user = await user_service.find_by_id(db, identity.id)
        if user is None:
            raise UserNotFound()
        await db.refresh(user, attribute_names=["role"])
        if user.role not in roles:
            raise Forbidden("Access denied: insufficient role")
        return user

    return checker


get_current_admin = require_roles("admin")
get_current_manager = require_roles("admin", "manager")

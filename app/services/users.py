# app/services/users.py
"""Credential store and account lockout rules.

Lockout: every failed password check on an active, unblocked account bumps
``failed_login_attempts``; the attempt that reaches ``MAX_LOGIN_ATTEMPTS``
blocks the account. Only ``unlock_account`` brings it back.
"""
import logging
import re
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from app.config import settings
from app.core.errors import (
    AccountBlocked, AccountInactive, AuthenticationError, DuplicateEmail, ValidationError, WrongCurrentPassword
)
from app.models.user import User, USER_STATUSES
from app.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w{2,}$")
MIN_PASSWORD_LENGTH = 6
PROFILE_FIELDS = ("name", "surname", "phone", "job_title", "department")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _check_new_password(password: str, field: str = "password") -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(errors=[{"field": field, "message": "Password must be at least 6 characters"}])
    try:
        return hash_password(password)
    except ValueError as e:
        raise ValidationError(errors=[{"field": field, "message": str(e)}])


async def find_by_email(db: AsyncSession, email: str, with_password: bool = False) -> Optional[User]:
    stmt = select(User).where(User.email == normalize_email(email))
    if with_password:
        stmt = stmt.options(undefer(User.hashed_password)).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def find_by_id(db: AsyncSession, user_id: int, with_password: bool = False) -> Optional[User]:
    stmt = select(User).where(User.id == user_id)
    if with_password:
        stmt = stmt.options(undefer(User.hashed_password)).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


def verify_user_password(user: User, candidate: str) -> bool:
    """``user`` must have been loaded with ``with_password=True``."""
    return verify_password(candidate, user.hashed_password)


async def register(
    db: AsyncSession,
    name: str,
    surname: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    job_title: Optional[str] = None,
    department: Optional[str] = None,
    hire_date: Optional[date] = None,
) -> User:
    email = normalize_email(email)
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(errors=[{"field": "email", "message": "Please enter a valid email"}])

    if await find_by_email(db, email):
        raise DuplicateEmail()

    user = User(
        name=name.strip(),
        surname=surname.strip(),
        email=email,
        hashed_password=_check_new_password(password),
        phone=phone,
        job_title=job_title,
        department=department,
        hire_date=hire_date or date.today(),
        status="active",
        role="user",
        failed_login_attempts=0,
        is_blocked=False,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race against another registration with the same email
        await db.rollback()
        raise DuplicateEmail()
    await db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.email)
    return user


async def update_profile(db: AsyncSession, user: User, **fields) -> User:
    for field in PROFILE_FIELDS:
        value = fields.get(field)
        # blank values leave the stored one untouched
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        setattr(user, field, value.strip() if isinstance(value, str) else value)
    await db.commit()
    await db.refresh(user)
    return user


async def change_password(db: AsyncSession, user_id: int, current_password: str, new_password: str) -> None:
    user = await find_by_id(db, user_id, with_password=True)
    if user is None or not verify_user_password(user, current_password):
        raise WrongCurrentPassword()

    user.hashed_password = _check_new_password(new_password, field="newPassword")
    await db.commit()
    logger.info("Password changed for user %s", user.id)


async def record_failed_login(db: AsyncSession, user: User) -> None:
    """Count one failed password check, blocking the account at the threshold.

    Both steps are single UPDATE statements so parallel failures never lose
    an increment, and only one of them performs the block transition.
    """
    result = await db.execute(
        update(User)
        .where(User.id == user.id)
        .values(failed_login_attempts=User.failed_login_attempts + 1)
        .returning(User.failed_login_attempts)
        .execution_options(synchronize_session=False)
    )
    attempts = result.scalar_one()

    blocked = await db.execute(
        update(User)
        .where(User.id == user.id)
        .where(User.failed_login_attempts >= settings.MAX_LOGIN_ATTEMPTS)
        .where(User.is_blocked.is_(False))
        .values(is_blocked=True, blocked_at=datetime.now(timezone.utc))
        .returning(User.id)
        .execution_options(synchronize_session=False)
    )
    if blocked.scalar_one_or_none() is not None:
        logger.warning("Account %s blocked after %d failed logins", user.id, attempts)
    await db.commit()

    await db.refresh(user, attribute_names=["failed_login_attempts", "is_blocked", "blocked_at"])


async def record_successful_login(db: AsyncSession, user: User) -> None:
    user.failed_login_attempts = 0
    user.last_login_at = datetime.now(timezone.utc)
    await db.commit()


async def unlock_account(db: AsyncSession, user: User) -> User:
    user.is_blocked = False
    user.failed_login_attempts = 0
    user.blocked_at = None
    await db.commit()
    await db.refresh(user)
    logger.info("Account %s unlocked", user.id)
    return user


async def set_account_status(db: AsyncSession, user: User, status: str) -> User:
    if status not in USER_STATUSES:
        raise ValidationError(errors=[{"field": "status", "message": "Invalid status"}])
    user.status = status
    await db.commit()
    await db.refresh(user)
    logger.info("Account %s is now %s", user.id, status)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await find_by_email(db, email, with_password=True)
    if user is None:
        raise AuthenticationError()

    # checked before the password so a blocked account never reveals it
    if user.is_blocked:
        raise AccountBlocked()
    if not user.is_active:
        raise AccountInactive()

    if not verify_user_password(user, password):
        await record_failed_login(db, user)
        logger.info("Failed login for user %s (%d attempts)", user.id, user.failed_login_attempts)
        raise AuthenticationError()

    await record_successful_login(db, user)
    await db.refresh(user)
    logger.info("User %s logged in", user.id)
    return user

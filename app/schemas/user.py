# app/schemas/user.py
from pydantic import EmailStr, Field
from typing import Optional
from datetime import date, datetime

from app.schemas.common import CamelModel

class UserCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)
    surname: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    phone: Optional[str] = Field(None, max_length=32)
    job_title: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    hire_date: Optional[date] = None

class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    surname: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, max_length=32)
    job_title: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)

class AccountStatusUpdate(CamelModel):
    status: str = Field(..., pattern="^(active|inactive)$")

class UserResponse(CamelModel):
    """Public view of a user; never carries the password hash."""
    id: int
    name: str
    surname: str
    email: EmailStr
    full_name: str
    initials: str
    role: str
    status: str
    phone: Optional[str] = None
    job_title: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    last_login_at: Optional[datetime] = None

class UserAccountResponse(UserResponse):
    """Admin view, adds the lockout state."""
    is_blocked: bool
    blocked_at: Optional[datetime] = None
    failed_login_attempts: int

class UserSummary(CamelModel):
    id: int
    name: str
    surname: str
    email: EmailStr
    role: str

# app/models/user.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, CheckConstraint, func
from sqlalchemy.orm import deferred
from app.database import Base

USER_STATUSES = ("active", "inactive")

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)      # given name
    surname = Column(String(50), nullable=False)   # family name
    email = Column(String(255), unique=True, index=True, nullable=False)  # always lowercase
    # deferred: only loaded when authentication asks for it
    hashed_password = deferred(Column(String(255), nullable=False))

    status = Column(String(16), nullable=False, default="active", index=True)  # active, inactive
    role = Column(String(16), nullable=False, default="user")                  # admin, manager, user

    failed_login_attempts = Column(Integer, nullable=False, default=0)
    is_blocked = Column(Boolean, nullable=False, default=False)
    blocked_at = Column(DateTime(timezone=True), nullable=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    phone = Column(String(32), nullable=True)
    job_title = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    hire_date = Column(Date, nullable=True)
    avatar_url = Column(String(500), nullable=True)

    # reserved for a password reset flow, nothing issues these yet
    reset_password_token = Column(String(255), nullable=True)
    reset_password_expires_at = Column(DateTime(timezone=True), nullable=True)
    email_verified = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("failed_login_attempts >= 0", name="ck_users_failed_login_attempts"),
        CheckConstraint("status IN ('active', 'inactive')", name="ck_users_status"),
        CheckConstraint("role IN ('admin', 'manager', 'user')", name="ck_users_role"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"

    @property
    def initials(self) -> str:
        return f"{self.name[:1]}{self.surname[:1]}".upper()

    @property
    def is_active(self) -> bool:
        return self.status == "active"

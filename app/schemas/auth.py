# app/schemas/auth.py
from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.user import UserResponse

class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=72)

class AuthPayload(CamelModel):
    token: str
    user: UserResponse

# app/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import UserCreate, UserLogin, UserResponse, ProfileUpdate
from app.schemas.auth import AuthPayload, ChangePasswordRequest
from app.database import get_db
from app.core.security import create_access_token
from app.core.auth import get_current_user
from app.services import users as user_service


router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(user: User) -> AuthPayload:
    return AuthPayload(
        token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=ApiResponse[AuthPayload], status_code=status.HTTP_201_CREATED)
async def register(user_in: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await user_service.register(
        db,
        name=user_in.name,
        surname=user_in.surname,
        email=user_in.email,
        password=user_in.password,
        phone=user_in.phone,
        job_title=user_in.job_title,
        department=user_in.department,
        hire_date=user_in.hire_date,
    )
    return ApiResponse(message="User created successfully", data=_auth_payload(user))


@router.post("/login", response_model=ApiResponse[AuthPayload])
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await user_service.authenticate(db, credentials.email, credentials.password)
    return ApiResponse(message="Login successful", data=_auth_payload(user))


@router.get("/me", response_model=ApiResponse[UserResponse])
async def read_users_me(current_user: User = Depends(get_current_user)):
    return ApiResponse(data=UserResponse.model_validate(current_user))


@router.put("/profile", response_model=ApiResponse[UserResponse])
async def update_profile(
    profile_in: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = await user_service.update_profile(db, current_user, **profile_in.model_dump(exclude_unset=True))
    return ApiResponse(message="Profile updated successfully", data=UserResponse.model_validate(user))


@router.put("/change-password", response_model=ApiResponse[None])
async def change_password(
    request: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await user_service.change_password(db, current_user.id, request.current_password, request.new_password)
    return ApiResponse(message="Password changed successfully")


@router.post("/logout", response_model=ApiResponse[None])
async def logout(current_user: User = Depends(get_current_user)):
    # tokens are stateless, the client just drops it
    return ApiResponse(message="Logout successful")

# app/routers/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.core.auth import get_current_admin
from app.core.errors import NotFound
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import AccountStatusUpdate, UserAccountResponse
from app.services import users as user_service


router = APIRouter(prefix="/admin", tags=["admin"])


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await user_service.find_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


@router.get("/users/{user_id}", response_model=ApiResponse[UserAccountResponse])
async def get_user_account(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    user = await _get_user_or_404(db, user_id)
    return ApiResponse(data=UserAccountResponse.model_validate(user))


@router.post("/users/{user_id}/unlock", response_model=ApiResponse[UserAccountResponse])
async def unlock_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    user = await user_service.unlock_account(db, await _get_user_or_404(db, user_id))
    return ApiResponse(message="Account unlocked", data=UserAccountResponse.model_validate(user))


@router.put("/users/{user_id}/status", response_model=ApiResponse[UserAccountResponse])
async def update_user_status(
    user_id: int,
    status_in: AccountStatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    user = await user_service.set_account_status(db, await _get_user_or_404(db, user_id), status_in.status)
    return ApiResponse(message=f"Account is now {user.status}", data=UserAccountResponse.model_validate(user))

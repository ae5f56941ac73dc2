# app/routers/performance.py
import math
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.core.auth import Identity, get_current_identity, get_current_manager
from app.schemas.common import ApiResponse, Pagination
from app.schemas.performance import (
    PerformanceCreate, PerformanceResponse, PerformanceSummaryResponse
)
from app.services import performance as performance_service
from app.services import stats as stats_service

router = APIRouter(prefix="/performance", tags=["performance"])


@router.post("", response_model=ApiResponse[PerformanceResponse])
async def upsert_performance(
    performance_in: PerformanceCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    record, created = await performance_service.upsert(db, identity.id, performance_in.to_record_data())
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ApiResponse(
        message="Data created successfully" if created else "Data updated successfully",
        data=PerformanceResponse.model_validate(record),
    )


@router.get("", response_model=ApiResponse[List[PerformanceResponse]])
async def list_my_performance(
    year: Optional[int] = Query(None, ge=2020, le=2030),
    month: Optional[int] = Query(None, ge=1, le=12),
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(draft|validated)$"),
    limit: int = Query(12, ge=1, le=100),
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    records, total = await performance_service.list_for_user(
        db, identity.id, year=year, month=month, status=status_filter, page=page, limit=limit
    )
    return ApiResponse(
        data=[PerformanceResponse.model_validate(r) for r in records],
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    )


@router.get("/all", response_model=ApiResponse[List[PerformanceResponse]])
async def list_all_performance(
    db: AsyncSession = Depends(get_db),
    manager=Depends(get_current_manager),
):
    records = await performance_service.list_all(db)
    return ApiResponse(data=[PerformanceResponse.model_validate(r) for r in records])


@router.get("/stats/summary", response_model=ApiResponse[PerformanceSummaryResponse])
async def get_summary(
    year: Optional[int] = Query(None, ge=2020, le=2030),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    if year is None:
        year = datetime.now(timezone.utc).year
    summary = await stats_service.summarize(db, identity.id, year, month)
    return ApiResponse(data=PerformanceSummaryResponse.model_validate(summary))


@router.get("/stats/period", response_model=ApiResponse[PerformanceSummaryResponse])
async def get_period_summary(
    year: int = Query(..., ge=2020, le=2030),
    month: int = Query(..., ge=1, le=12),
    db: AsyncSession = Depends(get_db),
    manager=Depends(get_current_manager),
):
    summary = await stats_service.summarize_period(db, year, month)
    return ApiResponse(data=PerformanceSummaryResponse.model_validate(summary))


@router.get("/{record_id}", response_model=ApiResponse[PerformanceResponse])
async def get_performance(
    record_id: int,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    record = await performance_service.get_for_owner(db, record_id, identity.id)
    return ApiResponse(data=PerformanceResponse.model_validate(record))


@router.delete("/{record_id}", response_model=ApiResponse[None])
async def delete_performance(
    record_id: int,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    await performance_service.delete_for_owner(db, record_id, identity.id)
    return ApiResponse(message="Data deleted successfully")

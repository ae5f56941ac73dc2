# app/services/performance.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import ConstraintViolation, Forbidden, InternalError, NotFound, ValidationError
from app.models.performance import PerformanceRecord

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Performance data not found"

# every column a write replaces; the rest (ids, timestamps) belong to the store
RECORD_FIELDS = (
    "year", "month", "revenue", "revenue_target", "new_clients",
    "appointments_completed", "appointments_planned", "sales_completed",
    "files_updated", "total_files", "events", "satisfaction", "comment", "status",
)


def validate_metrics(data: Dict[str, Any]) -> None:
    """Cross-field rules, checked before anything touches the session."""
    errors = []
    if data["sales_completed"] > data["appointments_completed"]:
        errors.append({
            "field": "salesCompleted",
            "message": "Sales cannot exceed the number of completed appointments",
        })
    if data["files_updated"] > data["total_files"]:
        errors.append({
            "field": "filesUpdated",
            "message": "Updated files cannot exceed the total number of files",
        })
    if errors:
        raise ValidationError(errors[0]["message"], errors=errors)


def _is_unique_violation(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed", postgres: "violates unique constraint"
    return "unique" in str(exc.orig).lower()


async def find_for_period(db: AsyncSession, user_id: int, year: int, month: int) -> Optional[PerformanceRecord]:
    result = await db.execute(
        select(PerformanceRecord)
        .where(PerformanceRecord.user_id == user_id)
        .where(PerformanceRecord.year == year)
        .where(PerformanceRecord.month == month)
    )
    return result.scalar_one_or_none()


async def upsert(db: AsyncSession, user_id: int, data: Dict[str, Any]) -> Tuple[PerformanceRecord, bool]:
    """Create or replace the caller's record for ``data``'s (year, month).

    Returns ``(record, created)``. A concurrent insert for the same period
    surfaces as ``ConstraintViolation`` through the unique constraint.
    """
    validate_metrics(data)

    record = await find_for_period(db, user_id, data["year"], data["month"])
    created = record is None
    if created:
        record = PerformanceRecord(user_id=user_id)
        db.add(record)
    previous_status = record.status

    for field in RECORD_FIELDS:
        setattr(record, field, data.get(field))
    if record.status == "validated" and previous_status != "validated":
        record.validated_at = datetime.now(timezone.utc)

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if _is_unique_violation(e):
            logger.info("Duplicate period %s-%s for user %s", data["year"], data["month"], user_id)
            raise ConstraintViolation()
        # cross-field rules were checked above, anything else here is unexpected
        logger.error("Could not store performance record for user %s: %s", user_id, e.orig)
        raise InternalError()

    record = await get_by_id(db, record.id)
    logger.info(
        "%s performance record %s for user %s (%s-%02d)",
        "Created" if created else "Updated", record.id, user_id, record.year, record.month,
    )
    return record, created


async def list_for_user(
    db: AsyncSession,
    user_id: int,
    year: Optional[int] = None,
    month: Optional[int] = None,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 12,
) -> Tuple[Sequence[PerformanceRecord], int]:
    conditions = [PerformanceRecord.user_id == user_id]
    if year is not None:
        conditions.append(PerformanceRecord.year == year)
    if month is not None:
        conditions.append(PerformanceRecord.month == month)
    if status is not None:
        conditions.append(PerformanceRecord.status == status)

    result = await db.execute(
        select(PerformanceRecord)
        .options(selectinload(PerformanceRecord.user))
        .where(*conditions)
        .order_by(PerformanceRecord.year.desc(), PerformanceRecord.month.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    records = result.scalars().all()

    total = await db.execute(select(func.count(PerformanceRecord.id)).where(*conditions))
    return records, total.scalar_one()


async def list_all(db: AsyncSession) -> List[PerformanceRecord]:
    result = await db.execute(
        select(PerformanceRecord)
        .options(selectinload(PerformanceRecord.user))
        .order_by(PerformanceRecord.year.desc(), PerformanceRecord.month.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def get_by_id(db: AsyncSession, record_id: int) -> PerformanceRecord:
    result = await db.execute(
        select(PerformanceRecord)
        .options(selectinload(PerformanceRecord.user))
        .where(PerformanceRecord.id == record_id)
        .execution_options(populate_existing=True)
    )
    record = result.scalar_one_or_none()
    if record is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return record


async def get_for_owner(db: AsyncSession, record_id: int, user_id: int) -> PerformanceRecord:
    record = await get_by_id(db, record_id)
    if record.user_id != user_id:
        raise Forbidden()
    return record


async def delete_for_owner(db: AsyncSession, record_id: int, user_id: int) -> None:
    record = await get_for_owner(db, record_id, user_id)
    await db.delete(record)
    await db.commit()
    logger.info("Deleted performance record %s of user %s", record_id, user_id)

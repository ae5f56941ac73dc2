# app/services/stats.py
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.performance import PerformanceRecord, percentage


@dataclass
class PerformanceSummary:
    total_revenue: float = 0.0
    total_target: float = 0.0
    total_new_clients: int = 0
    total_appointments: int = 0
    total_sales: int = 0
    total_events: int = 0
    avg_satisfaction: float = 0.0
    count: int = 0
    conversion_rate: int = 0
    target_attainment_rate: int = 0


async def _aggregate(db: AsyncSession, *conditions) -> PerformanceSummary:
    """Totals over validated records matching ``conditions``; all zeros when none match."""
    result = await db.execute(
        select(
            func.coalesce(func.sum(PerformanceRecord.revenue), 0),
            func.coalesce(func.sum(PerformanceRecord.revenue_target), 0),
            func.coalesce(func.sum(PerformanceRecord.new_clients), 0),
            func.coalesce(func.sum(PerformanceRecord.appointments_completed), 0),
            func.coalesce(func.sum(PerformanceRecord.sales_completed), 0),
            func.coalesce(func.sum(PerformanceRecord.events), 0),
            func.coalesce(func.avg(PerformanceRecord.satisfaction), 0),
            func.count(PerformanceRecord.id),
        )
        .where(PerformanceRecord.status == "validated")
        .where(*conditions)
    )
    revenue, target, clients, appointments, sales, events, satisfaction, count = result.one()

    # Decimal on postgres, plain numbers on sqlite
    summary = PerformanceSummary(
        total_revenue=float(revenue),
        total_target=float(target),
        total_new_clients=int(clients),
        total_appointments=int(appointments),
        total_sales=int(sales),
        total_events=int(events),
        avg_satisfaction=float(satisfaction),
        count=int(count),
    )
    summary.conversion_rate = percentage(summary.total_sales, summary.total_appointments)
    summary.target_attainment_rate = percentage(summary.total_revenue, summary.total_target)
    return summary


async def summarize(
    db: AsyncSession, user_id: int, year: int, month: Optional[int] = None
) -> PerformanceSummary:
    conditions = [PerformanceRecord.user_id == user_id, PerformanceRecord.year == year]
    if month is not None:
        conditions.append(PerformanceRecord.month == month)
    return await _aggregate(db, *conditions)


async def summarize_period(db: AsyncSession, year: int, month: int) -> PerformanceSummary:
    """Same totals as ``summarize`` across every user for one period."""
    return await _aggregate(db, PerformanceRecord.year == year, PerformanceRecord.month == month)

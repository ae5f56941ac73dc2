# app/schemas/performance.py
from pydantic import Field
from datetime import datetime
from typing import Any, Dict, Optional

from app.schemas.common import CamelModel
from app.schemas.user import UserSummary

class Period(CamelModel):
    year: int = Field(..., ge=2020, le=2030)
    month: int = Field(..., ge=1, le=12)

class PerformanceCreate(CamelModel):
    period: Period
    revenue: float = Field(..., ge=0)
    revenue_target: float = Field(..., ge=0)
    new_clients: int = Field(..., ge=0)
    appointments_completed: int = Field(..., ge=0)
    appointments_planned: int = Field(0, ge=0)
    sales_completed: int = Field(..., ge=0)
    files_updated: int = Field(..., ge=0)
    total_files: int = Field(..., ge=0)
    events: int = Field(0, ge=0)
    satisfaction: float = Field(4, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=500)
    status: str = Field("validated", pattern="^(draft|validated)$")

    def to_record_data(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"period"})
        data["year"] = self.period.year
        data["month"] = self.period.month
        return data

class PerformanceResponse(CamelModel):
    id: int
    user_id: int
    user: UserSummary
    period: Period
    period_label: str
    revenue: float
    revenue_target: float
    new_clients: int
    appointments_completed: int
    appointments_planned: int
    sales_completed: int
    files_updated: int
    total_files: int
    events: int
    satisfaction: float
    comment: Optional[str] = None
    status: str
    validated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    conversion_rate: int
    completion_rate: int
    target_attainment_rate: int

class PerformanceSummaryResponse(CamelModel):
    total_revenue: float
    total_target: float
    total_new_clients: int
    total_appointments: int
    total_sales: int
    total_events: int
    avg_satisfaction: float
    count: int
    conversion_rate: int
    target_attainment_rate: int

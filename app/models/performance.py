# app/models/performance.py
from sqlalchemy import (
    Column, Integer, Float, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index, func
)
from sqlalchemy.orm import relationship
from app.database import Base

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

def percentage(numerator: float, denominator: float) -> int:
    """round(100 * numerator / denominator), half-up; 0 when the denominator is 0."""
    if not denominator:
        return 0
    return int(100 * numerator / denominator + 0.5)

class PerformanceRecord(Base):
    __tablename__ = "performance_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)

    revenue = Column(Float, nullable=False)
    revenue_target = Column(Float, nullable=False)
    new_clients = Column(Integer, nullable=False)
    appointments_completed = Column(Integer, nullable=False)
    appointments_planned = Column(Integer, nullable=False, default=0)
    sales_completed = Column(Integer, nullable=False)
    files_updated = Column(Integer, nullable=False)
    total_files = Column(Integer, nullable=False)
    events = Column(Integer, nullable=False, default=0)
    satisfaction = Column(Float, nullable=False, default=4)
    comment = Column(String(500), nullable=True)

    status = Column(String(16), nullable=False, default="validated", index=True)  # draft, validated
    validated_at = Column(DateTime(timezone=True), nullable=True)  # stamped on the switch to validated

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", lazy="raise")

    __table_args__ = (
        UniqueConstraint("user_id", "year", "month", name="uq_performance_user_year_month"),
        CheckConstraint("sales_completed <= appointments_completed", name="ck_performance_sales_le_appointments"),
        CheckConstraint("files_updated <= total_files", name="ck_performance_files_le_total"),
        CheckConstraint("year BETWEEN 2020 AND 2030", name="ck_performance_year"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_performance_month"),
        CheckConstraint("satisfaction BETWEEN 1 AND 5", name="ck_performance_satisfaction"),
        Index("ix_performance_year_month", "year", "month"),
    )

    @property
    def conversion_rate(self) -> int:
        return percentage(self.sales_completed, self.appointments_completed)

    @property
    def completion_rate(self) -> int:
        return percentage(self.files_updated, self.total_files)

    @property
    def target_attainment_rate(self) -> int:
        return percentage(self.revenue, self.revenue_target)

    @property
    def period(self) -> dict:
        return {"year": self.year, "month": self.month}

    @property
    def period_label(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

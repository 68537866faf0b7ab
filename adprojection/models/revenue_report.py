"""Actual revenue reports used as baseline context for projection runs."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from adprojection.db.base import Base, TimestampMixin


class RevenueReport(Base, TimestampMixin):
    """Reported revenue for a period (not an input to the projection math)."""

    __tablename__ = "admin_revenue_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    period_start: Mapped[date] = mapped_column(Date, index=True, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)

    gross_revenue: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    net_revenue: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    refunds: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )

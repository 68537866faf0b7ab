"""Per-scenario projection summary (upserted on every run)."""

import uuid
from decimal import Decimal

from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from adprojection.db.base import Base, TimestampMixin
from adprojection.engine.types import ProjectionSummary


class AdFinancialModelSummary(Base, TimestampMixin):
    """Aggregate totals of the latest run for a scenario."""

    __tablename__ = "ad_financial_model_summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    scenario_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("ad_financial_scenarios.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )
    months: Mapped[int] = mapped_column(Integer, nullable=False)

    # Horizon totals
    total_gross_revenue: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    total_platform_revenue: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    total_creator_payout: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    total_platform_variable_costs: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False
    )
    total_impressions: Mapped[int] = mapped_column(BigInteger, nullable=False)
    average_cpm: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # First 12 months
    year1_gross_revenue: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    year1_platform_revenue: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    year1_creator_payout: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    year1_impressions: Mapped[int] = mapped_column(BigInteger, nullable=False)

    summary_text: Mapped[str] = mapped_column(Text, nullable=False)

    def apply(self, summary: ProjectionSummary) -> None:
        """Overwrite every figure with a freshly computed summary."""
        self.months = summary.months
        self.total_gross_revenue = summary.total_gross_revenue
        self.total_platform_revenue = summary.total_platform_revenue
        self.total_creator_payout = summary.total_creator_payout
        self.total_platform_variable_costs = summary.total_platform_variable_costs
        self.total_impressions = summary.total_impressions
        self.average_cpm = summary.average_cpm
        self.year1_gross_revenue = summary.year1_gross_revenue
        self.year1_platform_revenue = summary.year1_platform_revenue
        self.year1_creator_payout = summary.year1_creator_payout
        self.year1_impressions = summary.year1_impressions
        self.summary_text = summary.summary_text

"""Stored month of a scenario's projection."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Date, ForeignKey, Integer, Numeric, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from adprojection.db.base import Base, TimestampMixin
from adprojection.engine.types import ProjectionRow


class AdFinancialProjection(Base, TimestampMixin):
    """One projected month. The full set for a scenario is replaced on every run."""

    __tablename__ = "ad_financial_projections"
    __table_args__ = (
        UniqueConstraint("scenario_id", "month_index", name="uq_projection_scenario_month"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    scenario_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("ad_financial_scenarios.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    month_index: Mapped[int] = mapped_column(Integer, nullable=False)
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)

    # Volumes
    creators: Mapped[int] = mapped_column(BigInteger, nullable=False)
    monetized_creators: Mapped[int] = mapped_column(BigInteger, nullable=False)
    episodes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_listens: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # Impressions
    impressions_preroll: Mapped[int] = mapped_column(BigInteger, nullable=False)
    impressions_midroll: Mapped[int] = mapped_column(BigInteger, nullable=False)
    impressions_postroll: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_impressions: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # Gross revenue per placement (after the budget constraint)
    gross_revenue_preroll: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    gross_revenue_midroll: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    gross_revenue_postroll: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    gross_revenue_total: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    gross_revenue_unconstrained: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)

    # Advertiser demand
    active_campaigns: Mapped[int] = mapped_column(BigInteger, nullable=False)
    max_billable_revenue: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    constrained_gross_revenue: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)

    # Split
    creator_payout: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    platform_variable_costs: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    platform_net_revenue: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)

    @classmethod
    def from_row(cls, scenario_id: uuid.UUID, row: ProjectionRow) -> AdFinancialProjection:
        return cls(
            scenario_id=scenario_id,
            month_index=row.month_index,
            period_start=row.period_start,
            period_end=row.period_end,
            creators=row.creators,
            monetized_creators=row.monetized_creators,
            episodes=row.episodes,
            total_listens=row.total_listens,
            impressions_preroll=row.impressions_preroll,
            impressions_midroll=row.impressions_midroll,
            impressions_postroll=row.impressions_postroll,
            total_impressions=row.total_impressions,
            gross_revenue_preroll=row.gross_revenue_preroll,
            gross_revenue_midroll=row.gross_revenue_midroll,
            gross_revenue_postroll=row.gross_revenue_postroll,
            gross_revenue_total=row.gross_revenue_total,
            gross_revenue_unconstrained=row.gross_revenue_unconstrained,
            active_campaigns=row.active_campaigns,
            max_billable_revenue=row.max_billable_revenue,
            constrained_gross_revenue=row.constrained_gross_revenue,
            creator_payout=row.creator_payout,
            platform_variable_costs=row.platform_variable_costs,
            platform_net_revenue=row.platform_net_revenue,
        )

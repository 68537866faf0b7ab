"""Assumption set driving a scenario's projection."""

import uuid
from typing import Any

from sqlalchemy import Float, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from adprojection.db.base import Base, TimestampMixin
from adprojection.engine.types import ASSUMPTION_FIELDS


class AdFinancialAssumptions(Base, TimestampMixin):
    """Growth, inventory, pricing and payout parameters, one row per scenario.

    Rates and fractions are stored as plain fractions (0.05 = 5%).
    """

    __tablename__ = "ad_financial_assumptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    scenario_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("ad_financial_scenarios.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )

    # Creator growth
    starting_creators: Mapped[float] = mapped_column(Float, nullable=False)
    monthly_creator_growth: Mapped[float] = mapped_column(Float, nullable=False)
    percent_creators_monetized: Mapped[float] = mapped_column(Float, nullable=False)

    # Content volume
    episodes_per_creator_per_month: Mapped[float] = mapped_column(Float, nullable=False)
    listens_per_episode: Mapped[float] = mapped_column(Float, nullable=False)

    # Inventory
    ad_slots_per_listen: Mapped[float] = mapped_column(Float, nullable=False)
    fill_rate: Mapped[float] = mapped_column(Float, nullable=False)
    share_preroll: Mapped[float] = mapped_column(Float, nullable=False)
    share_midroll: Mapped[float] = mapped_column(Float, nullable=False)
    share_postroll: Mapped[float] = mapped_column(Float, nullable=False)

    # Pricing (revenue per 1000 impressions)
    cpm_preroll: Mapped[float] = mapped_column(Float, nullable=False)
    cpm_midroll: Mapped[float] = mapped_column(Float, nullable=False)
    cpm_postroll: Mapped[float] = mapped_column(Float, nullable=False)

    # Advertiser demand
    starting_campaigns: Mapped[float] = mapped_column(Float, nullable=False)
    monthly_campaign_growth: Mapped[float] = mapped_column(Float, nullable=False)
    avg_campaign_monthly_budget: Mapped[float] = mapped_column(Float, nullable=False)

    # Revenue split
    creator_rev_share: Mapped[float] = mapped_column(Float, nullable=False)
    platform_variable_cost_pct: Mapped[float] = mapped_column(Float, nullable=False)

    def as_mapping(self) -> dict[str, Any]:
        """Assumption fields only, in the shape the engine validates."""
        return {name: getattr(self, name) for name in ASSUMPTION_FIELDS}

"""Value types passed between the growth model, revenue pipeline and aggregator."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class Placement(str, Enum):
    """Ad slot position within an episode."""

    PREROLL = "preroll"
    MIDROLL = "midroll"
    POSTROLL = "postroll"


ASSUMPTION_FIELDS: tuple[str, ...] = (
    "starting_creators",
    "monthly_creator_growth",
    "percent_creators_monetized",
    "episodes_per_creator_per_month",
    "listens_per_episode",
    "ad_slots_per_listen",
    "fill_rate",
    "share_preroll",
    "share_midroll",
    "share_postroll",
    "cpm_preroll",
    "cpm_midroll",
    "cpm_postroll",
    "starting_campaigns",
    "monthly_campaign_growth",
    "avg_campaign_monthly_budget",
    "creator_rev_share",
    "platform_variable_cost_pct",
)


@dataclass(frozen=True)
class Assumptions:
    """Validated parameter set driving one projection run.

    Build instances through ``validation.parse_assumptions`` so that every
    field is a finite float within its domain.
    """

    starting_creators: float
    monthly_creator_growth: float
    percent_creators_monetized: float
    episodes_per_creator_per_month: float
    listens_per_episode: float
    ad_slots_per_listen: float
    fill_rate: float
    share_preroll: float
    share_midroll: float
    share_postroll: float
    cpm_preroll: float
    cpm_midroll: float
    cpm_postroll: float
    starting_campaigns: float
    monthly_campaign_growth: float
    avg_campaign_monthly_budget: float
    creator_rev_share: float
    platform_variable_cost_pct: float

    def share(self, placement: Placement) -> float:
        return getattr(self, f"share_{placement.value}")

    def cpm(self, placement: Placement) -> float:
        return getattr(self, f"cpm_{placement.value}")


@dataclass(frozen=True)
class MonthlyVolumes:
    """Population and consumption counts for one month (unrounded where real)."""

    month_offset: int
    creators: int
    monetized_creators: int
    episodes: float
    total_listens: float
    active_campaigns: int


@dataclass(frozen=True)
class RevenueBreakdown:
    """Unrounded output of the revenue pipeline for one month."""

    raw_impressions: float
    filled_impressions: float
    impressions: dict[Placement, float]
    gross_unconstrained: dict[Placement, float]
    gross_total_unconstrained: float
    max_billable_revenue: float
    constrained_gross_revenue: float
    scale_factor: float
    gross_final: dict[Placement, float]
    creator_payout: float
    platform_variable_costs: float
    platform_net_revenue: float


@dataclass(frozen=True)
class ProjectionRow:
    """One stored month: counts rounded to whole units, money to cents.

    ``total_impressions`` and ``gross_revenue_total`` are sums of the stored
    per-placement values, so a row always adds up across placements.
    ``gross_revenue_total`` can differ from ``constrained_gross_revenue`` by a
    cent, since the latter is rounded once from the unrounded capped total.
    """

    scenario_id: str
    month_index: int
    period_start: date
    period_end: date
    creators: int
    monetized_creators: int
    episodes: int
    total_listens: int
    impressions_preroll: int
    impressions_midroll: int
    impressions_postroll: int
    total_impressions: int
    gross_revenue_preroll: Decimal
    gross_revenue_midroll: Decimal
    gross_revenue_postroll: Decimal
    gross_revenue_total: Decimal
    gross_revenue_unconstrained: Decimal
    active_campaigns: int
    max_billable_revenue: Decimal
    constrained_gross_revenue: Decimal
    creator_payout: Decimal
    platform_variable_costs: Decimal
    platform_net_revenue: Decimal


@dataclass(frozen=True)
class YearRollup:
    """Totals for one 12-month block of a horizon."""

    year: int
    months: int
    gross_revenue: Decimal
    creator_payout: Decimal
    platform_variable_costs: Decimal
    platform_net_revenue: Decimal
    impressions: int


@dataclass(frozen=True)
class ProjectionSummary:
    """Aggregate totals of a full run plus its display text."""

    scenario_name: str
    months: int
    total_gross_revenue: Decimal
    total_platform_revenue: Decimal
    total_creator_payout: Decimal
    total_platform_variable_costs: Decimal
    total_impressions: int
    average_cpm: Decimal
    year1_gross_revenue: Decimal
    year1_platform_revenue: Decimal
    year1_creator_payout: Decimal
    year1_impressions: int
    yearly: list[YearRollup] = field(default_factory=list)
    summary_text: str = ""

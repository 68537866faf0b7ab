"""Revenue pipeline: listens to impressions, impressions to budget-constrained revenue.

All arithmetic in this module is unrounded. Rounding to whole impressions and
cents happens once, when a ``ProjectionRow`` is built.
"""

from datetime import date
from decimal import Decimal

from adprojection.engine.rounding import round_half_up, to_cents
from adprojection.engine.types import (
    Assumptions,
    MonthlyVolumes,
    Placement,
    ProjectionRow,
    RevenueBreakdown,
)

CPM_DIVISOR = 1000


def split_impressions(
    filled_impressions: float, assumptions: Assumptions
) -> dict[Placement, float]:
    return {p: filled_impressions * assumptions.share(p) for p in Placement}


def gross_by_placement(
    impressions: dict[Placement, float], assumptions: Assumptions
) -> dict[Placement, float]:
    return {p: impressions[p] / CPM_DIVISOR * assumptions.cpm(p) for p in Placement}


def apply_budget_constraint(
    gross: dict[Placement, float], max_billable_revenue: float
) -> tuple[float, float, dict[Placement, float]]:
    """Cap gross revenue at advertiser budget and rescale every placement alike.

    Returns:
        (constrained_gross_revenue, scale_factor, gross revenue per placement after scaling)
    """
    total = sum(gross.values())
    constrained = min(total, max_billable_revenue)

    # Zero demand: nothing to scale
    scale_factor = constrained / total if total else 1.0

    return constrained, scale_factor, {p: value * scale_factor for p, value in gross.items()}


def split_revenue(
    constrained_gross_revenue: float, creator_rev_share: float, platform_variable_cost_pct: float
) -> tuple[float, float, float]:
    """Divide constrained revenue into (creator payout, variable costs, platform net).

    Platform net is the remainder so the three parts always add back up.
    """
    creator_payout = constrained_gross_revenue * creator_rev_share
    variable_costs = constrained_gross_revenue * platform_variable_cost_pct
    return (
        creator_payout,
        variable_costs,
        constrained_gross_revenue - creator_payout - variable_costs,
    )


def month_revenue(assumptions: Assumptions, volumes: MonthlyVolumes) -> RevenueBreakdown:
    """Run one month's volumes through impressions, CPM, budget cap and split."""
    raw_impressions = volumes.total_listens * assumptions.ad_slots_per_listen
    filled_impressions = raw_impressions * assumptions.fill_rate

    impressions = split_impressions(filled_impressions, assumptions)
    gross = gross_by_placement(impressions, assumptions)
    max_billable = volumes.active_campaigns * assumptions.avg_campaign_monthly_budget

    constrained, scale_factor, gross_final = apply_budget_constraint(gross, max_billable)
    creator_payout, variable_costs, platform_net = split_revenue(
        constrained, assumptions.creator_rev_share, assumptions.platform_variable_cost_pct
    )

    return RevenueBreakdown(
        raw_impressions=raw_impressions,
        filled_impressions=filled_impressions,
        impressions=impressions,
        gross_unconstrained=gross,
        gross_total_unconstrained=sum(gross.values()),
        max_billable_revenue=max_billable,
        constrained_gross_revenue=constrained,
        scale_factor=scale_factor,
        gross_final=gross_final,
        creator_payout=creator_payout,
        platform_variable_costs=variable_costs,
        platform_net_revenue=platform_net,
    )


def build_row(
    scenario_id: str,
    month_index: int,
    period_start: date,
    period_end: date,
    volumes: MonthlyVolumes,
    revenue: RevenueBreakdown,
) -> ProjectionRow:
    """Round one month's figures for storage.

    Platform net revenue is re-derived from the rounded constrained revenue,
    payout and costs, which keeps the stored three-way split exact to the cent.
    Impression and gross totals are summed from the rounded placement values.
    """
    impressions = {p: round_half_up(v) for p, v in revenue.impressions.items()}
    gross = {p: to_cents(v) for p, v in revenue.gross_final.items()}
    constrained = to_cents(revenue.constrained_gross_revenue)
    creator_payout = to_cents(revenue.creator_payout)
    variable_costs = to_cents(revenue.platform_variable_costs)

    return ProjectionRow(
        scenario_id=scenario_id,
        month_index=month_index,
        period_start=period_start,
        period_end=period_end,
        creators=volumes.creators,
        monetized_creators=volumes.monetized_creators,
        episodes=round_half_up(volumes.episodes),
        total_listens=round_half_up(volumes.total_listens),
        impressions_preroll=impressions[Placement.PREROLL],
        impressions_midroll=impressions[Placement.MIDROLL],
        impressions_postroll=impressions[Placement.POSTROLL],
        total_impressions=sum(impressions.values()),
        gross_revenue_preroll=gross[Placement.PREROLL],
        gross_revenue_midroll=gross[Placement.MIDROLL],
        gross_revenue_postroll=gross[Placement.POSTROLL],
        gross_revenue_total=sum(gross.values(), Decimal("0")),
        gross_revenue_unconstrained=to_cents(revenue.gross_total_unconstrained),
        active_campaigns=volumes.active_campaigns,
        max_billable_revenue=to_cents(revenue.max_billable_revenue),
        constrained_gross_revenue=constrained,
        creator_payout=creator_payout,
        platform_variable_costs=variable_costs,
        platform_net_revenue=constrained - creator_payout - variable_costs,
    )

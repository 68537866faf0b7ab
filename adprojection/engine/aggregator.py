"""Roll per-month projection rows up into horizon, year-1 and yearly totals."""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from adprojection.engine.rounding import CENT
from adprojection.engine.types import ProjectionSummary, YearRollup

MONTHS_IN_YEAR = 12
ZERO = Decimal("0")


def _money(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value or 0))


def _sum_money(rows: Iterable[Any], attr: str) -> Decimal:
    return sum((_money(getattr(row, attr)) for row in rows), ZERO)


def _sum_count(rows: Iterable[Any], attr: str) -> int:
    return sum(int(getattr(row, attr) or 0) for row in rows)


def average_cpm(gross_revenue: Decimal, impressions: int) -> Decimal:
    """Revenue per thousand impressions, 0 when nothing was served."""
    if impressions <= 0:
        return ZERO.quantize(CENT)
    return (gross_revenue * 1000 / impressions).quantize(CENT, rounding=ROUND_HALF_UP)


def yearly_rollups(rows: Sequence[Any]) -> list[YearRollup]:
    """Group rows into consecutive 12-month blocks by ``month_index``.

    Accepts engine rows or stored ORM rows; only the revenue, payout, cost and
    impression attributes are read.
    """
    years: dict[int, list[Any]] = {}
    for row in rows:
        years.setdefault((row.month_index - 1) // MONTHS_IN_YEAR + 1, []).append(row)

    return [
        YearRollup(
            year=year,
            months=len(block),
            gross_revenue=_sum_money(block, "constrained_gross_revenue"),
            creator_payout=_sum_money(block, "creator_payout"),
            platform_variable_costs=_sum_money(block, "platform_variable_costs"),
            platform_net_revenue=_sum_money(block, "platform_net_revenue"),
            impressions=_sum_count(block, "total_impressions"),
        )
        for year, block in sorted(years.items())
    ]


def format_summary(summary: ProjectionSummary) -> str:
    year1_months = min(summary.months, MONTHS_IN_YEAR)
    lines = [
        f"Ad Revenue Projection: {summary.scenario_name}",
        f"Horizon: {summary.months} months",
        f"Total Gross Revenue: ${summary.total_gross_revenue:,.2f}",
        f"Total Platform Net Revenue: ${summary.total_platform_revenue:,.2f}",
        f"Total Creator Payout: ${summary.total_creator_payout:,.2f}",
        f"Total Platform Variable Costs: ${summary.total_platform_variable_costs:,.2f}",
        f"Total Impressions: {summary.total_impressions:,}",
        f"Average CPM: ${summary.average_cpm:,.2f}",
        f"Year 1 (months 1-{year1_months}) Gross Revenue: ${summary.year1_gross_revenue:,.2f}",
        f"Year 1 Platform Net Revenue: ${summary.year1_platform_revenue:,.2f}",
        f"Year 1 Creator Payout: ${summary.year1_creator_payout:,.2f}",
        f"Year 1 Impressions: {summary.year1_impressions:,}",
    ]
    if len(summary.yearly) > 1:
        for rollup in summary.yearly:
            lines.append(
                f"Year {rollup.year}: gross ${rollup.gross_revenue:,.2f}, "
                f"platform net ${rollup.platform_net_revenue:,.2f}, "
                f"creator payout ${rollup.creator_payout:,.2f}"
            )
    return "\n".join(lines)


def build_summary(scenario_name: str, rows: Sequence[Any]) -> ProjectionSummary:
    """Summarize a full, ordered run.

    Totals are sums of the already-rounded row values, so the summary's gross
    revenue reconciles exactly with the stored rows.
    """
    ordered = sorted(rows, key=lambda row: row.month_index)
    year1 = ordered[:MONTHS_IN_YEAR]

    total_gross = _sum_money(ordered, "constrained_gross_revenue")
    total_impressions = _sum_count(ordered, "total_impressions")

    summary = ProjectionSummary(
        scenario_name=scenario_name,
        months=len(ordered),
        total_gross_revenue=total_gross,
        total_platform_revenue=_sum_money(ordered, "platform_net_revenue"),
        total_creator_payout=_sum_money(ordered, "creator_payout"),
        total_platform_variable_costs=_sum_money(ordered, "platform_variable_costs"),
        total_impressions=total_impressions,
        average_cpm=average_cpm(total_gross, total_impressions),
        year1_gross_revenue=_sum_money(year1, "constrained_gross_revenue"),
        year1_platform_revenue=_sum_money(year1, "platform_net_revenue"),
        year1_creator_payout=_sum_money(year1, "creator_payout"),
        year1_impressions=_sum_count(year1, "total_impressions"),
        yearly=yearly_rollups(ordered),
    )

    return replace(summary, summary_text=format_summary(summary))

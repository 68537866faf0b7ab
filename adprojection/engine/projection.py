"""Month-by-month projection of a scenario's assumptions."""

from collections.abc import Mapping
from datetime import date
from typing import Any

from dateutil.relativedelta import relativedelta

from adprojection.engine.growth import monthly_volumes
from adprojection.engine.pipeline import build_row, month_revenue
from adprojection.engine.types import Assumptions, ProjectionRow
from adprojection.engine.validation import (
    DEFAULT_MAX_MONTHS,
    DEFAULT_SHARE_SUM_TOLERANCE,
    check_capacity,
    parse_assumptions,
    validate_months,
)

DEFAULT_MONTHS = 12


def month_period(start: date, month_index: int) -> tuple[date, date]:
    """First and last calendar day of the ``month_index``-th month (1-based) from ``start``."""
    period_start = start.replace(day=1) + relativedelta(months=month_index - 1)
    period_end = period_start + relativedelta(months=1, days=-1)
    return period_start, period_end


def project_month(
    scenario_id: str, assumptions: Assumptions, month_index: int, start: date
) -> ProjectionRow:
    """Compute one stored month. Depends only on ``month_index`` and the assumptions."""
    volumes = monthly_volumes(assumptions, month_index - 1)
    revenue = month_revenue(assumptions, volumes)
    period_start, period_end = month_period(start, month_index)
    return build_row(scenario_id, month_index, period_start, period_end, volumes, revenue)


def generate_projection(
    scenario_id: str,
    assumptions: Assumptions | Mapping[str, Any],
    months: int = DEFAULT_MONTHS,
    start: date | None = None,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
    share_tolerance: float = DEFAULT_SHARE_SUM_TOLERANCE,
) -> list[ProjectionRow]:
    """Project ``months`` consecutive months for a scenario.

    Args:
        scenario_id: Identifier copied onto every row
        assumptions: Parsed ``Assumptions`` or a raw field mapping to validate
        months: Horizon length
        start: Any day in the first projected month; defaults to the current month
        max_months: Longest horizon accepted
        share_tolerance: Allowed drift of the placement shares' sum from 1.0

    Returns:
        Rows for month_index 1..months, in order

    Raises:
        AssumptionValidationError: Before any month is computed, including when
            the peak month would not fit a stored row
    """
    validate_months(months, max_months)
    if not isinstance(assumptions, Assumptions):
        assumptions = parse_assumptions(assumptions, share_tolerance)
    check_capacity(assumptions, months)

    first_month = (start or date.today()).replace(day=1)
    return [
        project_month(scenario_id, assumptions, month_index, first_month)
        for month_index in range(1, months + 1)
    ]

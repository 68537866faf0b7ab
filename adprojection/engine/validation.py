"""Input validation for assumption sets and horizons.

Everything here runs before the first month is computed, so a run either
fails up front or produces a full set of rows.
"""

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from adprojection.core.exceptions import AssumptionValidationError
from adprojection.engine.types import ASSUMPTION_FIELDS, Assumptions, Placement

DEFAULT_SHARE_SUM_TOLERANCE = 0.001
DEFAULT_MAX_MONTHS = 360

# Starting populations may be zero or negative; the growth model floors them.
UNBOUNDED_FIELDS = frozenset({"starting_creators", "starting_campaigns"})

# Month-over-month rates may shrink a population but not flip its sign.
GROWTH_FIELDS = frozenset({"monthly_creator_growth", "monthly_campaign_growth"})

FRACTION_FIELDS = frozenset(
    {
        "percent_creators_monetized",
        "fill_rate",
        "share_preroll",
        "share_midroll",
        "share_postroll",
        "creator_rev_share",
        "platform_variable_cost_pct",
    }
)


def _as_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None if it is not one."""
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def parse_assumptions(
    raw: Mapping[str, Any],
    share_tolerance: float = DEFAULT_SHARE_SUM_TOLERANCE,
) -> Assumptions:
    """Check a raw assumption mapping and build an ``Assumptions`` value.

    Args:
        raw: Field name to value, e.g. the columns of a stored assumption row
        share_tolerance: Allowed distance of the three placement shares' sum from 1.0

    Returns:
        Assumptions with every field as a float

    Raises:
        AssumptionValidationError: Listing every problem found
    """
    errors: list[str] = []
    values: dict[str, float] = {}

    for name in ASSUMPTION_FIELDS:
        if name not in raw or raw[name] is None:
            errors.append(f"{name} is required")
            continue

        number = _as_number(raw[name])
        if number is None:
            errors.append(f"{name} must be a finite number")
            continue

        if name in GROWTH_FIELDS:
            if number < -1:
                errors.append(f"{name} cannot be below -1 (got {number})")
        elif name not in UNBOUNDED_FIELDS and number < 0:
            errors.append(f"{name} cannot be negative (got {number})")

        if name in FRACTION_FIELDS and number > 1:
            errors.append(f"{name} must be a fraction between 0 and 1 (got {number})")

        values[name] = number

    shares = [values.get(f"share_{p}") for p in ("preroll", "midroll", "postroll")]
    if all(s is not None for s in shares):
        share_sum = sum(shares)  # type: ignore[arg-type]
        if abs(share_sum - 1.0) > share_tolerance:
            errors.append(
                f"share_preroll + share_midroll + share_postroll must sum to 1.0 "
                f"(got {share_sum:.4f})"
            )

    if errors:
        raise AssumptionValidationError(errors)

    return Assumptions(**values)


def validate_months(months: Any, max_months: int = DEFAULT_MAX_MONTHS) -> int:
    """Check a projection horizon.

    Raises:
        AssumptionValidationError: If months is not an integer in 1..max_months
    """
    if isinstance(months, bool) or not isinstance(months, int):
        raise AssumptionValidationError([f"months must be an integer (got {months!r})"])

    if months < 1 or months > max_months:
        raise AssumptionValidationError([f"months must be between 1 and {max_months} (got {months})"])

    return months


# Largest monthly figures a stored row can hold; summaries add up to
# DEFAULT_MAX_MONTHS of these inside Numeric(18, 2) and BigInteger.
MAX_MONTHLY_COUNT_EXPONENT = 15
MAX_MONTHLY_AMOUNT_EXPONENT = 13
MAX_CPM = 10_000_000


def _log10_peak(start: float, rate: float, months: int) -> float | None:
    """log10 of the largest compounded population over the horizon, None if it is always 0."""
    if start <= 0:
        return None
    # Shrinking or flat populations peak in the first month
    exponent = months - 1 if rate > 0 else 0
    return math.log10(start) + exponent * math.log10(1 + rate)


def _log10_product(base: float | None, *factors: float) -> float | None:
    if base is None or any(f <= 0 for f in factors):
        return None
    return base + sum(math.log10(f) for f in factors)


def check_capacity(assumptions: Assumptions, months: int) -> None:
    """Reject plans whose peak month cannot be stored.

    Works in log10 space so runaway growth is caught here instead of
    overflowing float or ``decimal`` arithmetic partway through the run.

    Raises:
        AssumptionValidationError: Listing every figure that is out of range
    """
    errors: list[str] = []

    def check(label: str, log_value: float | None, limit_exponent: int) -> None:
        if log_value is not None and log_value > limit_exponent:
            errors.append(
                f"{label} would reach about 10^{log_value:.1f} per month within "
                f"{months} months (limit 10^{limit_exponent})"
            )

    creators = _log10_peak(
        assumptions.starting_creators, assumptions.monthly_creator_growth, months
    )
    episodes = _log10_product(
        creators,
        assumptions.percent_creators_monetized,
        assumptions.episodes_per_creator_per_month,
    )
    listens = _log10_product(episodes, assumptions.listens_per_episode)
    impressions = _log10_product(
        listens, assumptions.ad_slots_per_listen, assumptions.fill_rate
    )
    top_cpm = max(assumptions.cpm(p) for p in Placement)
    campaigns = _log10_peak(
        assumptions.starting_campaigns, assumptions.monthly_campaign_growth, months
    )

    check("creators", creators, MAX_MONTHLY_COUNT_EXPONENT)
    check("episodes", episodes, MAX_MONTHLY_COUNT_EXPONENT)
    check("listens", listens, MAX_MONTHLY_COUNT_EXPONENT)
    check("impressions", impressions, MAX_MONTHLY_COUNT_EXPONENT)
    check("gross revenue", _log10_product(impressions, top_cpm / 1000), MAX_MONTHLY_AMOUNT_EXPONENT)
    check("active campaigns", campaigns, MAX_MONTHLY_COUNT_EXPONENT)
    check(
        "max billable revenue",
        _log10_product(campaigns, assumptions.avg_campaign_monthly_budget),
        MAX_MONTHLY_AMOUNT_EXPONENT,
    )

    for p in Placement:
        if assumptions.cpm(p) > MAX_CPM:
            errors.append(f"cpm_{p.value} cannot exceed {MAX_CPM:,} (got {assumptions.cpm(p)})")

    if errors:
        raise AssumptionValidationError(errors)

"""Pure ad revenue projection engine (no I/O)."""

from adprojection.engine.aggregator import build_summary, yearly_rollups
from adprojection.engine.projection import generate_projection, month_period
from adprojection.engine.types import (
    ASSUMPTION_FIELDS,
    Assumptions,
    Placement,
    ProjectionRow,
    ProjectionSummary,
    YearRollup,
)
from adprojection.engine.validation import check_capacity, parse_assumptions, validate_months

__all__ = [
    "ASSUMPTION_FIELDS",
    "Assumptions",
    "Placement",
    "ProjectionRow",
    "ProjectionSummary",
    "YearRollup",
    "build_summary",
    "check_capacity",
    "generate_projection",
    "month_period",
    "parse_assumptions",
    "validate_months",
    "yearly_rollups",
]

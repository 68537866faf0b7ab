"""Projection runner: load a scenario, project it, and replace its stored results."""

import uuid
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from adprojection.core.config import settings
from adprojection.core.exceptions import (
    AssumptionsNotFoundError,
    PersistenceError,
    ScenarioNotFoundError,
)
from adprojection.engine import (
    ProjectionRow,
    ProjectionSummary,
    build_summary,
    generate_projection,
    parse_assumptions,
    validate_months,
)
from adprojection.models import (
    AdFinancialAssumptions,
    AdFinancialModelSummary,
    AdFinancialProjection,
    AdFinancialScenario,
    RevenueReport,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProjectionResult:
    """Rows and summary stored by one run."""

    scenario_id: uuid.UUID
    scenario_name: str
    rows: list[ProjectionRow]
    summary: ProjectionSummary

    @property
    def months(self) -> int:
        return len(self.rows)


def parse_scenario_id(value: str | uuid.UUID) -> uuid.UUID:
    """Parse a scenario id; anything that is not a UUID cannot exist."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ScenarioNotFoundError(value) from None


async def get_scenario(db: AsyncSession, scenario_id: str | uuid.UUID) -> AdFinancialScenario:
    """Load a scenario or raise ScenarioNotFoundError."""
    result = await db.execute(
        select(AdFinancialScenario).where(AdFinancialScenario.id == parse_scenario_id(scenario_id))
    )
    scenario = result.scalar_one_or_none()
    if scenario is None:
        raise ScenarioNotFoundError(scenario_id)
    return scenario


async def get_assumptions(db: AsyncSession, scenario_id: uuid.UUID) -> AdFinancialAssumptions:
    """Load a scenario's assumption set or raise AssumptionsNotFoundError."""
    result = await db.execute(
        select(AdFinancialAssumptions).where(AdFinancialAssumptions.scenario_id == scenario_id)
    )
    assumptions = result.scalar_one_or_none()
    if assumptions is None:
        raise AssumptionsNotFoundError(scenario_id)
    return assumptions


async def load_baseline_revenue(db: AsyncSession, today: date | None = None) -> Decimal:
    """Net revenue actually reported over the lookback window (context for logs only)."""
    since = (today or date.today()) - timedelta(days=settings.BASELINE_LOOKBACK_DAYS)
    result = await db.execute(
        select(func.coalesce(func.sum(RevenueReport.net_revenue), 0)).where(
            RevenueReport.period_start >= since
        )
    )
    return Decimal(str(result.scalar() or 0))


async def replace_projection(
    db: AsyncSession,
    scenario_id: uuid.UUID,
    rows: list[ProjectionRow],
    summary: ProjectionSummary,
) -> None:
    """Swap a scenario's stored rows and summary in a single transaction.

    Raises:
        PersistenceError: If any statement or the commit fails; nothing is kept
    """
    try:
        await db.execute(
            delete(AdFinancialProjection).where(AdFinancialProjection.scenario_id == scenario_id)
        )
        db.add_all(AdFinancialProjection.from_row(scenario_id, row) for row in rows)

        existing = await db.execute(
            select(AdFinancialModelSummary).where(
                AdFinancialModelSummary.scenario_id == scenario_id
            )
        )
        stored = existing.scalar_one_or_none()
        if stored is None:
            stored = AdFinancialModelSummary(scenario_id=scenario_id)
            db.add(stored)
        stored.apply(summary)

        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("projection_persist_failed", scenario_id=str(scenario_id))
        raise PersistenceError(f"Failed to store projection: {type(e).__name__}") from e


async def run_projection(
    db: AsyncSession,
    scenario_id: str | uuid.UUID,
    months: int | None = None,
    start: date | None = None,
) -> ProjectionResult:
    """Project a scenario and replace its stored rows and summary.

    Loading and validation happen before anything is written, so a failed
    run leaves the previous results untouched.

    Args:
        db: Database session
        scenario_id: Scenario to project
        months: Horizon (defaults to DEFAULT_PROJECTION_MONTHS)
        start: Any day in the first projected month (defaults to the current month)

    Raises:
        ScenarioNotFoundError: Unknown scenario
        AssumptionsNotFoundError: Scenario without assumptions
        AssumptionValidationError: Out-of-domain assumptions or horizon
        PersistenceError: Storage failure
    """
    horizon = validate_months(
        settings.DEFAULT_PROJECTION_MONTHS if months is None else months,
        settings.MAX_PROJECTION_MONTHS,
    )

    scenario = await get_scenario(db, scenario_id)
    log = logger.bind(scenario_id=str(scenario.id), scenario_name=scenario.name, months=horizon)
    log.info("projection_started")

    stored_assumptions = await get_assumptions(db, scenario.id)
    assumptions = parse_assumptions(stored_assumptions.as_mapping(), settings.SHARE_SUM_TOLERANCE)

    baseline = await load_baseline_revenue(db)
    log.info(
        "projection_baseline_loaded",
        baseline_net_revenue=float(baseline),
        lookback_days=settings.BASELINE_LOOKBACK_DAYS,
    )

    rows = generate_projection(
        str(scenario.id),
        assumptions,
        horizon,
        start or date.today(),
        max_months=settings.MAX_PROJECTION_MONTHS,
    )
    summary = build_summary(scenario.name, rows)

    await replace_projection(db, scenario.id, rows, summary)

    log.info(
        "projection_completed",
        total_gross_revenue=float(summary.total_gross_revenue),
        total_platform_revenue=float(summary.total_platform_revenue),
        total_impressions=summary.total_impressions,
    )
    return ProjectionResult(
        scenario_id=scenario.id,
        scenario_name=scenario.name,
        rows=rows,
        summary=summary,
    )


async def list_projection_rows(
    db: AsyncSession, scenario_id: str | uuid.UUID
) -> list[AdFinancialProjection]:
    """Stored rows of a scenario in month order."""
    scenario = await get_scenario(db, scenario_id)
    result = await db.execute(
        select(AdFinancialProjection)
        .where(AdFinancialProjection.scenario_id == scenario.id)
        .order_by(AdFinancialProjection.month_index)
    )
    return list(result.scalars().all())

"""Projection run, results and export endpoints."""

import uuid
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from adprojection.core.audit import audit_projection_export, audit_projection_run
from adprojection.core.config import settings
from adprojection.core.exceptions import ProjectionError, SummaryNotFoundError
from adprojection.core.limiter import limiter
from adprojection.core.locks import scenario_lock
from adprojection.db.redis import get_redis
from adprojection.db.session import get_db
from adprojection.engine import yearly_rollups
from adprojection.middleware.request_tracing import get_client_ip
from adprojection.models import AdFinancialModelSummary
from adprojection.services.export import export_filename, projection_csv
from adprojection.services.projections import (
    get_scenario,
    list_projection_rows,
    parse_scenario_id,
    run_projection,
)

router = APIRouter(prefix="/projections", tags=["projections"])


class ProjectionRunRequest(BaseModel):
    """Run a projection for one scenario."""

    scenario_id: str
    months: int | None = None
    start_date: date | None = None


class ProjectionRunResponse(BaseModel):
    """Headline totals of a completed run."""

    success: bool = True
    scenario_id: str
    months: int
    total_gross_revenue: float
    total_platform_revenue: float
    total_creator_payout: float
    total_impressions: int
    summary: str


class ProjectionRowResponse(BaseModel):
    """Stored projection month."""

    model_config = ConfigDict(from_attributes=True)

    scenario_id: uuid.UUID
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
    gross_revenue_preroll: float
    gross_revenue_midroll: float
    gross_revenue_postroll: float
    gross_revenue_total: float
    gross_revenue_unconstrained: float
    active_campaigns: int
    max_billable_revenue: float
    constrained_gross_revenue: float
    creator_payout: float
    platform_variable_costs: float
    platform_net_revenue: float


class SummaryResponse(BaseModel):
    """Stored summary of a scenario's latest run."""

    model_config = ConfigDict(from_attributes=True)

    scenario_id: uuid.UUID
    months: int
    total_gross_revenue: float
    total_platform_revenue: float
    total_creator_payout: float
    total_platform_variable_costs: float
    total_impressions: int
    average_cpm: float
    year1_gross_revenue: float
    year1_platform_revenue: float
    year1_creator_payout: float
    year1_impressions: int
    summary_text: str


class YearRollupResponse(BaseModel):
    """Totals for one projection year."""

    model_config = ConfigDict(from_attributes=True)

    year: int
    months: int
    gross_revenue: float
    creator_payout: float
    platform_variable_costs: float
    platform_net_revenue: float
    impressions: int


@router.post("/run", response_model=ProjectionRunResponse)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def run_projection_endpoint(
    request: Request,
    body: ProjectionRunRequest,
    db: AsyncSession = Depends(get_db),
    redis: Any = Depends(get_redis),
) -> ProjectionRunResponse:
    """Project a scenario and replace its stored rows and summary.

    Runs for the same scenario are serialized; a second request while one
    is in flight gets 409 instead of racing the first.
    """
    months = settings.DEFAULT_PROJECTION_MONTHS if body.months is None else body.months
    ip_address = get_client_ip(request)

    try:
        scenario_id = parse_scenario_id(body.scenario_id)
        async with scenario_lock(str(scenario_id), redis):
            result = await run_projection(db, scenario_id, months, body.start_date)
    except ProjectionError as e:
        audit_projection_run(
            body.scenario_id, months, success=False, error=e.message, ip_address=ip_address
        )
        raise

    audit_projection_run(str(result.scenario_id), result.months, success=True, ip_address=ip_address)

    summary = result.summary
    return ProjectionRunResponse(
        scenario_id=str(result.scenario_id),
        months=result.months,
        total_gross_revenue=float(summary.total_gross_revenue),
        total_platform_revenue=float(summary.total_platform_revenue),
        total_creator_payout=float(summary.total_creator_payout),
        total_impressions=summary.total_impressions,
        summary=summary.summary_text,
    )


@router.get("/summaries", response_model=list[SummaryResponse])
async def list_summaries(db: AsyncSession = Depends(get_db)) -> list[AdFinancialModelSummary]:
    """All stored projection summaries."""
    result = await db.execute(
        select(AdFinancialModelSummary).order_by(AdFinancialModelSummary.updated_at.desc())
    )
    return list(result.scalars().all())


@router.get("/summaries/{scenario_id}", response_model=SummaryResponse)
async def get_summary(
    scenario_id: str,
    db: AsyncSession = Depends(get_db),
) -> AdFinancialModelSummary:
    """Summary of a scenario's latest run."""
    scenario = await get_scenario(db, scenario_id)
    result = await db.execute(
        select(AdFinancialModelSummary).where(AdFinancialModelSummary.scenario_id == scenario.id)
    )
    summary = result.scalar_one_or_none()
    if summary is None:
        raise SummaryNotFoundError(scenario_id)
    return summary


@router.get("/{scenario_id}", response_model=list[ProjectionRowResponse])
async def get_projection_rows(
    scenario_id: str,
    db: AsyncSession = Depends(get_db),
) -> list[Any]:
    """Stored rows of a scenario ordered by month."""
    return await list_projection_rows(db, scenario_id)


@router.get("/{scenario_id}/yearly", response_model=list[YearRollupResponse])
async def get_yearly_rollups(
    scenario_id: str,
    db: AsyncSession = Depends(get_db),
) -> list[Any]:
    """Stored rows rolled up into 12-month blocks."""
    rows = await list_projection_rows(db, scenario_id)
    return yearly_rollups(rows)


@router.get("/{scenario_id}/export.csv")
async def export_projection_csv(
    request: Request,
    scenario_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Download stored rows as CSV."""
    rows = await list_projection_rows(db, scenario_id)
    audit_projection_export(scenario_id, len(rows), ip_address=get_client_ip(request))

    filename = export_filename(scenario_id, date.today().isoformat())
    return Response(
        content=projection_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

"""Scenario and assumption endpoints."""

import uuid
from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from adprojection.core.audit import AuditAction, audit_assumptions_change, audit_log
from adprojection.core.config import settings
from adprojection.core.exceptions import AssumptionsNotFoundError
from adprojection.db.session import get_db
from adprojection.engine import parse_assumptions
from adprojection.middleware.request_tracing import get_client_ip
from adprojection.models import AdFinancialAssumptions, AdFinancialScenario
from adprojection.services.projections import get_scenario

logger = structlog.get_logger()

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


class AssumptionsPayload(BaseModel):
    """Full assumption set; rates and shares as fractions (0.05 = 5%)."""

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


class AssumptionsResponse(AssumptionsPayload):
    """Stored assumption set."""

    model_config = ConfigDict(from_attributes=True)

    scenario_id: uuid.UUID
    updated_at: datetime


class ScenarioCreate(BaseModel):
    """Scenario creation schema."""

    name: str
    description: str | None = None
    is_default: bool = False
    assumptions: AssumptionsPayload | None = None


class ScenarioResponse(BaseModel):
    """Scenario response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    is_default: bool
    created_at: datetime


@router.get("", response_model=list[ScenarioResponse])
async def list_scenarios(db: AsyncSession = Depends(get_db)) -> list[AdFinancialScenario]:
    """List scenarios, default scenario first, then oldest first."""
    result = await db.execute(
        select(AdFinancialScenario).order_by(
            AdFinancialScenario.is_default.desc(), AdFinancialScenario.created_at
        )
    )
    return list(result.scalars().all())


@router.post("", response_model=ScenarioResponse, status_code=status.HTTP_201_CREATED)
async def create_scenario(
    request: Request,
    scenario_data: ScenarioCreate,
    db: AsyncSession = Depends(get_db),
) -> AdFinancialScenario:
    """Create a scenario, optionally with its assumption set.

    Marking a scenario as default clears the flag on every other scenario.
    """
    # Reject bad assumptions before anything is written
    if scenario_data.assumptions is not None:
        parse_assumptions(scenario_data.assumptions.model_dump(), settings.SHARE_SUM_TOLERANCE)

    if scenario_data.is_default:
        await db.execute(update(AdFinancialScenario).values(is_default=False))

    scenario = AdFinancialScenario(
        name=scenario_data.name,
        description=scenario_data.description,
        is_default=scenario_data.is_default,
    )
    db.add(scenario)
    await db.flush()

    if scenario_data.assumptions is not None:
        db.add(
            AdFinancialAssumptions(
                scenario_id=scenario.id, **scenario_data.assumptions.model_dump()
            )
        )

    await db.commit()
    await db.refresh(scenario)

    audit_log(
        action=AuditAction.SCENARIO_CREATE,
        resource_type="scenario",
        resource_id=str(scenario.id),
        details={"name": scenario.name, "with_assumptions": scenario_data.assumptions is not None},
        ip_address=get_client_ip(request),
    )
    return scenario


@router.get("/{scenario_id}", response_model=ScenarioResponse)
async def get_scenario_endpoint(
    scenario_id: str,
    db: AsyncSession = Depends(get_db),
) -> AdFinancialScenario:
    """Get a single scenario by ID."""
    return await get_scenario(db, scenario_id)


@router.get("/{scenario_id}/assumptions", response_model=AssumptionsResponse)
async def get_scenario_assumptions(
    scenario_id: str,
    db: AsyncSession = Depends(get_db),
) -> AdFinancialAssumptions:
    """Get the assumption set of a scenario."""
    scenario = await get_scenario(db, scenario_id)
    result = await db.execute(
        select(AdFinancialAssumptions).where(AdFinancialAssumptions.scenario_id == scenario.id)
    )
    assumptions = result.scalar_one_or_none()
    if assumptions is None:
        raise AssumptionsNotFoundError(scenario_id)
    return assumptions


@router.put("/{scenario_id}/assumptions", response_model=AssumptionsResponse)
async def put_scenario_assumptions(
    request: Request,
    scenario_id: str,
    payload: AssumptionsPayload,
    db: AsyncSession = Depends(get_db),
) -> AdFinancialAssumptions:
    """Create or replace the assumption set of a scenario.

    The set is validated the same way a projection run validates it, so an
    accepted set can always be projected.
    """
    scenario = await get_scenario(db, scenario_id)
    values = payload.model_dump()
    parse_assumptions(values, settings.SHARE_SUM_TOLERANCE)

    result = await db.execute(
        select(AdFinancialAssumptions).where(AdFinancialAssumptions.scenario_id == scenario.id)
    )
    assumptions = result.scalar_one_or_none()

    if assumptions is None:
        assumptions = AdFinancialAssumptions(scenario_id=scenario.id, **values)
        db.add(assumptions)
        changes = values
    else:
        changes = {
            name: value for name, value in values.items() if getattr(assumptions, name) != value
        }
        for name, value in values.items():
            setattr(assumptions, name, value)

    await db.commit()
    await db.refresh(assumptions)

    logger.info("assumptions_saved", scenario_id=str(scenario.id), changed=len(changes))
    audit_assumptions_change(str(scenario.id), changes, ip_address=get_client_ip(request))
    return assumptions

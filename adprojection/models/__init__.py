"""SQLAlchemy models."""

from adprojection.models.assumptions import AdFinancialAssumptions
from adprojection.models.projection import AdFinancialProjection
from adprojection.models.revenue_report import RevenueReport
from adprojection.models.scenario import AdFinancialScenario
from adprojection.models.summary import AdFinancialModelSummary

__all__ = [
    "AdFinancialAssumptions",
    "AdFinancialModelSummary",
    "AdFinancialProjection",
    "AdFinancialScenario",
    "RevenueReport",
]

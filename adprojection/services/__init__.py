"""Projection services."""

from adprojection.services.export import projection_csv
from adprojection.services.projections import (
    ProjectionResult,
    list_projection_rows,
    run_projection,
)

__all__ = ["ProjectionResult", "list_projection_rows", "projection_csv", "run_projection"]

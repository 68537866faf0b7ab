"""Audit logging for operations that change or expose financial model data.

Provides structured audit events for:
- Scenario creation
- Assumption updates
- Projection runs
- Projection exports
"""

from typing import Any

import structlog

logger = structlog.get_logger("audit")


class AuditAction:
    """Audit action constants."""

    # Scenarios
    SCENARIO_CREATE = "scenario.create"

    # Assumptions
    ASSUMPTIONS_UPDATE = "assumptions.update"

    # Projections
    PROJECTION_RUN = "projection.run"
    PROJECTION_EXPORT = "projection.export"


def audit_log(
    action: str,
    resource_type: str | None = None,
    resource_id: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
    ip_address: str | None = None,
) -> None:
    """Log an audit event.

    Args:
        action: The action being performed (use AuditAction constants)
        resource_type: Type of resource being acted upon (e.g., "scenario")
        resource_id: ID of the resource being acted upon
        details: Additional details about the action
        success: Whether the action succeeded
        ip_address: Client IP address
    """
    log_data: dict[str, Any] = {
        "audit": True,  # Flag for filtering audit logs
        "action": action,
        "success": success,
    }

    if resource_type:
        log_data["resource_type"] = resource_type
    if resource_id:
        log_data["resource_id"] = resource_id
    if ip_address:
        log_data["ip_address"] = ip_address
    if details:
        log_data["details"] = details

    if success:
        logger.info("audit_event", **log_data)
    else:
        logger.warning("audit_event", **log_data)


def audit_projection_run(
    scenario_id: str,
    months: int,
    success: bool,
    error: str | None = None,
    ip_address: str | None = None,
) -> None:
    """Convenience function to audit a projection run.

    Args:
        scenario_id: Scenario the projection was run for
        months: Requested horizon
        success: Whether rows and summary were stored
        error: Error message when the run failed
        ip_address: Client IP
    """
    details: dict[str, Any] = {"months": months}
    if error:
        details["error"] = error

    audit_log(
        action=AuditAction.PROJECTION_RUN,
        resource_type="scenario",
        resource_id=scenario_id,
        details=details,
        success=success,
        ip_address=ip_address,
    )


def audit_assumptions_change(
    scenario_id: str,
    changes: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> None:
    """Convenience function to audit assumption updates."""
    audit_log(
        action=AuditAction.ASSUMPTIONS_UPDATE,
        resource_type="assumptions",
        resource_id=scenario_id,
        details={"changes": changes} if changes else None,
        ip_address=ip_address,
    )


def audit_projection_export(
    scenario_id: str,
    record_count: int,
    ip_address: str | None = None,
) -> None:
    """Convenience function to audit CSV exports of projection rows."""
    audit_log(
        action=AuditAction.PROJECTION_EXPORT,
        resource_type="projection",
        resource_id=scenario_id,
        details={"record_count": record_count},
        ip_address=ip_address,
    )

"""Error types raised while loading, validating and persisting projections."""

from fastapi import status


class ProjectionError(Exception):
    """Base class for failures surfaced to the caller as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ScenarioNotFoundError(ProjectionError):
    """No scenario exists for the requested id."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, scenario_id: object) -> None:
        super().__init__(f"Scenario not found: {scenario_id}")
        self.scenario_id = scenario_id


class AssumptionsNotFoundError(ProjectionError):
    """The scenario exists but has no assumption set."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, scenario_id: object) -> None:
        super().__init__(f"Assumptions not found for scenario: {scenario_id}")
        self.scenario_id = scenario_id


class SummaryNotFoundError(ProjectionError):
    """The scenario has never been projected."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, scenario_id: object) -> None:
        super().__init__(f"No projection summary for scenario: {scenario_id}")
        self.scenario_id = scenario_id


class AssumptionValidationError(ProjectionError):
    """One or more assumption values are outside their domain.

    All problems found in a single pass are kept in ``errors`` so the caller
    can fix them together.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[str]) -> None:
        super().__init__("Invalid assumptions: " + "; ".join(errors))
        self.errors = errors


class ProjectionInProgressError(ProjectionError):
    """Another run currently holds the scenario's lock."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, scenario_id: object) -> None:
        super().__init__(f"A projection is already running for scenario: {scenario_id}")
        self.scenario_id = scenario_id


class PersistenceError(ProjectionError):
    """Replacing projection rows or upserting the summary failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

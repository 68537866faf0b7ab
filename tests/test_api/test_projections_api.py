"""Tests for projection API endpoints."""

import uuid
from typing import Any

import pytest
from httpx import AsyncClient

from adprojection.core.locks import LOCK_PREFIX


class TestRunEndpoint:
    """Test POST /api/v1/projections/run."""

    @pytest.mark.asyncio
    async def test_run_success(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test a run returns the headline totals."""
        scenario = await create_test_scenario(assumptions=base_assumptions)

        response = await test_client.post(
            "/api/v1/projections/run",
            json={"scenario_id": str(scenario.id), "months": 1, "start_date": "2025-01-01"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["scenario_id"] == str(scenario.id)
        assert data["months"] == 1
        assert data["total_gross_revenue"] == 8128.0
        assert data["total_platform_revenue"] == 2438.4
        assert data["total_creator_payout"] == 4876.8
        assert data["total_impressions"] == 640_000
        assert "Ad Revenue Projection: Base Case" in data["summary"]

    @pytest.mark.asyncio
    async def test_run_default_months(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test omitting months runs twelve."""
        scenario = await create_test_scenario(assumptions=base_assumptions)

        response = await test_client.post(
            "/api/v1/projections/run", json={"scenario_id": str(scenario.id)}
        )

        assert response.status_code == 200
        assert response.json()["months"] == 12

    @pytest.mark.asyncio
    async def test_run_releases_lock(
        self,
        test_client: AsyncClient,
        test_redis: Any,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test back-to-back runs both succeed."""
        scenario = await create_test_scenario(assumptions=base_assumptions)
        body = {"scenario_id": str(scenario.id), "months": 3}

        first = await test_client.post("/api/v1/projections/run", json=body)
        second = await test_client.post("/api/v1/projections/run", json=body)

        assert first.status_code == 200
        assert second.status_code == 200
        assert await test_redis.get(f"{LOCK_PREFIX}:{scenario.id}") is None

    @pytest.mark.asyncio
    async def test_run_unknown_scenario(self, test_client: AsyncClient) -> None:
        """Test running a missing scenario returns 404."""
        response = await test_client.post(
            "/api/v1/projections/run", json={"scenario_id": str(uuid.uuid4())}
        )

        assert response.status_code == 404
        assert response.json()["error"].startswith("Scenario not found")

    @pytest.mark.asyncio
    async def test_run_malformed_scenario_id(self, test_client: AsyncClient) -> None:
        """Test a non-UUID id is treated as not found."""
        response = await test_client.post(
            "/api/v1/projections/run", json={"scenario_id": "nope"}
        )

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_run_without_assumptions(
        self, test_client: AsyncClient, create_test_scenario: Any
    ) -> None:
        """Test a scenario lacking assumptions returns 404."""
        scenario = await create_test_scenario()

        response = await test_client.post(
            "/api/v1/projections/run", json={"scenario_id": str(scenario.id)}
        )

        assert response.status_code == 404
        assert response.json()["error"].startswith("Assumptions not found")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("months", [0, 361])
    async def test_run_invalid_months(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
        months: int,
    ) -> None:
        """Test an out-of-range horizon returns 400."""
        scenario = await create_test_scenario(assumptions=base_assumptions)

        response = await test_client.post(
            "/api/v1/projections/run",
            json={"scenario_id": str(scenario.id), "months": months},
        )

        assert response.status_code == 400
        assert "months must be between 1 and 360" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_run_rejects_runaway_growth(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test a 360-month high-growth plan returns 400 instead of overflowing."""
        base_assumptions["monthly_creator_growth"] = 0.2
        scenario = await create_test_scenario(assumptions=base_assumptions)

        response = await test_client.post(
            "/api/v1/projections/run",
            json={"scenario_id": str(scenario.id), "months": 360},
        )

        assert response.status_code == 400
        assert "impressions would reach" in response.json()["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("months", ["abc", 12.5, [12]])
    async def test_run_non_integer_months(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
        months: Any,
    ) -> None:
        """Test a malformed horizon returns 400 with an error body."""
        scenario = await create_test_scenario(assumptions=base_assumptions)

        response = await test_client.post(
            "/api/v1/projections/run",
            json={"scenario_id": str(scenario.id), "months": months},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"].startswith("months: ")
        assert "detail" not in data

    @pytest.mark.asyncio
    async def test_run_missing_scenario_id(self, test_client: AsyncClient) -> None:
        """Test a body without scenario_id returns 400 naming the field."""
        response = await test_client.post("/api/v1/projections/run", json={"months": 12})

        assert response.status_code == 400
        assert response.json() == {"error": "scenario_id: Field required"}

    @pytest.mark.asyncio
    async def test_run_conflicts_with_held_lock(
        self,
        test_client: AsyncClient,
        test_redis: Any,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test a run while another holds the lock returns 409 and keeps the lock."""
        scenario = await create_test_scenario(assumptions=base_assumptions)
        await test_redis.set(f"{LOCK_PREFIX}:{scenario.id}", "other-run", ex=60)

        response = await test_client.post(
            "/api/v1/projections/run", json={"scenario_id": str(scenario.id)}
        )

        assert response.status_code == 409
        assert "already running" in response.json()["error"]
        assert await test_redis.get(f"{LOCK_PREFIX}:{scenario.id}") == "other-run"


class TestResultEndpoints:
    """Test reading stored rows, summaries, rollups and CSV."""

    async def _run(self, client: AsyncClient, scenario_id: Any, months: int) -> None:
        response = await client.post(
            "/api/v1/projections/run",
            json={"scenario_id": str(scenario_id), "months": months, "start_date": "2025-01-01"},
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_get_rows(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test stored rows come back in month order."""
        scenario = await create_test_scenario(assumptions=base_assumptions)
        await self._run(test_client, scenario.id, 3)

        response = await test_client.get(f"/api/v1/projections/{scenario.id}")

        assert response.status_code == 200
        rows = response.json()
        assert [r["month_index"] for r in rows] == [1, 2, 3]
        assert rows[0]["period_start"] == "2025-01-01"
        assert rows[0]["period_end"] == "2025-01-31"
        assert rows[0]["constrained_gross_revenue"] == 8128.0
        assert rows[0]["impressions_preroll"] == 320_000
        assert rows[1]["creators"] == 1050

    @pytest.mark.asyncio
    async def test_get_rows_before_any_run(
        self, test_client: AsyncClient, create_test_scenario: Any
    ) -> None:
        """Test a never-projected scenario has no rows."""
        scenario = await create_test_scenario()

        response = await test_client.get(f"/api/v1/projections/{scenario.id}")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_rows_unknown_scenario(self, test_client: AsyncClient) -> None:
        response = await test_client.get(f"/api/v1/projections/{uuid.uuid4()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_summary(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test the stored summary of the latest run."""
        scenario = await create_test_scenario(assumptions=base_assumptions)
        await self._run(test_client, scenario.id, 12)

        response = await test_client.get(f"/api/v1/projections/summaries/{scenario.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["scenario_id"] == str(scenario.id)
        assert data["months"] == 12
        assert data["average_cpm"] == 12.7
        assert data["year1_gross_revenue"] == data["total_gross_revenue"]
        assert data["summary_text"].startswith("Ad Revenue Projection: Base Case")

    @pytest.mark.asyncio
    async def test_get_summary_before_any_run(
        self, test_client: AsyncClient, create_test_scenario: Any
    ) -> None:
        """Test a never-projected scenario has no summary."""
        scenario = await create_test_scenario()

        response = await test_client.get(f"/api/v1/projections/summaries/{scenario.id}")

        assert response.status_code == 404
        assert response.json()["error"].startswith("No projection summary")

    @pytest.mark.asyncio
    async def test_list_summaries(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test every projected scenario has one summary."""
        first = await create_test_scenario(assumptions=base_assumptions)
        second = await create_test_scenario(
            assumptions=base_assumptions, name="Upside", is_default=False
        )
        await self._run(test_client, first.id, 6)
        await self._run(test_client, second.id, 6)
        await self._run(test_client, second.id, 3)

        response = await test_client.get("/api/v1/projections/summaries")

        assert response.status_code == 200
        summaries = response.json()
        assert len(summaries) == 2
        assert {s["scenario_id"] for s in summaries} == {str(first.id), str(second.id)}

    @pytest.mark.asyncio
    async def test_yearly_rollups(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test stored rows roll up into 12-month blocks."""
        scenario = await create_test_scenario(assumptions=base_assumptions)
        await self._run(test_client, scenario.id, 30)

        response = await test_client.get(f"/api/v1/projections/{scenario.id}/yearly")

        assert response.status_code == 200
        years = response.json()
        assert [y["year"] for y in years] == [1, 2, 3]
        assert [y["months"] for y in years] == [12, 12, 6]
        assert years[1]["gross_revenue"] > years[0]["gross_revenue"]

    @pytest.mark.asyncio
    async def test_export_csv(
        self,
        test_client: AsyncClient,
        create_test_scenario: Any,
        base_assumptions: dict[str, Any],
    ) -> None:
        """Test CSV download of stored rows."""
        scenario = await create_test_scenario(assumptions=base_assumptions)
        await self._run(test_client, scenario.id, 2)

        response = await test_client.get(f"/api/v1/projections/{scenario.id}/export.csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        assert f"ad-financial-projection-{scenario.id}-" in response.headers["content-disposition"]
        lines = response.text.strip().split("\n")
        assert lines[0].startswith("Month,Period Start,Period End")
        assert len(lines) == 3
        assert lines[1].startswith("1,2025-01-01,2025-01-31,1000,800,640000,8128.00")

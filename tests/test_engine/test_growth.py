"""Tests for the compound growth model."""

from typing import Any

import pytest

from adprojection.engine import parse_assumptions
from adprojection.engine.growth import compound, monthly_volumes
from adprojection.engine.rounding import round_half_up, to_cents


class TestRounding:
    """Test half-away-from-zero rounding of counts and cents."""

    def test_round_half_up_ties_go_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.4999) == 2

    def test_round_half_up_negative_ties_go_away_from_zero(self) -> None:
        assert round_half_up(-2.5) == -3

    def test_to_cents_uses_shortest_repr(self) -> None:
        # 2.675 is stored as 2.67499999... in binary
        assert str(to_cents(2.675)) == "2.68"
        assert str(to_cents(0.005)) == "0.01"
        assert str(to_cents(1234)) == "1234.00"


class TestCompound:
    """Test compound growth of a single population."""

    def test_month_zero_returns_start(self) -> None:
        assert compound(1000, 0.05, 0) == 1000

    def test_growth_compounds(self) -> None:
        assert compound(1000, 0.05, 1) == 1050
        assert compound(1000, 0.05, 2) == 1103  # 1102.5 rounds up
        assert compound(1000, 0.05, 12) == round(1000 * 1.05**12)

    def test_negative_growth_shrinks(self) -> None:
        assert compound(1000, -0.1, 1) == 900
        assert compound(1000, -0.1, 2) == 810

    def test_full_decline_floors_at_zero(self) -> None:
        assert compound(500, -1.0, 1) == 0
        assert compound(500, -1.0, 5) == 0

    @pytest.mark.parametrize("start", [0, -10, -0.5])
    def test_non_positive_start_is_zero(self, start: float) -> None:
        assert compound(start, 0.5, 0) == 0
        assert compound(start, 0.5, 6) == 0


class TestMonthlyVolumes:
    """Test derived creator, episode and listen counts."""

    def test_first_month_volumes(self, base_assumptions: dict[str, Any]) -> None:
        volumes = monthly_volumes(parse_assumptions(base_assumptions), 0)

        assert volumes.creators == 1000
        assert volumes.monetized_creators == 200
        assert volumes.episodes == 800
        assert volumes.total_listens == 400_000
        assert volumes.active_campaigns == 50

    def test_second_month_volumes(self, base_assumptions: dict[str, Any]) -> None:
        volumes = monthly_volumes(parse_assumptions(base_assumptions), 1)

        assert volumes.creators == 1050
        assert volumes.monetized_creators == 210
        assert volumes.episodes == 840
        assert volumes.active_campaigns == 52  # 51.5 rounds up

    def test_fractional_episode_rate_stays_real(self, base_assumptions: dict[str, Any]) -> None:
        base_assumptions["episodes_per_creator_per_month"] = 2.5
        base_assumptions["starting_creators"] = 3
        base_assumptions["percent_creators_monetized"] = 1.0

        volumes = monthly_volumes(parse_assumptions(base_assumptions), 0)

        assert volumes.episodes == pytest.approx(7.5)
        assert volumes.total_listens == pytest.approx(3750)

    def test_degenerate_population_never_negative(self, base_assumptions: dict[str, Any]) -> None:
        base_assumptions["starting_creators"] = -100
        base_assumptions["starting_campaigns"] = 0

        volumes = monthly_volumes(parse_assumptions(base_assumptions), 3)

        assert volumes.creators == 0
        assert volumes.monetized_creators == 0
        assert volumes.total_listens == 0
        assert volumes.active_campaigns == 0

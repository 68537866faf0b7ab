"""Compound growth of creator and campaign populations."""

from adprojection.engine.rounding import round_half_up
from adprojection.engine.types import Assumptions, MonthlyVolumes


def compound(start: float, rate: float, month_offset: int) -> int:
    """``start * (1 + rate) ** month_offset`` rounded, never below zero."""
    if start <= 0:
        return 0
    return max(0, round_half_up(start * (1 + rate) ** month_offset))


def creators_at(assumptions: Assumptions, month_offset: int) -> int:
    return compound(
        assumptions.starting_creators, assumptions.monthly_creator_growth, month_offset
    )


def campaigns_at(assumptions: Assumptions, month_offset: int) -> int:
    return compound(
        assumptions.starting_campaigns, assumptions.monthly_campaign_growth, month_offset
    )


def monthly_volumes(assumptions: Assumptions, month_offset: int) -> MonthlyVolumes:
    """Counts for the month ``month_offset`` months after the start (0-based).

    Episodes and listens stay real-valued so a fractional episode rate does
    not lose precision before the revenue math.
    """
    creators = creators_at(assumptions, month_offset)
    monetized = round_half_up(creators * assumptions.percent_creators_monetized)
    episodes = monetized * assumptions.episodes_per_creator_per_month

    return MonthlyVolumes(
        month_offset=month_offset,
        creators=creators,
        monetized_creators=monetized,
        episodes=episodes,
        total_listens=episodes * assumptions.listens_per_episode,
        active_campaigns=campaigns_at(assumptions, month_offset),
    )

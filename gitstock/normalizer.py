"""
Input normalizer. Pure functions, no state.

Prepares the raw calendar for the simulator:
- trims leading inactivity (history starts at the first active day)
- sets the IPO price from the first week of trimmed history
- derives the reputation multiplier from stars and followers

A calendar with no active day at all never reaches the simulator;
flat_series() produces its trivial $1 chart instead.
"""

import math
from typing import Sequence

from gitstock.config import DEFAULT_SCORING, ScoringConfig
from gitstock.models import Candle, ContributionDay


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def first_active_index(days: Sequence[ContributionDay]) -> int:
    """Index of the first day with count > 0, or -1 if there is none."""
    return next((i for i, d in enumerate(days) if d.count > 0), -1)


def trim_leading_inactivity(
        days: Sequence[ContributionDay]) -> list[ContributionDay]:
    """Drop the zero days before the first active day. Empty if none."""
    start = first_active_index(days)
    if start == -1:
        return []
    return list(days[start:])


def flat_series(days: Sequence[ContributionDay],
                config: ScoringConfig = DEFAULT_SCORING) -> list[Candle]:
    """Last N raw days as flat $1 candles. For all-zero histories."""
    tail = list(days)[-config.trivial_series_days:]
    floor = config.price_floor
    return [
        Candle(date=d.date, open=floor, high=floor, low=floor, close=floor,
               volume=0, is_green=False)
        for d in tail
    ]


def ipo_price(trimmed: Sequence[ContributionDay],
              config: ScoringConfig = DEFAULT_SCORING) -> float:
    """
    Day-0 price of the trimmed series, in [base, base + cap].

    mean is over however many days the first window actually holds.
    """
    first_week = list(trimmed)[:config.ipo_window]
    if not first_week:
        return config.ipo_base
    avg = sum(d.count for d in first_week) / len(first_week)
    return config.ipo_base + min(config.ipo_cap, avg * config.ipo_scale)


def reputation_multiplier(total_stars: int, followers: int,
                          config: ScoringConfig = DEFAULT_SCORING) -> float:
    """
    Scale for positive price moves, in [1.0, 1.0 + max_bonus].

    Log-scaled against the anchors (50k stars, 10k followers by default),
    each part clamped to [0, 1] before and after weighting.
    """
    stars_score = _clamp(
        math.log10(total_stars + 1) / math.log10(config.reputation_stars_anchor),
        0.0, 1.0)
    followers_score = _clamp(
        math.log10(followers + 1)
        / math.log10(config.reputation_followers_anchor),
        0.0, 1.0)
    combined = _clamp(
        stars_score * config.reputation_stars_weight
        + followers_score * config.reputation_followers_weight,
        0.0, 1.0)
    return 1.0 + combined * config.reputation_max_bonus

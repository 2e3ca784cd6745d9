"""
Candlestick simulator. A strict left fold over the trimmed calendar.

Carried state:
    price       running price, starts at the IPO price
    milestones  cumulative contributions + index of the next milestone

Per day:
    1. milestones crossed today add a one-time boost (2 + index each)
    2. trailing 7- and 14-day sums, clipped at day 0
    3. price-change policy, first matching tier wins:
         rolling7 >= 10              active week   percent gain, diminishing
         3 <= rolling7 < 10          light week    small percent gain
         rolling7 < 3, rolling14 == 0  inactive    flat dollar penalty
         otherwise                   cooling off   flat
    4. apply, floor at $1, no cap
    5. cosmetic wicks around the body
    6. round to cents; the rounded close is carried into the next day

Each day opens where the previous one closed, so the fold cannot be
reordered or parallelized. Deterministic: no randomness anywhere.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from gitstock.config import DEFAULT_SCORING, ScoringConfig
from gitstock.models import (
    Candle, ContributionDay, FlatPenalty, PercentGain, PriceChange,
    round_price,
)


class MilestoneTracker:
    """
    Cumulative contributions against fixed thresholds.

    Each threshold fires once, in the step that crosses it. Several can
    fire in one step. Cumulative never decreases, so nothing re-fires.
    """

    def __init__(self, thresholds: Sequence[int]):
        self.thresholds = tuple(thresholds)
        self.cumulative = 0
        self.next_index = 0

    def advance(self, count: int) -> int:
        """Add a day's count. Returns the boost earned in this step."""
        if count <= 0:
            return 0
        previous = self.cumulative
        self.cumulative += count

        boost = 0
        while (self.next_index < len(self.thresholds)
               and previous < self.thresholds[self.next_index]
               <= self.cumulative):
            boost += 2 + self.next_index
            self.next_index += 1
        return boost


@dataclass(frozen=True)
class Window:
    """Trailing sums for one day."""
    rolling7: int
    rolling7_days: int
    rolling14: int

    @property
    def avg7(self) -> float:
        return self.rolling7 / self.rolling7_days


def trailing_windows(days: Sequence[ContributionDay],
                     config: ScoringConfig = DEFAULT_SCORING) -> list[Window]:
    """Trailing short/long window sums for every day, via prefix sums."""
    prefix = [0]
    for d in days:
        prefix.append(prefix[-1] + d.count)

    windows = []
    for i in range(len(days)):
        short_start = max(0, i - config.short_window + 1)
        long_start = max(0, i - config.long_window + 1)
        windows.append(Window(
            rolling7=prefix[i + 1] - prefix[short_start],
            rolling7_days=i + 1 - short_start,
            rolling14=prefix[i + 1] - prefix[long_start],
        ))
    return windows


def price_change(window: Window, price: float, milestone_boost: int,
                 multiplier: float,
                 config: ScoringConfig = DEFAULT_SCORING) -> PriceChange:
    """Pick the tier for one day and return its price change."""
    if window.rolling7 >= config.active_week_threshold:
        intensity = min(1.0, math.log10(window.avg7 + 1) / math.log10(10))
        base_gain = config.max_active_gain * intensity * multiplier
        diminishing = max(config.min_diminishing,
                          1 - price / config.price_softener)
        return PercentGain(base_gain * diminishing
                           + milestone_boost * config.milestone_weight)

    if window.rolling7 >= config.light_week_threshold:
        intensity = window.rolling7 / 10
        return PercentGain(config.light_gain * intensity * multiplier)

    if window.rolling14 == 0:
        return FlatPenalty(config.inactivity_penalty)

    return PercentGain(0.0)


def make_candle(day: ContributionDay, open_price: float, close: float,
                config: ScoringConfig = DEFAULT_SCORING) -> Candle:
    """Round and add wicks. Wicks are cosmetic, never fed back."""
    variance = abs(close - open_price) * config.wick_body_ratio + config.wick_base
    high = max(open_price, close) + variance
    low = min(open_price, close) - variance * config.lower_wick_ratio
    return Candle(
        date=day.date,
        open=round_price(open_price),
        high=round_price(high),
        low=round_price(low),
        close=round_price(close),
        volume=day.count,
        is_green=day.count > 0,
    )


def simulate(trimmed: Sequence[ContributionDay], ipo: float,
             multiplier: float,
             config: ScoringConfig = DEFAULT_SCORING) -> list[Candle]:
    """
    Walk the trimmed calendar once, one candle per day.

    trimmed must start at an active day (see normalizer). ipo is the
    unrounded day-0 price; only the emitted open is rounded. multiplier
    scales every positive move.
    """
    tracker = MilestoneTracker(config.milestones)
    windows = trailing_windows(trimmed, config)

    running_price = ipo
    candles = []
    for day, window in zip(trimmed, windows):
        boost = tracker.advance(day.count)
        change = price_change(window, running_price, boost, multiplier, config)

        close = max(config.price_floor, change.apply(running_price))
        candle = make_candle(day, running_price, close, config)
        candles.append(candle)
        running_price = candle.close
    return candles

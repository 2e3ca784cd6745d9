"""
Main algorithm: GitHub profile -> stock price.

compute_stock() is the single entry point the API and CLI call. The
price IS where the chart ends; the five metrics ride along for display.

debug_score_breakdown() is a diagnostic. It maps the weighted metric
score to a price with 1 + 499 * (score/100)^1.5. That number is not the
stock price and nothing else uses it.
"""

import logging

from gitstock.config import DEFAULT_SCORING, ScoringConfig
from gitstock.models import (
    Candle, ScoreBreakdown, StockResult, UserProfile, round_price,
)
from gitstock.normalizer import (
    flat_series, ipo_price, reputation_multiplier, trim_leading_inactivity,
)
from gitstock.scoring import score_profile, weighted_score
from gitstock.simulator import simulate


logger = logging.getLogger("gitstock")


def generate_candlesticks(profile: UserProfile,
                          config: ScoringConfig = DEFAULT_SCORING
                          ) -> list[Candle]:
    """Trim, price the IPO, simulate. All-zero calendars get a flat week."""
    trimmed = trim_leading_inactivity(profile.contribution_days)
    if not trimmed:
        return flat_series(profile.contribution_days, config)

    ipo = ipo_price(trimmed, config)
    multiplier = reputation_multiplier(
        profile.total_stars, profile.followers, config)
    return simulate(trimmed, ipo, multiplier, config)


def change_direction(change: float,
                     config: ScoringConfig = DEFAULT_SCORING) -> str:
    """Dead zone of +-0.1 keeps rounding noise from flickering the arrow."""
    if change > config.direction_dead_zone:
        return "up"
    if change < -config.direction_dead_zone:
        return "down"
    return "neutral"


def compute_stock(profile: UserProfile,
                  config: ScoringConfig = DEFAULT_SCORING) -> StockResult:
    metrics = score_profile(profile, config)
    candles = generate_candlesticks(profile, config)

    if not candles:
        # Empty calendar: nothing to chart, sit at the floor
        price, change = config.price_floor, 0.0
    else:
        price = candles[-1].close
        change = 0.0
        if len(candles) >= 2:
            prev = candles[-2].close
            change = (candles[-1].close - prev) / prev * 100

    return StockResult(
        price=round_price(price),
        change=round_price(change),
        change_direction=change_direction(change, config),
        metrics=metrics,
        candlesticks=tuple(candles),
    )


def debug_score_breakdown(profile: UserProfile,
                          config: ScoringConfig = DEFAULT_SCORING
                          ) -> ScoreBreakdown:
    metrics = score_profile(profile, config)
    weighted = weighted_score(metrics, config)
    illustrative = 1 + config.debug_price_span * (
        (weighted / 100) ** config.debug_price_exponent)

    w = config.weights
    breakdown = ScoreBreakdown(
        login=profile.login,
        metrics=metrics,
        weights={
            "volume": w.volume,
            "consistency": w.consistency,
            "recognition": w.recognition,
            "social_proof": w.social_proof,
            "momentum": w.momentum,
        },
        weighted_score=weighted,
        illustrative_price=round_price(illustrative),
    )
    logger.debug("Score breakdown\n%s", format_breakdown(breakdown))
    return breakdown


def format_breakdown(breakdown: ScoreBreakdown) -> str:
    m = breakdown.metrics
    w = breakdown.weights
    return "\n".join([
        "=== Score Breakdown ===",
        f"User: {breakdown.login}",
        "",
        "Metrics (0-100):",
        f"  Volume:      {m.volume:.1f} (weight: {w['volume']})",
        f"  Consistency: {m.consistency:.1f} (weight: {w['consistency']})",
        f"  Recognition: {m.recognition:.1f} (weight: {w['recognition']})",
        f"  Social:      {m.social_proof:.1f} (weight: {w['social_proof']})",
        f"  Momentum:    {m.momentum:.1f} (weight: {w['momentum']})",
        "",
        f"Weighted Score: {breakdown.weighted_score:.1f}/100",
        f"Illustrative Price: ${breakdown.illustrative_price:.2f}",
    ])

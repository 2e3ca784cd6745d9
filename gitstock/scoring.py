"""
Metric scorer. Five independent scores, each clamped to [0, 100].

    volume       total contributions, log-scaled
    consistency  longest streak (50 pts) + share of active days (50 pts)
    recognition  total stars (70%) + best repo's stars (30%), log-scaled
    social       followers, log-scaled
    momentum     last 30 days vs the 30 before

Log scales use log10(x + 1) so zero counts score zero instead of -inf.

These are for display. They never feed the candlestick price; only
the debug breakdown combines them through the weights.
"""

import math
from typing import Sequence

from gitstock.config import DEFAULT_SCORING, ScoringConfig
from gitstock.models import ContributionDay, MetricScores, UserProfile


def _clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def _log_ratio(value: int, baseline: int) -> float:
    """log10(value+1) / log10(baseline+1). 1.0 at the baseline."""
    return math.log10(value + 1) / math.log10(baseline + 1)


def longest_streak(days: Sequence[ContributionDay]) -> int:
    longest = current = 0
    for day in days:
        if day.count > 0:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def volume_score(total_contributions: int,
                 config: ScoringConfig = DEFAULT_SCORING) -> float:
    ratio = _log_ratio(total_contributions,
                       config.baselines.yearly_contributions)
    return _clamp_score(ratio * 100)


def consistency_score(days: Sequence[ContributionDay],
                      config: ScoringConfig = DEFAULT_SCORING) -> float:
    baselines = config.baselines
    streak_pts = min(50.0, longest_streak(days) / baselines.daily_streak * 50)

    active = sum(1 for d in days if d.count > 0)
    ratio = active / len(days) if days else 0.0
    ratio_pts = min(50.0, ratio / baselines.active_ratio * 50)

    return _clamp_score(streak_pts + ratio_pts)


def recognition_score(total_stars: int, top_repo_stars: int,
                      config: ScoringConfig = DEFAULT_SCORING) -> float:
    baselines = config.baselines
    total_part = _log_ratio(total_stars, baselines.stars)
    top_part = _log_ratio(top_repo_stars, baselines.top_repo_stars)
    return _clamp_score((total_part * config.recognition_total_weight
                         + top_part * config.recognition_top_weight) * 100)


def social_proof_score(followers: int,
                       config: ScoringConfig = DEFAULT_SCORING) -> float:
    return _clamp_score(_log_ratio(followers, config.baselines.followers) * 100)


def momentum_score(days: Sequence[ContributionDay],
                   config: ScoringConfig = DEFAULT_SCORING) -> float:
    """
    1.0x = 50 points, 2.0x = 100, 0.5x = 0.

    With nothing in the previous window: any recent activity is a
    strong 75, no activity at all a neutral 50.
    """
    window = config.momentum_window
    days = list(days)
    recent = days[-window:]
    previous = days[-2 * window:-window]

    recent_total = sum(d.count for d in recent)
    previous_total = sum(d.count for d in previous)

    if previous_total == 0:
        return 75.0 if recent_total > 0 else 50.0

    change_ratio = recent_total / previous_total
    return _clamp_score(50 + (change_ratio - 1) * 50)


def score_profile(profile: UserProfile,
                  config: ScoringConfig = DEFAULT_SCORING) -> MetricScores:
    days = profile.contribution_days
    return MetricScores(
        volume=volume_score(profile.contributions_total, config),
        consistency=consistency_score(days, config),
        recognition=recognition_score(
            profile.total_stars, profile.top_repo_stars, config),
        social_proof=social_proof_score(profile.followers, config),
        momentum=momentum_score(days, config),
    )


def weighted_score(metrics: MetricScores,
                   config: ScoringConfig = DEFAULT_SCORING) -> float:
    w = config.weights
    return (
        metrics.volume * w.volume
        + metrics.consistency * w.consistency
        + metrics.recognition * w.recognition
        + metrics.social_proof * w.social_proof
        + metrics.momentum * w.momentum
    )

"""
Configuration. Two kinds:

- ScoringConfig: every weight, baseline and threshold of the price
  algorithm. Frozen, passed explicitly into the scorer and simulator so
  tests can swap baselines without touching module state.
- Settings: runtime settings for the fetch layer, API and CLI. Loaded
  from .env and the environment.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


logger = logging.getLogger("gitstock")


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricWeights:
    """Weights of the five metrics. Only used by the debug breakdown."""
    volume: float = 0.25
    consistency: float = 0.25
    recognition: float = 0.20
    social_proof: float = 0.15
    momentum: float = 0.15


@dataclass(frozen=True)
class Baselines:
    """What a "good" developer looks like. Each maps to a full score."""
    yearly_contributions: int = 1000
    daily_streak: int = 30
    active_ratio: float = 0.6
    stars: int = 1000
    top_repo_stars: int = 500
    followers: int = 500


@dataclass(frozen=True)
class ScoringConfig:
    weights: MetricWeights = field(default_factory=MetricWeights)
    baselines: Baselines = field(default_factory=Baselines)
    momentum_window: int = 30

    # Reputation multiplier: 50k stars / 10k followers saturate
    reputation_stars_anchor: int = 50000
    reputation_followers_anchor: int = 10000
    reputation_stars_weight: float = 0.6
    reputation_followers_weight: float = 0.4
    reputation_max_bonus: float = 0.25

    # Recognition score: total stars vs best repo's stars
    recognition_total_weight: float = 0.7
    recognition_top_weight: float = 0.3

    # IPO price = base + min(cap, mean(first window) * scale)
    ipo_base: float = 5.0
    ipo_cap: float = 45.0
    ipo_scale: float = 3.0
    ipo_window: int = 7

    milestones: tuple[int, ...] = (100, 500, 1000, 2500, 5000)

    # Price-change tiers
    short_window: int = 7
    long_window: int = 14
    active_week_threshold: int = 10
    light_week_threshold: int = 3
    max_active_gain: float = 2.0        # percent
    light_gain: float = 0.5             # percent
    price_softener: float = 800.0
    min_diminishing: float = 0.4
    milestone_weight: float = 0.5
    inactivity_penalty: float = 0.3     # dollars, not percent
    price_floor: float = 1.0

    # Cosmetic wicks
    wick_body_ratio: float = 0.3
    wick_base: float = 0.1
    lower_wick_ratio: float = 0.5

    trivial_series_days: int = 7
    direction_dead_zone: float = 0.1

    # Debug breakdown: price = 1 + span * (weighted / 100) ** exponent
    debug_price_span: float = 499.0
    debug_price_exponent: float = 1.5


DEFAULT_SCORING = ScoringConfig()


# ---------------------------------------------------------------------------
# Runtime settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Settings:
    """Typed runtime settings loaded from environment variables."""

    github_token: str
    github_graphql_url: str
    github_timeout: float
    port: int
    log_level: str
    cors_origins: tuple[str, ...]


def _parse(name: str, default: str, cast):
    raw = os.environ.get(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}")


def load_settings(env_path: str | None = None) -> Settings:
    """
    Load settings from .env and the environment.

    GITHUB_TOKEN is optional (GitHub rejects anonymous GraphQL calls, so
    a missing token surfaces later as an upstream failure). Raises
    ValueError naming the variable when a numeric value is malformed.
    """
    load_dotenv(dotenv_path=env_path)

    token = os.environ.get("GITHUB_TOKEN", "")
    if not token:
        logger.warning("GITHUB_TOKEN is not set; GitHub requests will fail")

    origins = os.environ.get("CORS_ORIGINS", "*")
    return Settings(
        github_token=token,
        github_graphql_url=os.environ.get(
            "GITHUB_GRAPHQL_URL", "https://api.github.com/graphql"),
        github_timeout=_parse("GITHUB_TIMEOUT", "10", float),
        port=_parse("PORT", "3001", int),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )

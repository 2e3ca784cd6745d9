"""
Data models for the activity-to-price pipeline.

Input side: what the fetch layer hands to the core.
- ContributionDay: one calendar day of activity
- UserProfile: aggregate counters + the full calendar

Output side: what the core hands back.
- MetricScores: five display scores in [0, 100]
- Candle: one OHLCV bar per simulated day
- StockResult: final price, daily change, metrics, candles

Everything is frozen. A computation builds these fresh and drops them
when the response is composed.

Prices are floats. Rounding to cents happens once per candle, half away
from zero on the exact binary value, via Decimal.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union


CENT = Decimal("0.01")


def round_price(value: float) -> float:
    """Round to 2 decimal places, ties away from zero."""
    return float(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Input side
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContributionDay:
    date: str       # ISO calendar date, e.g. "2025-03-14"
    count: int

    @property
    def active(self) -> bool:
        return self.count > 0


@dataclass(frozen=True)
class ContributionTotals:
    """Annual aggregates from the contributions collection."""
    total: int = 0
    commits: int = 0
    prs: int = 0
    issues: int = 0


@dataclass(frozen=True)
class UserProfile:
    """
    A GitHub user's public activity, as fetched.

    contribution_days is chronological with no gaps: every day in range
    is present, including zero-count days. Typically 365-371 entries.
    """
    login: str
    name: Optional[str] = None
    avatar_url: str = ""
    created_at: str = ""
    followers: int = 0
    following: int = 0
    total_repos: int = 0
    total_stars: int = 0
    top_repo_stars: int = 0
    contributions: ContributionTotals = field(default_factory=ContributionTotals)
    contribution_days: tuple[ContributionDay, ...] = ()

    @property
    def contributions_total(self) -> int:
        return self.contributions.total

    @staticmethod
    def from_dict(data: dict) -> "UserProfile":
        """
        Build a profile from a fetched GitHub profile saved as camelCase
        JSON (login, avatarUrl, totalStars, topRepoStars, contributions{},
        contributionDays[]). An API response is not a profile: it wraps a
        summary and a stock under "user" and "stock".
        Raises ValueError on missing or mistyped fields.
        """
        try:
            totals = data.get("contributions") or {}
            days = tuple(
                ContributionDay(date=str(d["date"]), count=int(d["count"]))
                for d in data.get("contributionDays", [])
            )
            profile = UserProfile(
                login=str(data["login"]),
                name=data.get("name"),
                avatar_url=data.get("avatarUrl", ""),
                created_at=data.get("createdAt", ""),
                followers=int(data.get("followers", 0)),
                following=int(data.get("following", 0)),
                total_repos=int(data.get("totalRepos", 0)),
                total_stars=int(data.get("totalStars", 0)),
                top_repo_stars=int(data.get("topRepoStars", 0)),
                contributions=ContributionTotals(
                    total=int(totals.get("total", sum(d.count for d in days))),
                    commits=int(totals.get("commits", 0)),
                    prs=int(totals.get("prs", 0)),
                    issues=int(totals.get("issues", 0)),
                ),
                contribution_days=days,
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"malformed profile: {e}")
        if any(d.count < 0 for d in days):
            raise ValueError("malformed profile: negative contribution count")
        return profile


# ---------------------------------------------------------------------------
# Price changes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PercentGain:
    """Growth by a percentage of the current price. Zero means flat."""
    percent: float

    def apply(self, price: float) -> float:
        return price * (1 + self.percent / 100)


@dataclass(frozen=True)
class FlatPenalty:
    """Absolute dollar drop, independent of the current price."""
    amount: float

    def apply(self, price: float) -> float:
        return price - self.amount


PriceChange = Union[PercentGain, FlatPenalty]


# ---------------------------------------------------------------------------
# Output side
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricScores:
    volume: float
    consistency: float
    recognition: float
    social_proof: float
    momentum: float


@dataclass(frozen=True)
class Candle:
    """
    One simulated day. All prices are rounded to cents.
    volume is that day's contribution count; green means count > 0.
    """
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int
    is_green: bool


@dataclass(frozen=True)
class StockResult:
    price: float
    change: float               # percent, last close vs the one before
    change_direction: str       # "up", "down", "neutral"
    metrics: MetricScores
    candlesticks: tuple[Candle, ...]


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Debug view: metrics, their weights, the weighted score and the
    weighted-score price mapping. That price is illustrative only;
    the real price comes from the candles.
    """
    login: str
    metrics: MetricScores
    weights: dict[str, float]
    weighted_score: float
    illustrative_price: float

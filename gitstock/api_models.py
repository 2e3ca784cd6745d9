"""
Pydantic response models for the API.
Field names are snake_case in Python and camelCase on the wire
(avatarUrl, changeDirection, isGreen, socialProof), the shape the chart
frontend reads.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gitstock.models import StockResult, UserProfile


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- User ---

class ContributionsResponse(CamelModel):
    total: int
    commits: int
    prs: int
    issues: int

class UserResponse(CamelModel):
    login: str
    name: str | None
    avatar_url: str
    created_at: str
    followers: int
    following: int
    total_repos: int
    total_stars: int
    contributions: ContributionsResponse


# --- Stock ---

class MetricsResponse(CamelModel):
    volume: float
    consistency: float
    recognition: float
    social_proof: float
    momentum: float

class CandleResponse(CamelModel):
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int
    is_green: bool

class StockResponse(CamelModel):
    price: float
    change: float
    change_direction: str
    metrics: MetricsResponse
    candlesticks: list[CandleResponse]

class UserStockResponse(CamelModel):
    user: UserResponse
    stock: StockResponse


class HealthResponse(CamelModel):
    status: str


def build_user_stock(profile: UserProfile,
                     stock: StockResult) -> UserStockResponse:
    c = profile.contributions
    m = stock.metrics
    return UserStockResponse(
        user=UserResponse(
            login=profile.login,
            name=profile.name,
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
            followers=profile.followers,
            following=profile.following,
            total_repos=profile.total_repos,
            total_stars=profile.total_stars,
            contributions=ContributionsResponse(
                total=c.total, commits=c.commits, prs=c.prs, issues=c.issues),
        ),
        stock=StockResponse(
            price=stock.price,
            change=stock.change,
            change_direction=stock.change_direction,
            metrics=MetricsResponse(
                volume=m.volume,
                consistency=m.consistency,
                recognition=m.recognition,
                social_proof=m.social_proof,
                momentum=m.momentum,
            ),
            candlesticks=[
                CandleResponse(
                    date=k.date, open=k.open, high=k.high, low=k.low,
                    close=k.close, volume=k.volume, is_green=k.is_green,
                )
                for k in stock.candlesticks
            ],
        ),
    )

"""
FastAPI application. Public, read-only HTTP API.

GET /health               liveness
GET /api/user/{username}  profile summary + stock (price, metrics, candles)

Each request fetches fresh from GitHub and computes from scratch.
Nothing is cached or shared between requests.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gitstock.algorithm import compute_stock
from gitstock.api_errors import APIError, api_error_handler, translate_fetch_error
from gitstock.api_models import HealthResponse, UserStockResponse, build_user_stock
from gitstock.config import load_settings
from gitstock.github import GitHubAPIError, fetch_github_user


logger = logging.getLogger("gitstock")

SETTINGS = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=SETTINGS.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("API ready, GraphQL endpoint %s", SETTINGS.github_graphql_url)
    yield


app = FastAPI(title="gitstock API", version="0.1.0", lifespan=lifespan)
app.add_exception_handler(APIError, api_error_handler)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health() -> HealthResponse:
    return HealthResponse(status="ok")


@app.get("/api/user/{username}")
async def get_user_stock(username: str) -> UserStockResponse:
    """Fetch a GitHub user and price their activity."""
    try:
        profile = await fetch_github_user(username, SETTINGS)
    except GitHubAPIError as e:
        logger.warning("Fetching %s failed: %s", username, e)
        raise translate_fetch_error(e, username)

    stock = compute_stock(profile)
    logger.info("Quoted %s at $%.2f (%+.2f%%, %d candles)",
                profile.login, stock.price, stock.change,
                len(stock.candlesticks))
    return build_user_stock(profile, stock)


def main() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=SETTINGS.port,
                log_level=SETTINGS.log_level.lower())


if __name__ == "__main__":
    main()

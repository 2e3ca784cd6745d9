"""
GitHub GraphQL fetch. Turns a login into a UserProfile.

One query per user: profile counters, the first 100 owned repositories
ordered by stars, and the contribution calendar for the last year.

Failures:
- UserNotFound: the login does not exist (NOT_FOUND error or null user)
- UpstreamFailure: transport errors, non-2xx status, malformed body,
  any other GraphQL error

No retries here. The caller decides what to do with a failure.
"""

import logging

import httpx

from gitstock.config import Settings, load_settings
from gitstock.models import ContributionDay, ContributionTotals, UserProfile


logger = logging.getLogger("gitstock")


USER_QUERY = """
query($userName: String!) {
  user(login: $userName) {
    login
    name
    avatarUrl
    createdAt
    followers { totalCount }
    following { totalCount }
    repositories(first: 100, ownerAffiliations: OWNER,
                 orderBy: {field: STARGAZERS, direction: DESC}) {
      totalCount
      nodes { name stargazerCount forkCount }
    }
    contributionsCollection {
      totalCommitContributions
      totalPullRequestContributions
      totalIssueContributions
      totalRepositoryContributions
      contributionCalendar {
        totalContributions
        weeks { contributionDays { contributionCount date } }
      }
    }
  }
}
"""

EXISTS_QUERY = "query($userName: String!) { user(login: $userName) { login } }"


class GitHubAPIError(Exception):
    """Base for anything that goes wrong talking to GitHub."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UserNotFound(GitHubAPIError):
    pass


class UpstreamFailure(GitHubAPIError):
    pass


async def _post_query(query: str, username: str, settings: Settings) -> dict:
    """POST a query. Returns the decoded JSON body or raises UpstreamFailure."""
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.post(
                settings.github_graphql_url,
                headers={
                    "Authorization": f"bearer {settings.github_token}",
                    "Content-Type": "application/json",
                },
                json={"query": query, "variables": {"userName": username}},
                timeout=settings.github_timeout,
            )
    except httpx.HTTPError as e:
        raise UpstreamFailure(f"GitHub API request failed: {e}")

    if resp.status_code < 200 or resp.status_code >= 300:
        raise UpstreamFailure(f"GitHub API error: {resp.status_code}",
                              status_code=resp.status_code)
    try:
        payload = resp.json()
    except ValueError:
        raise UpstreamFailure("GitHub API returned a non-JSON body",
                              status_code=resp.status_code)
    if not isinstance(payload, dict):
        raise UpstreamFailure("GitHub API returned an unexpected body",
                              status_code=resp.status_code)
    return payload


def _check_errors(payload: dict, username: str) -> None:
    errors = payload.get("errors")
    if not errors:
        return
    if any(isinstance(e, dict) and e.get("type") == "NOT_FOUND"
           for e in errors):
        raise UserNotFound(f"User not found: {username}")
    first = errors[0] if isinstance(errors[0], dict) else {}
    raise UpstreamFailure(first.get("message", "GitHub API error"))


def parse_user_response(payload: dict, username: str) -> UserProfile:
    """
    Transform a GraphQL response body into a UserProfile.

    Total stars: sum over the fetched repositories.
    Top repo stars: the single highest count.
    Calendar weeks are flattened into one chronological day list.
    """
    _check_errors(payload, username)

    user = (payload.get("data") or {}).get("user")
    if not user:
        raise UserNotFound(f"User not found: {username}")

    try:
        repos = user["repositories"]
        collection = user["contributionsCollection"]
        calendar = collection["contributionCalendar"]
        stars = [r["stargazerCount"] for r in repos["nodes"]]

        days = tuple(
            ContributionDay(date=d["date"], count=d["contributionCount"])
            for week in calendar["weeks"]
            for d in week["contributionDays"]
        )

        return UserProfile(
            login=user["login"],
            name=user.get("name"),
            avatar_url=user.get("avatarUrl", ""),
            created_at=user.get("createdAt", ""),
            followers=user["followers"]["totalCount"],
            following=user["following"]["totalCount"],
            total_repos=repos["totalCount"],
            total_stars=sum(stars),
            top_repo_stars=max(stars, default=0),
            contributions=ContributionTotals(
                total=calendar["totalContributions"],
                commits=collection["totalCommitContributions"],
                prs=collection["totalPullRequestContributions"],
                issues=collection["totalIssueContributions"],
            ),
            contribution_days=days,
        )
    except (KeyError, TypeError) as e:
        raise UpstreamFailure(f"Malformed GitHub response: missing {e}")


async def fetch_github_user(username: str,
                            settings: Settings | None = None) -> UserProfile:
    """Fetch and transform one user. Raises UserNotFound / UpstreamFailure."""
    settings = settings or load_settings()
    logger.info("Fetching GitHub data for %s", username)
    payload = await _post_query(USER_QUERY, username, settings)
    profile = parse_user_response(payload, username)
    logger.info("Fetched %s: %d days, %d contributions",
                profile.login, len(profile.contribution_days),
                profile.contributions_total)
    return profile


async def check_user_exists(username: str,
                            settings: Settings | None = None) -> bool:
    """Lighter query. False on any failure, not only on a missing user."""
    settings = settings or load_settings()
    try:
        payload = await _post_query(EXISTS_QUERY, username, settings)
        _check_errors(payload, username)
    except GitHubAPIError as e:
        logger.warning("Existence check for %s failed: %s", username, e)
        return False
    return bool((payload.get("data") or {}).get("user"))

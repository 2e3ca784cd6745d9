"""Tests for gitstock.github: GraphQL fetch with mocked HTTP responses."""

import httpx
import pytest

from gitstock.config import Settings
from gitstock.github import (
    UpstreamFailure, UserNotFound, check_user_exists, fetch_github_user,
    parse_user_response,
)
from gitstock.models import UserProfile


def _settings() -> Settings:
    return Settings(
        github_token="ghp_test",
        github_graphql_url="https://api.github.test/graphql",
        github_timeout=5.0,
        port=3001,
        log_level="INFO",
        cors_origins=("*",),
    )


# ---------------------------------------------------------------------------
# Mock GitHub responses
# ---------------------------------------------------------------------------

MOCK_USER_RESPONSE = {
    "data": {
        "user": {
            "login": "octocat",
            "name": "The Octocat",
            "avatarUrl": "https://avatars.example/octocat",
            "createdAt": "2011-01-25T18:44:36Z",
            "followers": {"totalCount": 120},
            "following": {"totalCount": 9},
            "repositories": {
                "totalCount": 8,
                "nodes": [
                    {"name": "hello-world", "stargazerCount": 300, "forkCount": 10},
                    {"name": "spoon-knife", "stargazerCount": 40, "forkCount": 99},
                    {"name": "dotfiles", "stargazerCount": 0, "forkCount": 0},
                ],
            },
            "contributionsCollection": {
                "totalCommitContributions": 11,
                "totalPullRequestContributions": 3,
                "totalIssueContributions": 2,
                "totalRepositoryContributions": 1,
                "contributionCalendar": {
                    "totalContributions": 17,
                    "weeks": [
                        {"contributionDays": [
                            {"contributionCount": 0, "date": "2025-01-05"},
                            {"contributionCount": 4, "date": "2025-01-06"},
                        ]},
                        {"contributionDays": [
                            {"contributionCount": 13, "date": "2025-01-07"},
                        ]},
                    ],
                },
            },
        }
    }
}

MOCK_NOT_FOUND_RESPONSE = {
    "data": {"user": None},
    "errors": [{
        "type": "NOT_FOUND",
        "path": ["user"],
        "message": "Could not resolve to a User with the login of 'nobody'.",
    }],
}


def _patch_post(monkeypatch, response=None, exc=None, captured=None):
    async def _mock_post(self, url, *, headers=None, json=None, timeout=None):
        if captured is not None:
            captured.update(url=url, headers=headers, json=json,
                            timeout=timeout)
        if exc is not None:
            raise exc
        response.request = httpx.Request("POST", url)
        return response

    monkeypatch.setattr(httpx.AsyncClient, "post", _mock_post)


# ---------------------------------------------------------------------------
# Transform
# ---------------------------------------------------------------------------

def test_parse_profile():
    profile = parse_user_response(MOCK_USER_RESPONSE, "octocat")
    assert isinstance(profile, UserProfile)
    assert profile.login == "octocat"
    assert profile.name == "The Octocat"
    assert profile.followers == 120
    assert profile.following == 9
    assert profile.total_repos == 8
    assert profile.total_stars == 340
    assert profile.top_repo_stars == 300
    assert profile.contributions_total == 17
    assert profile.contributions.commits == 11
    assert profile.contributions.prs == 3
    assert profile.contributions.issues == 2
    assert [(d.date, d.count) for d in profile.contribution_days] == [
        ("2025-01-05", 0), ("2025-01-06", 4), ("2025-01-07", 13),
    ]


def test_parse_no_repositories():
    payload = {"data": {"user": {
        **MOCK_USER_RESPONSE["data"]["user"],
        "repositories": {"totalCount": 0, "nodes": []},
    }}}
    profile = parse_user_response(payload, "octocat")
    assert profile.total_stars == 0
    assert profile.top_repo_stars == 0


def test_parse_null_user_is_not_found():
    with pytest.raises(UserNotFound):
        parse_user_response({"data": {"user": None}}, "nobody")


def test_parse_missing_fields_is_upstream_failure():
    payload = {"data": {"user": {"login": "octocat"}}}
    with pytest.raises(UpstreamFailure):
        parse_user_response(payload, "octocat")


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------

async def test_fetch_sends_query(monkeypatch):
    captured = {}
    _patch_post(monkeypatch, httpx.Response(200, json=MOCK_USER_RESPONSE),
                captured=captured)

    profile = await fetch_github_user("octocat", _settings())

    assert profile.login == "octocat"
    assert captured["url"] == "https://api.github.test/graphql"
    assert captured["headers"]["Authorization"] == "bearer ghp_test"
    assert captured["json"]["variables"] == {"userName": "octocat"}
    assert "contributionCalendar" in captured["json"]["query"]
    assert captured["timeout"] == 5.0


async def test_fetch_not_found(monkeypatch):
    _patch_post(monkeypatch, httpx.Response(200, json=MOCK_NOT_FOUND_RESPONSE))
    with pytest.raises(UserNotFound, match="nobody"):
        await fetch_github_user("nobody", _settings())


async def test_fetch_http_error(monkeypatch):
    _patch_post(monkeypatch, httpx.Response(401, json={"message": "Bad credentials"}))
    with pytest.raises(UpstreamFailure) as exc_info:
        await fetch_github_user("octocat", _settings())
    assert exc_info.value.status_code == 401
    assert not isinstance(exc_info.value, UserNotFound)


async def test_fetch_graphql_error(monkeypatch):
    body = {"errors": [{"type": "RATE_LIMITED", "message": "API rate limit exceeded"}]}
    _patch_post(monkeypatch, httpx.Response(200, json=body))
    with pytest.raises(UpstreamFailure, match="rate limit"):
        await fetch_github_user("octocat", _settings())


async def test_fetch_non_json_body(monkeypatch):
    _patch_post(monkeypatch, httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(UpstreamFailure):
        await fetch_github_user("octocat", _settings())


async def test_fetch_transport_error(monkeypatch):
    _patch_post(monkeypatch, exc=httpx.ConnectError("connection refused"))
    with pytest.raises(UpstreamFailure, match="connection refused"):
        await fetch_github_user("octocat", _settings())


async def test_check_user_exists(monkeypatch):
    _patch_post(monkeypatch,
                httpx.Response(200, json={"data": {"user": {"login": "octocat"}}}))
    assert await check_user_exists("octocat", _settings()) is True


async def test_check_user_missing(monkeypatch):
    _patch_post(monkeypatch, httpx.Response(200, json=MOCK_NOT_FOUND_RESPONSE))
    assert await check_user_exists("nobody", _settings()) is False


async def test_check_user_upstream_down(monkeypatch):
    _patch_post(monkeypatch, httpx.Response(502, text="Bad Gateway"))
    assert await check_user_exists("octocat", _settings()) is False

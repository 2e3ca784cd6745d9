#!/usr/bin/env python3
"""
gitstock CLI. Quote a GitHub user, or simulate a saved profile offline.

Usage:
    python3 -m gitstock.cli quote USERNAME
    python3 -m gitstock.cli breakdown USERNAME [--text]
    python3 -m gitstock.cli simulate PROFILE_JSON

Output: JSON, one line. {"ok": true, ...} or {"ok": false, "error": "...", "code": "..."}
Settings: GITHUB_TOKEN etc. from the environment or .env
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys

from gitstock.algorithm import compute_stock, debug_score_breakdown, format_breakdown
from gitstock.api_models import build_user_stock
from gitstock.config import load_settings
from gitstock.github import GitHubAPIError, UserNotFound, fetch_github_user
from gitstock.models import UserProfile


def reply(data):
    print(json.dumps(data))


def _fetch(username: str) -> UserProfile:
    return asyncio.run(fetch_github_user(username, load_settings()))


def _quote(profile: UserProfile) -> dict:
    stock = compute_stock(profile)
    body = build_user_stock(profile, stock).model_dump(by_alias=True)
    return {"ok": True, **body}


def cmd_quote(args):
    return _quote(_fetch(args.username))


def cmd_breakdown(args):
    breakdown = debug_score_breakdown(_fetch(args.username))
    if args.text:
        return {"ok": True, "text": format_breakdown(breakdown)}
    return {"ok": True, "breakdown": dataclasses.asdict(breakdown)}


def cmd_simulate(args):
    with open(args.path) as f:
        profile = UserProfile.from_dict(json.load(f))
    return _quote(profile)


def main(argv=None):
    parser = argparse.ArgumentParser(description="gitstock CLI")
    parser.add_argument("--log-level", default="WARNING", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR",
                                 "CRITICAL"],
                        help="Logging level (logs go to stderr)")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("quote")
    p.add_argument("username")

    p = sub.add_parser("breakdown")
    p.add_argument("username")
    p.add_argument("--text", action="store_true",
                   help="Human-readable breakdown instead of fields")

    p = sub.add_parser("simulate")
    p.add_argument("path", help="Fetched GitHub profile JSON (camelCase: "
                   "login, totalStars, topRepoStars, contributions, "
                   "contributionDays)")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(level=args.log_level, stream=sys.stderr)

    commands = {
        "quote": cmd_quote,
        "breakdown": cmd_breakdown,
        "simulate": cmd_simulate,
    }

    try:
        reply(commands[args.command](args))
    except UserNotFound as e:
        reply({"ok": False, "error": str(e), "code": "user_not_found"})
        sys.exit(1)
    except GitHubAPIError as e:
        reply({"ok": False, "error": str(e), "code": "fetch_failed"})
        sys.exit(1)
    except (OSError, ValueError) as e:
        reply({"ok": False, "error": str(e), "code": "invalid_profile"})
        sys.exit(1)


if __name__ == "__main__":
    main()

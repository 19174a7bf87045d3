"""Command that gathers profile statistics and writes them into the SVG cards."""

from __future__ import annotations

import argparse
import sys

import requests

from ghprofilestats.cache import commit_counter
from ghprofilestats.config import get_access_token, get_user_name, set_owner_id
from ghprofilestats.queries import (
    graph_repos_stars,
    loc_query,
    stats_getter,
    user_getter,
)
from ghprofilestats.svg import svg_overwrite
from ghprofilestats.utility import formatter, perf_counter, query_counts

SVG_FILES = ("src/dark_mode.svg", "src/light_mode.svg")
AFFILIATIONS = ["OWNER", "COLLABORATOR", "ORGANIZATION_MEMBER"]
COMMENT_SIZE = 7


def _run() -> None:
    user_name = get_user_name()
    github_token = get_access_token()

    print("Calculation times:")

    (owner_id, _created_at), user_time = perf_counter(user_getter, user_name)
    set_owner_id(owner_id)
    formatter("account data", user_time, None, 0)

    total_loc, loc_time = perf_counter(
        loc_query, list(AFFILIATIONS), COMMENT_SIZE, False, None, []
    )
    label = "LOC (cached)" if total_loc[3] else "LOC (no cache)"
    formatter(label, loc_time, None, 0)

    commits, commit_time = perf_counter(commit_counter, COMMENT_SIZE, user_name)
    stars, star_time = perf_counter(
        graph_repos_stars, "stars", ["OWNER"], None, user_name, github_token
    )
    repos, repo_time = perf_counter(
        graph_repos_stars, "repos", ["OWNER"], None, user_name, github_token
    )
    contribs, contrib_time = perf_counter(
        graph_repos_stars, "repos", list(AFFILIATIONS), None, user_name, github_token
    )

    stats, stats_time = perf_counter(stats_getter)
    formatter("issues/prs stats", stats_time, None, 0)

    commit_text = formatter("commit counter", commit_time, commits, 0) or ""
    star_text = formatter("star counter", star_time, stars, 0) or ""
    repo_text = formatter("my repositories", repo_time, repos, 0) or ""
    contrib_text = formatter("contributed repos", contrib_time, contribs, 0) or ""

    loc_text = [str(value) for value in total_loc[:3]]
    for filename in SVG_FILES:
        svg_overwrite(
            filename, commit_text, star_text, repo_text, contrib_text, stats, loc_text
        )

    total_time = (
        user_time + loc_time + commit_time + star_time
        + repo_time + contrib_time + stats_time
    )
    print(
        f"\x1b[8F{'Total function time:':<21} {total_time:>11.4f} s "
        + "\x1b[E" * 8
        + "\n",
        end="",
    )

    for func_name, count in query_counts().items():
        print(f"{func_name} called {count} times")


def main(argv: list[str] | None = None) -> int:
    """Gather the statistics, update both SVG cards and report timings."""
    parser = argparse.ArgumentParser(
        prog="ghprofilestats",
        description="Fill the profile SVG cards with account statistics.",
    )
    parser.parse_args(argv)
    try:
        _run()
    except (RuntimeError, ValueError, OSError, requests.RequestException) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
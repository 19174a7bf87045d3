"""GraphQL queries for account data, line-of-code totals, stars and stats."""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any, Iterable

import requests

from ghprofilestats.cache import cache_filename, flush_cache, force_close_file
from ghprofilestats.config import get_auth_headers, get_owner_id, get_user_name
from ghprofilestats.utility import GRAPHQL_URL, query_count, simple_request

CACHE_COMMENT_LINE = "This line is a comment block. Write whatever you want here."

_USER_QUERY = """
query($login: String!){
    user(login: $login){
        id
        createdAt
    }
}
"""

_HISTORY_QUERY = """
query ($repo_name: String!, $owner: String!, $cursor: String) {
    repository(name: $repo_name, owner: $owner) {
        defaultBranchRef {
            target {
                ... on Commit {
                    history(first: 100, after: $cursor) {
                        totalCount
                        edges {
                            node {
                                ... on Commit {
                                    committedDate
                                }
                                author {
                                    user {
                                        id
                                    }
                                }
                                deletions
                                additions
                            }
                        }
                        pageInfo {
                            endCursor
                            hasNextPage
                        }
                    }
                }
            }
        }
    }
}
"""

_LOC_QUERY = """
query ($owner_affiliation: [RepositoryAffiliation], $login: String!, $cursor: String) {
    user(login: $login) {
        repositories(first: 60, after: $cursor, ownerAffiliations: $owner_affiliation) {
            edges {
                node {
                    ... on Repository {
                        nameWithOwner
                        defaultBranchRef {
                            target {
                                ... on Commit {
                                    history {
                                        totalCount
                                    }
                                }
                            }
                        }
                    }
                }
            }
            pageInfo {
                endCursor
                hasNextPage
            }
        }
    }
}
"""

_REPOS_QUERY = """
query ($owner_affiliation: [RepositoryAffiliation], $login: String!, $cursor: String) {
    user(login: $login) {
        repositories(first: 100, after: $cursor, ownerAffiliations: $owner_affiliation) {
            totalCount
            edges {
                node {
                    ... on Repository {
                        nameWithOwner
                        stargazers {
                            totalCount
                        }
                    }
                }
            }
            pageInfo {
                endCursor
                hasNextPage
            }
        }
    }
}
"""

_STATS_QUERY = """
query($login: String!) {
    user(login: $login) {
        pullRequests(first: 1) {
            totalCount
        }
        issues {
            totalCount
        }
    }
}
"""

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _dig(value: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _as_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _parse_int(text: str) -> int | None:
    return int(text) if _INT_RE.fullmatch(text) else None


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _pretty(payload: Any) -> str:
    return json.dumps(payload, indent=2)


def user_getter(username: str) -> tuple[str, str]:
    """Return the account's node id and creation timestamp."""
    query_count("user_getter")
    payload = simple_request("user_getter", _USER_QUERY, {"login": username}).json()
    user = _dig(payload, "data", "user")
    return (_as_str(_dig(user, "id")) or "", _as_str(_dig(user, "createdAt")) or "")


def _fetch_history(
    owner: str, repo_name: str, data: Any, cache_comment: str, cursor: str | None
) -> tuple[bool, Any]:
    """Fetch one page of commit history; (False, None) if there is no default branch."""
    query_count("recursive_loc")
    response = requests.post(
        GRAPHQL_URL,
        headers=get_auth_headers(),
        json={
            "query": _HISTORY_QUERY,
            "variables": {"repo_name": repo_name, "owner": owner, "cursor": cursor},
        },
    )
    status = response.status_code
    payload = response.json()

    if status == 200:
        branch = _dig(payload, "data", "repository", "defaultBranchRef")
        if branch is None:
            return False, None
        return True, _dig(branch, "target", "history")

    force_close_file(data, cache_comment, get_user_name())
    if status == 403:
        raise RuntimeError("Too many requests! You've hit Github's Anti-abuse limit")
    raise RuntimeError(f"recursive_loc() failed with status {status}: {payload}")


def _tally(
    history: Any, addition_total: int, deletion_total: int, my_commits: int
) -> tuple[tuple[int, int, int], bool, str | None]:
    """Add the owner's commits on one history page; report whether more pages follow."""
    edges = _dig(history, "edges")
    if not isinstance(edges, list):
        return (addition_total, deletion_total, my_commits), False, None

    owner_id = get_owner_id()
    for edge in edges:
        author_id = _dig(edge, "node", "author", "user", "id")
        if author_id is not None and author_id == owner_id:
            my_commits += 1
            addition_total += max(_as_int(_dig(edge, "node", "additions")) or 0, 0)
            deletion_total += max(_as_int(_dig(edge, "node", "deletions")) or 0, 0)

    has_next = _dig(history, "pageInfo", "hasNextPage") is True
    more = has_next and bool(edges)
    end_cursor = _as_str(_dig(history, "pageInfo", "endCursor")) if more else None
    return (addition_total, deletion_total, my_commits), more, end_cursor


def recursive_loc(
    owner: str,
    repo_name: str,
    data: Any,
    cache_comment: str,
    addition_total: int,
    deletion_total: int,
    my_commits: int,
    cursor: str | None,
) -> tuple[int, int, int]:
    """Return (additions, deletions, commits) by the owner in a repository's history."""
    totals = (addition_total, deletion_total, my_commits)
    while True:
        found, history = _fetch_history(owner, repo_name, data, cache_comment, cursor)
        if not found:
            return (0, 0, 0)
        totals, more, cursor = _tally(history, *totals)
        if not more:
            return totals


def loc_counter_one_repo(
    owner: str,
    repo_name: str,
    data: Any,
    cache_comment: str,
    history: Any,
    addition_total: int,
    deletion_total: int,
    my_commits: int,
) -> tuple[int, int, int]:
    """Count the owner's commits on a history page, fetching later pages as needed."""
    totals, more, cursor = _tally(history, addition_total, deletion_total, my_commits)
    if more:
        return recursive_loc(owner, repo_name, data, cache_comment, *totals, cursor)
    return totals


def loc_query(
    owner_affiliation: list[str],
    comment_size: int,
    force_cache: bool,
    cursor: str | None,
    edges: Iterable[Any],
) -> tuple[int, int, int, bool]:
    """List the user's repositories and return (added, deleted, net, cached) LOC."""
    user_name = get_user_name()
    collected = list(edges)
    while True:
        query_count("loc_query")
        variables = {
            "owner_affiliation": list(owner_affiliation),
            "login": user_name,
            "cursor": cursor,
        }
        payload = simple_request("loc_query", _LOC_QUERY, variables).json()
        repos = _dig(payload, "data", "user", "repositories")
        page = _dig(repos, "edges")
        if isinstance(page, list):
            collected.extend(page)
        if _dig(repos, "pageInfo", "hasNextPage") is not True:
            break
        cursor = _as_str(_dig(repos, "pageInfo", "endCursor"))

    return cache_builder(collected, comment_size, force_cache, 0, 0, user_name)


def _read_lines(path: Any) -> list[str]:
    with open(path, encoding="utf-8") as handle:
        return handle.read().splitlines()


def cache_builder(
    edges: list[Any],
    comment_size: int,
    force_cache: bool,
    loc_add: int,
    loc_del: int,
    user_name: str,
) -> tuple[int, int, int, bool]:
    """Bring the user's cache file up to date and return (added, deleted, net, cached)."""
    cached = True
    filename = cache_filename(user_name)
    filename.parent.mkdir(parents=True, exist_ok=True)

    if filename.exists():
        data = _read_lines(filename)
    else:
        data = [CACHE_COMMENT_LINE] * comment_size
        with open(filename, "w", encoding="utf-8") as handle:
            handle.writelines(f"{line}\n" for line in data)

    if max(len(data) - comment_size, 0) != len(edges) or force_cache:
        cached = False
        flush_cache(edges, filename, comment_size)
        data = _read_lines(filename)

    comments, lines = data[:comment_size], data[comment_size:]
    cache_comment = "".join(comments)
    state: dict[str, Any] = {}

    for index, edge in enumerate(edges):
        name = _as_str(_dig(edge, "node", "nameWithOwner"))
        if name is None or index >= len(lines):
            continue
        repo_hash = _sha256_hex(name)
        parts = lines[index].split()
        if (parts[0] if parts else "") != repo_hash:
            continue

        current = _as_int(
            _dig(edge, "node", "defaultBranchRef", "target", "history", "totalCount")
        ) or 0
        stored = (_parse_int(parts[1]) if len(parts) > 1 else None) or 0
        if current != stored:
            segments = name.split("/")
            owner = segments[0]
            repo_name = segments[1] if len(segments) > 1 else ""
            added, deleted, mine = recursive_loc(
                owner, repo_name, state, cache_comment, 0, 0, 0, None
            )
            lines[index] = f"{repo_hash} {current} {mine} {added} {deleted}"

    with open(filename, "w", encoding="utf-8") as handle:
        handle.writelines(f"{line}\n" for line in comments)
        handle.writelines(f"{line}\n" for line in lines)

    for line in lines:
        parts = line.split()
        if len(parts) >= 5:
            loc_add += _parse_int(parts[3]) or 0
            loc_del += _parse_int(parts[4]) or 0

    return (loc_add, loc_del, loc_add - loc_del, cached)


def graph_repos_stars(
    count_type: str,
    owner_affiliation: list[str],
    cursor: str | None,
    user_name: str,
    github_token: str,
) -> int:
    """Return the user's repository count ("repos") or total stargazers ("stars")."""
    variables = {
        "owner_affiliation": list(owner_affiliation),
        "login": user_name,
        "cursor": cursor,
    }
    payload = simple_request("graph_repos_stars", _REPOS_QUERY, variables).json()
    print(f"Graph star repo: Here's the json response: {_pretty(payload)}")
    repos = _dig(payload, "data", "user", "repositories")

    if count_type == "repos":
        return _as_int(_dig(repos, "totalCount")) or 0
    if count_type == "stars":
        edges = _dig(repos, "edges")
        if not isinstance(edges, list):
            return 0
        return sum(
            _as_int(_dig(edge, "node", "stargazers", "totalCount")) or 0
            for edge in edges
        )
    raise ValueError('Invalid Count type. Use "repos" or "stars".')


def stats_getter() -> Any:
    """Return the user's pull request and issue totals as the API reports them."""
    query_count("stats_getter")
    payload = simple_request(
        "stats_getter", _STATS_QUERY, {"login": get_user_name()}
    ).json()
    print(f"Stats: Here's the json response: {_pretty(payload)}")
    return _dig(payload, "data", "user")
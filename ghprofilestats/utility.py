"""Call counting, timing, report formatting and GraphQL requests."""

from __future__ import annotations

import threading
import time
from collections import Counter
from typing import Any, Callable, TypeVar

import requests

from ghprofilestats.config import get_auth_headers

GRAPHQL_URL = "https://api.github.com/graphql"

T = TypeVar("T")

_counts: Counter[str] = Counter()
_counts_lock = threading.Lock()


def query_count(func_id: str) -> None:
    """Record one API call made on behalf of func_id."""
    with _counts_lock:
        _counts[func_id] += 1


def query_counts() -> dict[str, int]:
    """Return a snapshot of the recorded call counts."""
    with _counts_lock:
        return dict(_counts)


def perf_counter(func: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T, float]:
    """Call func and return its result with the elapsed time in seconds."""
    start = time.perf_counter()
    result = func(*args, **kwargs)
    return result, time.perf_counter() - start


def formatter(
    query_type: str, duration: float, funct_return: int | None, whitespace: int
) -> str | None:
    """Print a timing line and return funct_return right-aligned, if given."""
    label = f"   {query_type}:"
    if duration > 1.0:
        elapsed = f"{duration:.4f} s"
    else:
        elapsed = f"{duration * 1000.0:.4f} ms"
    print(f"{label:<23}{elapsed:>12}")

    if funct_return is None:
        return None
    return str(funct_return).rjust(whitespace)


def simple_request(func_name: str, query: str, variables: Any) -> requests.Response:
    """POST a GraphQL query and return the response; raise on a non-2xx status."""
    response = requests.post(
        GRAPHQL_URL,
        headers=get_auth_headers(),
        json={"query": query, "variables": variables},
    )
    if not response.ok:
        status = f"{response.status_code} {response.reason or ''}".strip()
        raise requests.HTTPError(
            f"{func_name} failed with status {status}", response=response
        )
    return response
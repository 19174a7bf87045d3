"""The per-user line-of-code cache file and the repository archive."""

from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any, Iterable

CACHE_DIR = Path("cache")
ARCHIVE_PATH = CACHE_DIR / "repository_archive.txt"

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str) -> int | None:
    return int(text) if _INT_RE.fullmatch(text) else None


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _name_with_owner(edge: Any) -> str | None:
    try:
        name = edge["node"]["nameWithOwner"]
    except (KeyError, TypeError, IndexError):
        return None
    return name if isinstance(name, str) else None


def cache_filename(user_name: str) -> Path:
    """Return the path of the cache file kept for user_name."""
    return CACHE_DIR / f"{_sha256_hex(user_name)}.txt"


def commit_counter(comment_size: int, user_name: str) -> int:
    """Sum the commit counts stored in the user's cache file."""
    lines = cache_filename(user_name).read_text(encoding="utf-8").splitlines()
    total = 0
    for line in lines[comment_size:]:
        parts = line.split()
        if len(parts) > 3:
            count = _parse_int(parts[2])
            if count is not None:
                total += count
    return total


def add_archive(path: str | Path = ARCHIVE_PATH) -> tuple[int, int, int, int, int]:
    """Return (added, deleted, net, commits, repos) totals from an archive file."""
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    if len(lines) < 10:
        return (0, 0, 0, 0, 0)

    data = lines[7:-3]
    added_loc = deleted_loc = added_commits = 0
    for line in data:
        parts = line.split()
        if len(parts) >= 5:
            added_loc += _parse_int(parts[3]) or 0
            deleted_loc += _parse_int(parts[4]) or 0
            commits = _parse_int(parts[2])
            if commits is not None:
                added_commits += commits

    last_parts = lines[-1].split()
    if len(last_parts) >= 5:
        extra = _parse_int(last_parts[4].rstrip(","))
        if extra is not None:
            added_commits += extra

    return (
        added_loc,
        deleted_loc,
        added_loc - deleted_loc,
        added_commits,
        len(data),
    )


def flush_cache(edges: Iterable[Any], filename: str | Path, comment_size: int) -> None:
    """Rewrite the cache file with its comment block and zeroed repository rows."""
    print(f"flush_cache: Does this file exists? {filename}")
    preserved: list[str] = []
    with open(filename, encoding="utf-8", newline="") as source:
        for _ in range(comment_size):
            line = source.readline()
            if not line:
                break
            preserved.append(line)

    with open(filename, "w", encoding="utf-8", newline="") as target:
        target.writelines(preserved)
        for edge in edges:
            name = _name_with_owner(edge)
            if name is not None:
                target.write(f"{_sha256_hex(name)} 0 0 0 0\n")


def force_close_file(data: Any, cache_comment: str, user_name: str) -> Path:
    """Save the comment block and partial data to the user's cache file."""
    print("Force closing the file!!")
    filename = cache_filename(user_name)
    with open(filename, "w", encoding="utf-8", newline="") as target:
        target.write(cache_comment)
        target.write(json.dumps(data, indent=2))
    print(
        "There was an error while writing to the cache file. "
        f"The file {filename} has had the partial data saved and closed."
    )
    return filename
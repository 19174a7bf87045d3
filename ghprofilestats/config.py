"""Settings read from the environment and an optional local .env file."""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv

USER_AGENT = "ghprofilestats"

_owner_id: str | None = None


def _load_env() -> None:
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path)


def _require(name: str, message: str) -> str:
    _load_env()
    value = os.environ.get(name)
    if value is None:
        raise RuntimeError(message)
    return value


def get_user_name() -> str:
    """Return the account login to report on, from USER_NAME."""
    return _require("USER_NAME", "USER_NAME not found")


def get_access_token() -> str:
    """Return the API access token, from ACCESS_TOKEN."""
    return _require("ACCESS_TOKEN", "Access Token not found")


def get_auth_headers() -> dict[str, str]:
    """Return the HTTP headers that authenticate an API request."""
    return {
        "Authorization": f"Bearer {get_access_token()}",
        "User-Agent": USER_AGENT,
    }


def set_owner_id(owner_id: str) -> None:
    """Record the account's node id; it may be set only once."""
    global _owner_id
    if _owner_id is not None:
        raise RuntimeError("Owner id was already set")
    _owner_id = owner_id


def get_owner_id() -> str:
    """Return the account's node id recorded by set_owner_id."""
    if _owner_id is None:
        raise RuntimeError("Owner id has not been set")
    return _owner_id
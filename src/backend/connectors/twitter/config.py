from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()

DEFAULT_BASE_URL = "https://api.twitter.com"
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class TwitterConfig:
    bearer_token: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


def get_twitter_config() -> TwitterConfig:
    """
    Load filtered stream connector configuration from environment variables.

    Reads TWITTER_BEARER_TOKEN (required), TWITTER_API_BASE_URL and
    TWITTER_HTTP_TIMEOUT_SECONDS. The bearer token is used as-is; obtaining
    one is outside this connector.
    """
    return TwitterConfig(
        bearer_token=_require_env("TWITTER_BEARER_TOKEN"),
        base_url=os.getenv("TWITTER_API_BASE_URL", "").strip().rstrip("/") or DEFAULT_BASE_URL,
        timeout_seconds=_timeout_from_env("TWITTER_HTTP_TIMEOUT_SECONDS"),
    )


def _timeout_from_env(name: str) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer number of seconds.") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value

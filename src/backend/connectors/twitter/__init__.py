"""Twitter filtered stream connector (network + config live here; domain logic lives in src/backend/common/filtered_stream)."""

from .client import TwitterHttpClient, TwitterHttpError
from .config import TwitterConfig, get_twitter_config

__all__ = ["TwitterConfig", "get_twitter_config", "TwitterHttpClient", "TwitterHttpError"]

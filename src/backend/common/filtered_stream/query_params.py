from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping
from urllib.parse import urlencode


EXPANSIONS = "expansions"
MEDIA_FIELDS = "media.fields"
PLACE_FIELDS = "place.fields"
POLL_FIELDS = "poll.fields"
TWEET_FIELDS = "tweet.fields"
USER_FIELDS = "user.fields"
BACKFILL_MINUTES = "backfill_minutes"

# Rendering order of the comma-joined categories.
FIELD_PARAMS = (EXPANSIONS, MEDIA_FIELDS, PLACE_FIELDS, POLL_FIELDS, TWEET_FIELDS, USER_FIELDS)


class StreamQueryParamsBuilder:
    """
    Accumulates expansions and field selections for the filtered stream endpoint.

    Each `add_*` call appends one value and returns the builder so calls can be
    chained. Values are not checked against the API vocabulary and duplicates
    are kept. See
    https://developer.twitter.com/en/docs/twitter-api/tweets/filtered-stream/api-reference/get-tweets-search-stream

    Not safe for concurrent mutation; use one builder per request.
    """

    def __init__(self) -> None:
        self._values: Dict[str, List[str]] = {param: [] for param in FIELD_PARAMS}
        self._backfill_minutes = 0

    def add_expansion(self, expansion: str) -> "StreamQueryParamsBuilder":
        """Expand an object referenced by ID in the payload, e.g. `author_id`."""
        return self._add(EXPANSIONS, expansion)

    def add_media_field(self, media_field: str) -> "StreamQueryParamsBuilder":
        """Only returned when the tweet has media and `attachments.media_keys` is expanded."""
        return self._add(MEDIA_FIELDS, media_field)

    def add_place_field(self, place_field: str) -> "StreamQueryParamsBuilder":
        """Only returned when the tweet has a place and `geo.place_id` is expanded."""
        return self._add(PLACE_FIELDS, place_field)

    def add_poll_field(self, poll_field: str) -> "StreamQueryParamsBuilder":
        """Only returned when the tweet has a poll and `attachments.poll_ids` is expanded."""
        return self._add(POLL_FIELDS, poll_field)

    def add_tweet_field(self, tweet_field: str) -> "StreamQueryParamsBuilder":
        return self._add(TWEET_FIELDS, tweet_field)

    def add_user_field(self, user_field: str) -> "StreamQueryParamsBuilder":
        """Requires one of the user expansions, e.g. `author_id` or `in_reply_to_user_id`."""
        return self._add(USER_FIELDS, user_field)

    def add_backfill_minutes(self, minutes: int) -> "StreamQueryParamsBuilder":
        """
        Replay up to `minutes` of data missed during a disconnection.

        Zero disables backfill. The API enforces its own upper limit.
        """
        if minutes < 0:
            raise ValueError("backfill minutes must be >= 0")
        self._backfill_minutes = int(minutes)
        return self

    def build(self) -> Mapping[str, str]:
        query: Dict[str, str] = {}
        for param in FIELD_PARAMS:
            values = self._values[param]
            if values:
                query[param] = ",".join(values)
        if self._backfill_minutes > 0:
            query[BACKFILL_MINUTES] = str(self._backfill_minutes)
        return MappingProxyType(query)

    def encode(self) -> str:
        return urlencode(dict(self.build()))

    def _add(self, param: str, value: str) -> "StreamQueryParamsBuilder":
        self._values[param].append(value)
        return self

from __future__ import annotations

import json
from contextlib import closing
from typing import Any, Dict, Iterator, Mapping, Optional

from .errors import DeserializationError
from .query_params import StreamQueryParamsBuilder
from .transport import StreamTransport


class FilteredStream:
    """
    Reads the newline-delimited JSON filtered stream.

    The server sends blank keep-alive lines between messages; they are skipped.
    Reconnecting after a disconnect is left to the caller (see backfill minutes).
    """

    def __init__(self, transport: StreamTransport) -> None:
        self._transport = transport

    def messages(
        self,
        params: Optional[Mapping[str, str] | StreamQueryParamsBuilder] = None,
    ) -> Iterator[Dict[str, Any]]:
        if isinstance(params, StreamQueryParamsBuilder):
            params = params.build()
        response = self._transport.get_search_stream(params or {})
        with closing(response):
            for line in response:
                text = line.decode("utf-8") if isinstance(line, bytes) else line
                text = text.strip()
                if not text:
                    continue
                yield parse_stream_message(text)


def parse_stream_message(text: str) -> Dict[str, Any]:
    try:
        message = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DeserializationError(f"Stream message is not valid JSON: {exc}", text) from exc
    if not isinstance(message, dict):
        raise DeserializationError("Stream message must be a JSON object.", text)
    return message

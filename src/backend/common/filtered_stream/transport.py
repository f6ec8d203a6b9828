from __future__ import annotations

from typing import Iterator, Mapping, Protocol


class StreamResponse(Protocol):
    """Readable response body; must be closed once consumed."""

    def read(self) -> bytes: ...

    def __iter__(self) -> Iterator[bytes]: ...

    def close(self) -> None: ...


class StreamTransport(Protocol):
    """
    HTTP collaborator used by the rules client and stream reader.

    `query_suffix` is appended verbatim to the rules endpoint URL. Failures are
    raised as `TransportError` (or whatever the transport classifies them as).
    """

    def add_rules(self, query_suffix: str, body: str) -> StreamResponse: ...

    def get_rules(self) -> StreamResponse: ...

    def get_search_stream(self, params: Mapping[str, str]) -> StreamResponse: ...

from __future__ import annotations


class FilteredStreamError(RuntimeError):
    """Base class for filtered stream SDK errors."""


class SerializationError(FilteredStreamError):
    pass


class TransportError(FilteredStreamError):
    def __init__(self, message: str, *, status: int = 0, body: str | None = None):
        super().__init__(message)
        self.status = status
        self.body = body


class DeserializationError(FilteredStreamError):
    def __init__(self, message: str, body: str | None = None):
        super().__init__(message)
        self.body = body

from __future__ import annotations

import logging
from typing import Mapping
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode, urljoin
from urllib.request import Request, urlopen

from common.filtered_stream.errors import TransportError

from .config import TwitterConfig


logger = logging.getLogger(__name__)

RULES_PATH = "/2/tweets/search/stream/rules"
STREAM_PATH = "/2/tweets/search/stream"


class TwitterHttpError(TransportError):
    def __init__(self, status: int, message: str, body: str | None = None):
        super().__init__(f"Twitter HTTP {status}: {message}", status=status, body=body)


class TwitterHttpClient:
    """
    Filtered stream transport over stdlib urllib.

    Returned responses are open and must be closed by the caller. Failed calls
    raise `TwitterHttpError` straight away; there are no retries.
    """

    def __init__(self, config: TwitterConfig) -> None:
        self._config = config

    def add_rules(self, query_suffix: str, body: str):
        url = _build_url(self._config.base_url, RULES_PATH) + query_suffix
        req = self._request(url, method="POST", data=body.encode("utf-8"))
        req.add_header("Content-Type", "application/json")
        return self._open(req)

    def get_rules(self):
        url = _build_url(self._config.base_url, RULES_PATH)
        return self._open(self._request(url, method="GET"))

    def get_search_stream(self, params: Mapping[str, str]):
        url = _build_url(self._config.base_url, STREAM_PATH, params)
        return self._open(self._request(url, method="GET"))

    def _request(self, url: str, *, method: str, data: bytes | None = None) -> Request:
        req = Request(url, data=data, method=method)
        req.add_header("Accept", "application/json")
        req.add_header("Authorization", f"Bearer {self._config.bearer_token}")
        return req

    def _open(self, req: Request):
        logger.debug("%s %s", req.get_method(), req.full_url)
        try:
            return urlopen(req, timeout=self._config.timeout_seconds)
        except HTTPError as exc:
            body = None
            if exc.fp:
                try:
                    body = exc.read().decode("utf-8", errors="replace")
                finally:
                    exc.close()
            raise TwitterHttpError(exc.code, exc.reason, body) from exc
        except URLError as exc:
            raise TwitterHttpError(0, str(exc.reason)) from exc
        except TimeoutError as exc:
            raise TwitterHttpError(0, "request timed out") from exc


def _build_url(base_url: str, path: str, params: Mapping[str, str] | None = None) -> str:
    normalized_path = path if path.startswith("/") else f"/{path}"
    url = urljoin(base_url, normalized_path)
    if params:
        url = f"{url}?{urlencode(dict(params))}"
    return url

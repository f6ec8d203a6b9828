import io
from unittest.mock import Mock, patch
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qs, urlparse

import pytest

from common.filtered_stream.errors import TransportError
from connectors.twitter.client import TwitterHttpClient, TwitterHttpError
from connectors.twitter.config import TwitterConfig


def _config() -> TwitterConfig:
    return TwitterConfig(bearer_token="token", base_url="https://api.twitter.com", timeout_seconds=5)


def _capture():
    captured = {}
    response = Mock()

    def _fake_urlopen(req, timeout=30):
        captured["url"] = req.full_url
        captured["method"] = req.get_method()
        captured["auth"] = req.get_header("Authorization")
        captured["content_type"] = req.get_header("Content-type")
        captured["data"] = req.data
        captured["timeout"] = timeout
        return response

    return captured, response, _fake_urlopen


def test_add_rules_posts_json_with_suffix():
    captured, response, fake = _capture()

    with patch("connectors.twitter.client.urlopen", fake):
        out = TwitterHttpClient(_config()).add_rules("?dry_run=true", '{"add": []}')

    assert out is response
    assert captured["method"] == "POST"
    assert captured["url"] == "https://api.twitter.com/2/tweets/search/stream/rules?dry_run=true"
    assert captured["auth"] == "Bearer token"
    assert captured["content_type"] == "application/json"
    assert captured["data"] == b'{"add": []}'
    assert captured["timeout"] == 5


def test_get_rules_issues_get_without_suffix():
    captured, _, fake = _capture()

    with patch("connectors.twitter.client.urlopen", fake):
        TwitterHttpClient(_config()).get_rules()

    assert captured["method"] == "GET"
    assert captured["url"] == "https://api.twitter.com/2/tweets/search/stream/rules"


def test_get_search_stream_encodes_params():
    captured, _, fake = _capture()

    with patch("connectors.twitter.client.urlopen", fake):
        TwitterHttpClient(_config()).get_search_stream({"tweet.fields": "a,b", "backfill_minutes": "2"})

    parsed = urlparse(captured["url"])
    assert parsed.path == "/2/tweets/search/stream"
    qs = parse_qs(parsed.query)
    assert qs["tweet.fields"] == ["a,b"]
    assert qs["backfill_minutes"] == ["2"]


def test_http_error_raises_transport_error_with_body():
    error = HTTPError(
        "https://api.twitter.com/2/tweets/search/stream/rules",
        401,
        "Unauthorized",
        {},
        io.BytesIO(b'{"title": "Unauthorized"}'),
    )

    with patch("connectors.twitter.client.urlopen", side_effect=error):
        with pytest.raises(TwitterHttpError) as excinfo:
            TwitterHttpClient(_config()).get_rules()

    assert isinstance(excinfo.value, TransportError)
    assert excinfo.value.status == 401
    assert excinfo.value.body == '{"title": "Unauthorized"}'


def test_network_error_raises_transport_error_without_retry():
    fake = Mock(side_effect=URLError("connection refused"))

    with patch("connectors.twitter.client.urlopen", fake):
        with pytest.raises(TransportError) as excinfo:
            TwitterHttpClient(_config()).add_rules("", "{}")

    assert excinfo.value.status == 0
    fake.assert_called_once()


def test_http_error_with_undecodable_body_is_still_transport_error():
    fp = io.BytesIO(b"\xff\xfebad")
    error = HTTPError("https://api.twitter.com/2/tweets/search/stream/rules", 500, "Server Error", {}, fp)

    with patch("connectors.twitter.client.urlopen", side_effect=error):
        with pytest.raises(TwitterHttpError) as excinfo:
            TwitterHttpClient(_config()).add_rules("", "{}")

    assert excinfo.value.status == 500
    assert excinfo.value.body.endswith("bad")
    assert "�" in excinfo.value.body
    assert fp.closed

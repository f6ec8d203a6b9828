import pytest

from connectors.twitter.config import DEFAULT_BASE_URL, get_twitter_config


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("TWITTER_BEARER_TOKEN", "abc")
    monkeypatch.setenv("TWITTER_API_BASE_URL", "https://example.test/")
    monkeypatch.setenv("TWITTER_HTTP_TIMEOUT_SECONDS", "12")

    cfg = get_twitter_config()

    assert cfg.bearer_token == "abc"
    assert cfg.base_url == "https://example.test"
    assert cfg.timeout_seconds == 12


def test_config_defaults(monkeypatch):
    monkeypatch.setenv("TWITTER_BEARER_TOKEN", "abc")
    monkeypatch.delenv("TWITTER_API_BASE_URL", raising=False)
    monkeypatch.delenv("TWITTER_HTTP_TIMEOUT_SECONDS", raising=False)

    cfg = get_twitter_config()

    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.timeout_seconds == 30


def test_missing_token_is_an_error(monkeypatch):
    monkeypatch.delenv("TWITTER_BEARER_TOKEN", raising=False)

    with pytest.raises(ValueError, match="TWITTER_BEARER_TOKEN"):
        get_twitter_config()


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_invalid_timeout_is_an_error(monkeypatch, raw):
    monkeypatch.setenv("TWITTER_BEARER_TOKEN", "abc")
    monkeypatch.setenv("TWITTER_HTTP_TIMEOUT_SECONDS", raw)

    with pytest.raises(ValueError):
        get_twitter_config()

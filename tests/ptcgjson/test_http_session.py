import requests
import requests_cache

from ptcgjson import constants
from ptcgjson.http_session import build_session


def test_session_has_no_retries_and_fixed_timeout():
    session = build_session()

    assert not isinstance(session, requests_cache.CachedSession)
    assert session.get_adapter("https://tcgcsv.com").max_retries.total == 0
    assert session.request.keywords["timeout"] == 30.0
    assert session.headers["User-Agent"] == "ptcgjson/1.0.0 (python-requests)"


def test_session_overrides():
    session = build_session(retries=2, timeout=5)

    assert session.get_adapter("http://example.com").max_retries.total == 2
    assert session.request.keywords["timeout"] == 5


def test_cached_session_when_enabled(ptcgjson_config, monkeypatch, tmp_path):
    ptcgjson_config.use_cache = True
    monkeypatch.setattr(constants, "CACHE_PATH", tmp_path.joinpath("cache"))

    session = build_session()

    assert isinstance(session, requests_cache.CachedSession)
    assert isinstance(session, requests.Session)
    assert tmp_path.joinpath("cache").is_dir()

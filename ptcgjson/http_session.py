"""
requests sessions shared by every provider and the uploader
"""
import datetime
import functools
from typing import Optional, Union

import requests
import requests.adapters
import requests_cache
import urllib3

from . import constants
from .ptcgjson_config import PtcgjsonConfig

AnySession = Union[requests.Session, requests_cache.CachedSession]

RETRY_ON_STATUS = (500, 502, 503, 504)


def _open_session(use_cache: bool, cache_name: str) -> AnySession:
    if not use_cache:
        return requests.Session()

    constants.CACHE_PATH.mkdir(parents=True, exist_ok=True)
    return requests_cache.CachedSession(
        cache_name=str(constants.CACHE_PATH.joinpath(cache_name)),
        expire_after=datetime.timedelta(days=1),
        stale_if_error=True,
    )


def build_session(
    retries: Optional[int] = None,
    timeout: Optional[float] = None,
    cache_name: str = "default",
) -> AnySession:
    """
    Session with a fixed request timeout and, when [HTTP] retries is
    raised above zero, urllib3 retries on gateway errors.
    With [PTCGJSON] use_cache on, responses are cached for a day.
    :param retries: Retry count (Default: config)
    :param timeout: Per-request timeout in seconds (Default: config)
    :param cache_name: Cache file name, one per provider
    """
    config = PtcgjsonConfig()
    retries = config.http_retries if retries is None else retries
    timeout = config.http_timeout_sec if timeout is None else timeout

    session = _open_session(config.use_cache, cache_name)

    adapter = requests.adapters.HTTPAdapter(
        max_retries=urllib3.util.retry.Retry(
            total=retries,
            connect=retries,
            read=retries,
            backoff_factor=0.3,
            status_forcelist=RETRY_ON_STATUS,
            raise_on_status=False,
        )
    )
    for scheme in ("http://", "https://"):
        session.mount(scheme, adapter)

    session.request = functools.partial(session.request, timeout=timeout)  # type: ignore
    session.headers["User-Agent"] = (
        f"ptcgjson/{config.ptcgjson_version} (python-requests)"
    )
    return session

"""
Shared plumbing for upstream data sources
"""
import abc
import logging
from typing import Any, Dict, Optional, Union

import requests
import requests_cache

from ..http_session import build_session
from ..ptcgjson_config import PtcgjsonConfig

LOGGER = logging.getLogger(__name__)

QueryParams = Optional[Dict[str, Union[str, int]]]


class AbstractProvider(abc.ABC):
    """
    A card or pricing source. Each subclass owns one HTTP session,
    pre-loaded with the headers that source expects.
    """

    session: Union[requests.Session, requests_cache.CachedSession]

    def __init__(self, headers: Dict[str, str]) -> None:
        super().__init__()
        self.session = build_session(cache_name=self.get_class_name())
        self.session.headers.update(headers)

    @abc.abstractmethod
    def _build_http_header(self) -> Dict[str, str]:
        """
        :return: Headers sent with every request to this source
        """

    @abc.abstractmethod
    def download(self, url: str, params: QueryParams = None) -> Any:
        """
        Fetch one document from this source
        :param url: Absolute URL
        :param params: Query string arguments
        """

    def set_session(self, session: requests.Session) -> None:
        """
        Swap in another session, e.g. a bare one in tests
        """
        self.session = session

    @classmethod
    def get_class_name(cls) -> str:
        return cls.__name__

    @staticmethod
    def log_download(response: Any) -> None:
        cached = PtcgjsonConfig().use_cache and getattr(response, "from_cache", False)
        LOGGER.debug(f"GET {response.url} -> {response.status_code} (cached={cached})")

    def download_json(self, url: str, params: QueryParams = None) -> Any:
        """
        GET a JSON document
        :param url: Absolute URL
        :param params: Query string arguments
        :return: Decoded body
        :raises requests.HTTPError: on any non-2xx status
        """
        response = self.session.get(url, params=params)
        self.log_download(response)

        if not response.ok:
            LOGGER.error(
                f"{self.get_class_name()}: {url} returned HTTP {response.status_code}"
            )
            response.raise_for_status()

        return response.json()

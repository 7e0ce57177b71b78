"""
Runtime settings for every pipeline stage

Values come from resources/ptcgjson.properties. A handful of options can
be overridden from the environment, which is how CI injects secrets.
"""

import configparser
import logging
import os
import pathlib
from typing import Callable, Optional, TypeVar

from singleton_decorator import singleton

from . import constants

NumberT = TypeVar("NumberT", int, float)

TRUTHY_ENV_VALUES = ("true", "1", "yes", "on")


@singleton
class PtcgjsonConfig:
    """
    Settings read once per process. Tests reset the singleton
    (PtcgjsonConfig._instance = None) to pick up a different file.
    """

    logger: logging.Logger
    config_parser: configparser.ConfigParser
    ptcgjson_version: str
    use_cache: bool
    data_path: pathlib.Path

    sets_url: str
    cards_url: str
    card_request_delay_sec: float

    pricing_url: str
    pricing_csv_path: Optional[pathlib.Path]
    tcgcsv_url: str
    tcgcsv_category: str
    max_pricing_groups: int
    pricing_request_delay_sec: float
    min_pricing_entries: int
    pricing_strict: bool

    chunk_size: int

    shopify_store: str
    shopify_access_token: str
    shopify_theme_id: str
    shopify_api_version: str
    upload_delay_sec: float

    http_timeout_sec: float
    http_retries: int

    def __init__(self, config_path: Optional[pathlib.Path] = None) -> None:
        self.logger = logging.getLogger(__name__)
        self.config_parser = configparser.ConfigParser()
        self.config_parser.read(
            str(config_path or constants.CONFIG_PATH), encoding="utf-8"
        )

        self.ptcgjson_version = self.get("PTCGJSON", "version")
        if not self.ptcgjson_version:
            self.logger.warning("No [PTCGJSON] version set, using a dated build")
            self.ptcgjson_version = (
                f"1.X.X+{constants.PTCGJSON_BUILD_DATE.replace('-', '')}"
            )

        self.use_cache = self.get_boolean("PTCGJSON", "use_cache")
        output_root = os.environ.get("PTCGJSON_OUTPUT_PATH", constants.ENV_OUT_PATH)
        self.data_path = (
            pathlib.Path(output_root).expanduser().resolve().joinpath("data")
        )

        # Card source
        self.sets_url = self.get("PokemonTcgData", "sets_url")
        self.cards_url = self.get("PokemonTcgData", "cards_url")
        self.card_request_delay_sec = self.get_float(
            "PokemonTcgData", "request_delay_sec", 0.2
        )

        # Pricing sources and health thresholds
        self.pricing_url = self.get("Pricing", "url", env="PTCGJSON_PRICING_URL")
        csv_path = self.get("Pricing", "csv_path", env="PTCGJSON_PRICING_CSV")
        self.pricing_csv_path = pathlib.Path(csv_path) if csv_path else None
        self.tcgcsv_url = self.get(
            "Pricing", "tcgcsv_url", "https://tcgcsv.com/tcgplayer"
        )
        self.tcgcsv_category = self.get("Pricing", "category", "3")
        self.max_pricing_groups = self.get_int("Pricing", "max_groups")
        self.pricing_request_delay_sec = self.get_float(
            "Pricing", "request_delay_sec", 1.0
        )
        self.min_pricing_entries = self.get_int(
            "Pricing", "min_entries", 100, env="MIN_PRICING_ENTRIES"
        )
        self.pricing_strict = self.get_boolean(
            "Pricing", "strict", env="PRICING_STRICT"
        )

        self.chunk_size = self.get_int("Output", "chunk_size", 5000)

        # Storefront
        self.shopify_store = self.get("Shopify", "store", env="SHOPIFY_STORE")
        self.shopify_access_token = self.get(
            "Shopify", "access_token", env="SHOPIFY_ACCESS_TOKEN"
        )
        self.shopify_theme_id = self.get("Shopify", "theme_id", "main")
        self.shopify_api_version = self.get("Shopify", "api_version", "2023-10")
        self.upload_delay_sec = self.get_float("Shopify", "upload_delay_sec", 0.2)

        self.http_timeout_sec = self.get_float("HTTP", "timeout_sec", 30.0)
        self.http_retries = self.get_int("HTTP", "retries")

    def _lookup(
        self, section: str, option: str, env: Optional[str] = None
    ) -> Optional[str]:
        """
        Environment variable first, then the properties file.
        Empty values count as unset.
        """
        if env and os.environ.get(env):
            return os.environ[env]
        if self.has_option(section, option):
            return self.config_parser.get(section, option)
        return None

    def _lookup_number(
        self,
        cast: Callable[[str], NumberT],
        section: str,
        option: str,
        fallback: NumberT,
        env: Optional[str],
    ) -> NumberT:
        raw_value = self._lookup(section, option, env)
        if raw_value is None:
            return fallback

        try:
            return cast(raw_value)
        except ValueError:
            self.logger.warning(
                f"[{section}] {option}={raw_value!r} is not a valid "
                f"{cast.__name__}, using {fallback}"
            )
            return fallback

    def get(
        self, section: str, option: str, fallback: str = "", env: Optional[str] = None
    ) -> str:
        """
        String setting
        :param section: Properties section, e.g. "Pricing"
        :param option: Option inside the section
        :param fallback: Returned when neither env nor file sets it
        :param env: Optional environment override
        """
        raw_value = self._lookup(section, option, env)
        return fallback if raw_value is None else raw_value

    def get_boolean(
        self,
        section: str,
        option: str,
        fallback: bool = False,
        env: Optional[str] = None,
    ) -> bool:
        """
        Flag setting. The environment accepts true/1/yes/on;
        the file accepts whatever configparser understands.
        """
        if env and os.environ.get(env):
            return os.environ[env].lower() in TRUTHY_ENV_VALUES
        if not self.has_option(section, option):
            return fallback
        return self.config_parser.getboolean(section, option, fallback=fallback)

    def get_int(
        self, section: str, option: str, fallback: int = 0, env: Optional[str] = None
    ) -> int:
        """
        Integer setting, falling back (with a warning) on garbage
        """
        return self._lookup_number(int, section, option, fallback, env)

    def get_float(
        self,
        section: str,
        option: str,
        fallback: float = 0.0,
        env: Optional[str] = None,
    ) -> float:
        """
        Float setting, falling back (with a warning) on garbage
        """
        return self._lookup_number(float, section, option, fallback, env)

    def has_section(self, section: str) -> bool:
        return self.config_parser.has_section(section)

    def has_option(self, section: str, option: str) -> bool:
        """
        :return: True only if the option exists and is not blank ("key=")
        """
        if not self.config_parser.has_option(section, option):
            return False
        return bool(self.config_parser.get(section, option).strip())

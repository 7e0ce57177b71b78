"""Pytest configuration and fixtures for PTCGJSON tests."""

import json
import pathlib
from typing import Any, Generator

import pytest

from ptcgjson.providers import PokemonTcgDataProvider, PricingFeedProvider, TcgCsvProvider
from ptcgjson.ptcgjson_config import PtcgjsonConfig

SINGLETONS = (PtcgjsonConfig, PokemonTcgDataProvider, PricingFeedProvider, TcgCsvProvider)

ENV_OVERRIDES = (
    "PTCGJSON_PRICING_URL",
    "PTCGJSON_PRICING_CSV",
    "MIN_PRICING_ENTRIES",
    "PRICING_STRICT",
    "SHOPIFY_STORE",
    "SHOPIFY_ACCESS_TOKEN",
    "PTCGJSON_DEBUG",
)


def reset_singletons() -> None:
    """Drop cached config/provider instances so each test builds its own."""
    for singleton_class in SINGLETONS:
        if hasattr(singleton_class, "_instance"):
            singleton_class._instance = None


def write_json(path: pathlib.Path, contents: Any) -> pathlib.Path:
    """Write a JSON input file, creating its directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(contents), encoding="utf-8")
    return path


def read_json(path: pathlib.Path) -> Any:
    """Read back a JSON artifact."""
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def ptcgjson_config(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[PtcgjsonConfig, None, None]:
    """
    Fresh configuration per test: output under tmp_path, no environment
    overrides leaking in, and no politeness delays.
    """
    for variable in ENV_OVERRIDES:
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv("PTCGJSON_OUTPUT_PATH", str(tmp_path))

    reset_singletons()
    config = PtcgjsonConfig()
    config.card_request_delay_sec = 0
    config.pricing_request_delay_sec = 0
    config.upload_delay_sec = 0
    yield config
    reset_singletons()


@pytest.fixture
def data_path(ptcgjson_config: PtcgjsonConfig) -> pathlib.Path:
    """Data directory of the current test."""
    return ptcgjson_config.data_path


@pytest.fixture
def raw_cards_dataset() -> dict:
    """Small raw card dataset spanning two sets."""
    return {
        "sets": [
            {
                "id": "base5",
                "name": "Team Rocket",
                "series": "Base",
                "releaseDate": "2000/04/24",
            },
            {
                "id": "xy1",
                "name": "XY",
                "series": "XY",
                "releaseDate": "2014/02/05",
            },
            {
                "id": "base1",
                "name": "Base",
                "series": "Base",
                "releaseDate": "1999/01/09",
            },
        ],
        "cards": [
            {
                "id": "base5-36",
                "name": "Dark Charmeleon",
                "number": "36",
                "rarity": "Uncommon",
                "supertype": "Pokémon",
                "types": ["Fire"],
                "images": {
                    "small": "https://images.pokemontcg.io/base5/36.png",
                    "large": "https://images.pokemontcg.io/base5/36_hires.png",
                },
            },
            {
                "id": "xy1-1",
                "name": "Venusaur-EX",
                "number": "1",
                "rarity": "Rare Holo EX",
                "supertype": "Pokémon",
                "types": ["Grass"],
                "set": {},
            },
            {
                "id": "base5-4",
                "name": "Dark Charizard",
                "number": "4",
                "rarity": "Rare Holo",
                "supertype": "Pokémon",
                "types": ["Fire"],
                "set": {"id": "base5", "name": "Team Rocket"},
            },
        ],
    }

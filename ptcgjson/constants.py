"""
PTCGJSON Constants that cannot be changed and are hardcoded intentionally
"""

import datetime
import os
import pathlib
from typing import Dict, Set, Tuple

TOP_LEVEL_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
RESOURCE_PATH: pathlib.Path = pathlib.Path(__file__).resolve().parent.joinpath(
    "resources"
)
CONFIG_PATH: pathlib.Path = RESOURCE_PATH.joinpath("ptcgjson.properties")
ENV_OUT_PATH: pathlib.Path = (
    pathlib.Path(os.environ.get("PTCGJSON_OUTPUT_PATH", TOP_LEVEL_DIR))
    .expanduser()
    .resolve()
)

LOG_PATH: pathlib.Path = ENV_OUT_PATH.joinpath("ptcgjson_logs")

PTCGJSON_BUILD_DATE: str = datetime.datetime.today().strftime("%Y-%m-%d")

CACHE_PATH: pathlib.Path = TOP_LEVEL_DIR.joinpath(".ptcgjson_cache")

# Artifact names
RAW_CARDS_FILE: str = "raw-cards.json"
RAW_PRICING_FILE: str = "pricing-raw.json"
CHUNK_FILE_PREFIX: str = "tcg-cards-chunk-"
CARDS_INDEX_FILE: str = "tcg-cards-index.json"
SEARCH_INDEX_FILE: str = "tcg-search-index.json"
SUMMARY_FILE: str = "tcg-summary.json"
RAW_FILE_NAMES: Set[str] = {RAW_CARDS_FILE, RAW_PRICING_FILE}

# Exit codes
EXIT_OK: int = 0
EXIT_FAILURE: int = 1
EXIT_MISSING_INPUT: int = 2

DEFAULT_LANGUAGE: str = "EN"
PRINTINGS: Tuple[str, ...] = ("normal", "holo", "reverse")

# Upstream rows name the same thing differently depending on the export
GROUP_ID_FIELDS: Tuple[str, ...] = ("groupId", "setId", "group_id", "set_code")
EXT_NUMBER_FIELDS: Tuple[str, ...] = (
    "extNumber",
    "ext_number",
    "number",
    "cardNumber",
    "card_number",
    "collectorNumber",
)
PRINTING_FIELDS: Tuple[str, ...] = (
    "subTypeName",
    "printing",
    "variant",
    "finish",
    "extRarity",
    "rarity",
)
LANGUAGE_FIELDS: Tuple[str, ...] = ("lang", "language", "languageCode")
PRICE_FIELDS: Dict[str, Tuple[str, ...]] = {
    "low": ("lowPrice", "low", "low_price"),
    "mid": ("midPrice", "mid", "mid_price"),
    "high": ("highPrice", "high", "high_price"),
    "market": ("marketPrice", "market", "market_price"),
    "direct_low": ("directLowPrice", "directLow", "direct_low_price"),
}

# Product group names as they appear in pricing exports => Pokemon TCG set ids
SET_NAME_ALIASES: Dict[str, str] = {
    "base set": "base1",
    "base": "base1",
    "jungle": "base2",
    "fossil": "base3",
    "base set 2": "base4",
    "team rocket": "base5",
    "gym heroes": "gym1",
    "gym challenge": "gym2",
    "neo genesis": "neo1",
    "neo discovery": "neo2",
    "neo destiny": "neo3",
    "neo revelation": "neo4",
    "expedition": "ecard1",
    "aquapolis": "ecard2",
    "skyridge": "ecard3",
    "xy": "xy1",
    "xy base": "xy1",
    "flashfire": "xy2",
    "furious fists": "xy3",
    "phantom forces": "xy4",
    "primal clash": "xy5",
    "roaring skies": "xy6",
    "ancient origins": "xy7",
    "breakthrough": "xy8",
    "xy breakthrough": "xy8",
    "breakpoint": "xy9",
    "xy breakpoint": "xy9",
    "generations": "xy10",
    "fates collide": "xy11",
    "steam siege": "xy12",
    "evolutions": "xy13",
    "sun moon": "sm1",
    "sun & moon": "sm1",
    "guardians rising": "sm2",
    "burning shadows": "sm3",
    "crimson invasion": "sm4",
    "ultra prism": "sm5",
    "forbidden light": "sm6",
    "celestial storm": "sm7",
    "lost thunder": "sm8",
    "team up": "sm9",
    "detective pikachu": "sm10",
    "unbroken bonds": "sm11",
    "unified minds": "sm12",
    "cosmic eclipse": "sm13",
    "sword shield": "swsh1",
    "sword & shield": "swsh1",
    "rebel clash": "swsh2",
    "darkness ablaze": "swsh3",
    "champions path": "swsh35",
    "vivid voltage": "swsh4",
    "battle styles": "swsh5",
    "chilling reign": "swsh6",
    "evolving skies": "swsh7",
    "fusion strike": "swsh8",
    "brilliant stars": "swsh9",
    "astral radiance": "swsh10",
    "pokemon go": "pgo",
    "lost origin": "swsh11",
    "silver tempest": "swsh12",
    "scarlet violet": "sv1",
    "scarlet & violet": "sv1",
    "paldea evolved": "sv2",
    "obsidian flames": "sv3",
    "pokemon 151": "sv3pt5",
    "151": "sv3pt5",
    "paradox rift": "sv4",
    "paldean fates": "sv4pt5",
    "temporal forces": "sv5",
    "twilight masquerade": "sv6",
    "shrouded fable": "sv7",
    "stellar crown": "sv8",
}

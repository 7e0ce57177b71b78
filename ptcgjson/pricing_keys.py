"""
Composite pricing keys

Cards and prices come from two datasets that share no identifier, so both
sides are reduced to the same key:

    lowercase(group) | UPPERCASE(number) | printing | LANG

Prices are stored under exactly one key. A card tries a bounded, ordered
list of key variants (set code x number x printing) and takes the first
one present.
"""

import re
from typing import Any, Dict, Iterator, List, Optional

from . import constants
from .utils import dedupe

# Standalone 1-3 digit token; "Pikachu - 58/102" style wins over a bare number
NAME_NUMBER_WITH_TOTAL_REGEX = re.compile(r"(?<![\w/])(\d{1,3})/\d+(?![\w/])")
NAME_NUMBER_REGEX = re.compile(r"(?<![\w/])(\d{1,3})(?![\w/])")
SET_CODE_PREFIX_REGEX = re.compile(r"^[^:]+:\s*")


def normalize_printing(value: Any) -> str:
    """
    Reduce a free-text subtype/rarity to normal, holo or reverse.
    "reverse" is checked first: "Reverse Holofoil" is a reverse holo.
    :param value: Free text (ala "Holofoil", "Reverse Holofoil", "Rare Holo")
    :return: Printing
    """
    text = str(value or "").lower()
    if "reverse" in text:
        return "reverse"
    if "holo" in text or "foil" in text:
        return "holo"
    return "normal"


def normalize_number(value: Any) -> str:
    """
    Collector number as used in keys. "036/102" is keyed as "036".
    :param value: Raw collector number
    :return: Uppercased number
    """
    number = str(value or "").strip().upper()
    if "/" in number:
        number = number.split("/", 1)[0].strip()
    return number


def build_pricing_key(
    group_id: Any,
    number: Any,
    printing: Any,
    language: Any = constants.DEFAULT_LANGUAGE,
) -> str:
    """
    Build the composite lookup key
    :param group_id: Set code / product group
    :param number: Collector number (already normalized by the caller)
    :param printing: normal, holo or reverse
    :param language: Card language
    :return: group|NUMBER|printing|LANG
    """
    return "|".join(
        [
            str(group_id or "").strip().lower(),
            str(number or "").strip().upper(),
            str(printing or "").strip().lower(),
            str(language or constants.DEFAULT_LANGUAGE).strip().upper(),
        ]
    )


def extract_number_from_name(product_name: Any) -> Optional[str]:
    """
    Best-effort collector number from a product name
    :param product_name: Name such as "Dark Charizard - 4/82"
    :return: The number ("4") or None
    """
    name = str(product_name or "")
    match = NAME_NUMBER_WITH_TOTAL_REGEX.search(name) or NAME_NUMBER_REGEX.search(name)
    return match.group(1) if match else None


def resolve_group_code(
    raw_group: Any, set_name_lookup: Optional[Dict[str, str]] = None
) -> str:
    """
    Translate a product group (id or set name) into a set code.
    Only exact, case-insensitive name matches are accepted.
    :param raw_group: Group as found in the pricing row
    :param set_name_lookup: Lowercase set name => set id, from the set registry
    :return: Lowercase set code (or the raw group, lowercased)
    """
    group = str(raw_group or "").strip().lower()
    if not group:
        return ""

    names = [group]
    unprefixed = SET_CODE_PREFIX_REGEX.sub("", group)
    if unprefixed and unprefixed != group:
        names.append(unprefixed)

    for name in names:
        if name in constants.SET_NAME_ALIASES:
            return constants.SET_NAME_ALIASES[name]
        if set_name_lookup and name in set_name_lookup:
            return set_name_lookup[name].lower()

    return group


def set_code_candidates(set_code: Any) -> List[str]:
    """
    Exact code, code without punctuation, code without trailing digits
    (neo1 => neo)
    """
    code = str(set_code or "").strip().lower()
    if not code:
        return []

    return [
        candidate
        for candidate in dedupe(
            [
                code,
                re.sub(r"[^a-z0-9]", "", code),
                re.sub(r"\d+$", "", code),
            ]
        )
        if candidate
    ]


def number_candidates(number: Any) -> List[str]:
    """
    Exact number, without leading zeros, padded to 3 digits, digits only
    """
    exact = str(number or "").strip().upper()
    if not exact:
        return [""]

    candidates = [exact, exact.lstrip("0") or "0"]
    if exact.isdigit():
        candidates.append(exact.zfill(3))
    candidates.append(re.sub(r"\D", "", exact))

    return [candidate for candidate in dedupe(candidates) if candidate]


def printing_candidates(printing: Any) -> List[str]:
    """
    The card's own printing first, then every printing as a fallback
    """
    return dedupe([normalize_printing(printing), *constants.PRINTINGS])


def card_key_candidates(
    set_code: Any, number: Any, printing: Any, language: Any = constants.DEFAULT_LANGUAGE
) -> Iterator[str]:
    """
    Every key a card may be priced under, most specific first
    :param set_code: Card's set code
    :param number: Card's collector number
    :param printing: Card's declared/inferred printing
    :param language: Card language
    :return: Keys, lazily, in match precedence order
    """
    numbers = number_candidates(number)
    printings = printing_candidates(printing)
    for set_candidate in set_code_candidates(set_code):
        for number_candidate in numbers:
            for printing_candidate in printings:
                yield build_pricing_key(
                    set_candidate, number_candidate, printing_candidate, language
                )

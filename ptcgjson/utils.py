"""
PTCGJSON simple utilities
"""

import datetime
import json
import logging
import os
import pathlib
import tempfile
import time
from typing import Any, Dict, Iterable, List, Optional, Sequence

from . import constants

LOGGER = logging.getLogger(__name__)


def init_logger() -> None:
    """
    Log to stderr and to a timestamped file under logs/.
    PTCGJSON_DEBUG=1 turns on debug output.
    """
    constants.LOG_PATH.mkdir(parents=True, exist_ok=True)

    start_time = time.strftime("%Y-%m-%d_%H.%M.%S")

    logging.basicConfig(
        level=(
            logging.DEBUG
            if os.environ.get("PTCGJSON_DEBUG", "").lower() in ["true", "1"]
            else logging.INFO
        ),
        format="[%(levelname)s] %(asctime)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(
                str(constants.LOG_PATH.joinpath(f"ptcgjson_{start_time}.log")),
                encoding="utf-8",
            ),
        ],
    )
    logging.getLogger("urllib3").setLevel(logging.ERROR)


def to_camel_case(snake_str: str) -> str:
    """
    cards_with_pricing -> cardsWithPricing
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def utc_timestamp() -> str:
    """
    ISO-8601 timestamp (UTC, second precision) used to stamp artifacts
    """
    return datetime.datetime.now(datetime.timezone.utc).strftime(
        "%Y-%m-%dT%H:%M:%SZ"
    )


def parse_price(value: Any) -> float:
    """
    Parse an upstream price field. Anything unparsable is worth 0.
    :param value: Raw value (str, int, float, None, ...)
    :return: Price as a float
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        price = float(str(value).strip().lstrip("$").replace(",", ""))
    except (TypeError, ValueError):
        return 0.0
    if price != price or price in (float("inf"), float("-inf")):
        return 0.0
    return price


def get_first_present(row: Dict[str, Any], field_names: Sequence[str]) -> Any:
    """
    Get the first non-empty value of several alternative field names
    :param row: Upstream record
    :param field_names: Field names to check, in order of preference
    :return: Value found, or None
    """
    for field_name in field_names:
        value = row.get(field_name)
        if value is not None and str(value).strip() != "":
            return value
    return None


def unwrap_list(payload: Any, *keys: str) -> List[Any]:
    """
    Upstream endpoints return either a bare array or an object
    wrapping it (ala {"data": [...]})
    :param payload: Parsed JSON
    :param keys: Wrapper keys to look under
    :return: The array, or an empty list
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            if isinstance(payload.get(key), list):
                return list(payload[key])
    return []


def chunk_list(items: Sequence[Any], size: int) -> List[List[Any]]:
    """
    Split a sequence into ordered, fixed-size pages
    :param items: Sequence to split
    :param size: Page size (must be positive)
    :return: Pages, the last one possibly shorter
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def load_json_file(file_path: pathlib.Path, hint: str = "") -> Any:
    """
    Load a required JSON input file
    :param file_path: File to read
    :param hint: How to produce the file, for the error message
    :return: Parsed JSON
    """
    if not file_path.is_file():
        message = f"Missing required file: {file_path}"
        if hint:
            message += f" ({hint})"
        raise FileNotFoundError(message)

    with file_path.open(encoding="utf-8") as file:
        return json.load(file)


def write_json_file(
    file_path: pathlib.Path, file_contents: Any, pretty_print: bool = False
) -> pathlib.Path:
    """
    Dump content to a file. The content lands in a temporary file next to
    the target first and is renamed over it, so a crash never leaves a
    half-written artifact behind.
    :param file_path: File to dump to
    :param file_contents: Contents to dump
    :param pretty_print: Pretty or minimal
    :return: Path written
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    file_descriptor, temp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.", suffix=".tmp", dir=str(file_path.parent)
    )
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as file:
            json.dump(
                obj=file_contents,
                fp=file,
                indent=(4 if pretty_print else None),
                ensure_ascii=False,
                default=lambda o: o.to_json(),
            )
        os.replace(temp_name, file_path)
    except BaseException:
        pathlib.Path(temp_name).unlink(missing_ok=True)
        raise

    LOGGER.debug(f"Wrote {file_path}")
    return file_path


def dedupe(values: Iterable[str]) -> List[str]:
    """
    Remove duplicates while keeping first-seen order
    """
    seen: Dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


def get_str_or_none(value: Any) -> Optional[str]:
    """
    Given a value, get its string representation
    or None object
    :param value: Input to stringify
    :return String or None
    """
    if value is None:
        return None

    return str(value)

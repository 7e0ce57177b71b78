"""
PTCGJSON output generator to write out contents to file & accessory methods
"""
import logging
import pathlib
from typing import Any, List, Optional, Sequence

from . import constants
from .classes import (
    PtcgCardChunkObject,
    PtcgCardObject,
    PtcgManifestObject,
    PtcgSearchIndexObject,
    PtcgSummaryObject,
)
from .ptcgjson_config import PtcgjsonConfig
from .utils import chunk_list, write_json_file

LOGGER = logging.getLogger(__name__)


def write_to_file(
    file_name: str,
    file_contents: Any,
    pretty_print: bool,
    data_path: Optional[pathlib.Path] = None,
) -> pathlib.Path:
    """
    Dump content to a file in the data directory
    :param file_name: File to dump to
    :param file_contents: Contents to dump
    :param pretty_print: Pretty or minimal
    :param data_path: Directory to write in (Default: configured data path)
    :return: File written
    """
    directory = data_path or PtcgjsonConfig().data_path
    return write_json_file(directory.joinpath(file_name), file_contents, pretty_print)


def remove_stale_chunks(data_path: pathlib.Path) -> int:
    """
    Delete chunk files left behind by an earlier run
    :param data_path: Data directory
    :return: How many files were removed
    """
    removed = 0
    for chunk_file in data_path.glob(f"{constants.CHUNK_FILE_PREFIX}*.json"):
        chunk_file.unlink()
        removed += 1

    if removed:
        LOGGER.debug(f"Removed {removed} chunk files from a previous run")
    return removed


def write_card_chunks(
    cards: Sequence[PtcgCardObject],
    chunk_size: int,
    last_updated: str,
    pretty_print: bool,
    data_path: pathlib.Path,
) -> List[str]:
    """
    Split cards into ordered chunk files
    :param cards: Cards, in output order
    :param chunk_size: Cards per chunk
    :param last_updated: Run timestamp
    :param pretty_print: Pretty or minimal
    :param data_path: Data directory
    :return: Names of the chunk files, in chunk order
    """
    remove_stale_chunks(data_path)

    pages = chunk_list(cards, chunk_size)
    chunk_names = []
    for index, page in enumerate(pages, start=1):
        file_name = PtcgCardChunkObject.file_name(index)
        write_to_file(
            file_name,
            PtcgCardChunkObject(page, index, len(pages), last_updated),
            pretty_print,
            data_path,
        )
        chunk_names.append(file_name)

    LOGGER.info(f"Wrote {len(chunk_names)} chunk(s) of up to {chunk_size} cards")
    return chunk_names


def generate_merge_outputs(
    cards: Sequence[PtcgCardObject],
    search_index: PtcgSearchIndexObject,
    pricing_entries: int,
    chunk_size: int,
    last_updated: str,
    pretty_print: bool,
    data_path: pathlib.Path,
) -> PtcgSummaryObject:
    """
    Write every artifact of a merge run: chunks, manifest, search index
    and summary
    :param cards: Merged cards
    :param search_index: Search facets
    :param pricing_entries: Size of the pricing mapping used
    :param chunk_size: Cards per chunk
    :param last_updated: Run timestamp
    :param pretty_print: Pretty or minimal
    :param data_path: Data directory
    :return: Run summary
    """
    chunk_names = write_card_chunks(
        cards, chunk_size, last_updated, pretty_print, data_path
    )

    write_to_file(
        constants.CARDS_INDEX_FILE,
        PtcgManifestObject(
            generated_at=last_updated,
            total_cards=search_index.total_cards,
            total_sets=search_index.total_sets,
            cards_with_pricing=search_index.cards_with_pricing,
            chunk_size=chunk_size,
            chunks=chunk_names,
        ),
        pretty_print,
        data_path,
    )
    write_to_file(constants.SEARCH_INDEX_FILE, search_index, pretty_print, data_path)

    summary = PtcgSummaryObject(
        total_cards=search_index.total_cards,
        total_sets=search_index.total_sets,
        cards_with_pricing=search_index.cards_with_pricing,
        pricing_entries=pricing_entries,
        last_updated=last_updated,
    )
    write_to_file(constants.SUMMARY_FILE, summary, pretty_print, data_path)
    return summary

"""
Unit tests for PokemonTcgDataProvider
"""

import pytest
import requests
import responses

from ptcgjson.providers import PokemonTcgDataProvider

SETS_URL = "https://raw.githubusercontent.com/PokemonTCG/pokemon-tcg-data/master/sets/en.json"
CARDS_URL = "https://raw.githubusercontent.com/PokemonTCG/pokemon-tcg-data/master/cards/en/{}.json"


@responses.activate
def test_build_raw_card_dataset_skips_failed_sets():
    responses.add(
        responses.GET,
        SETS_URL,
        json=[
            {"id": "base1", "name": "Base", "series": "Base", "releaseDate": "1999/01/09"},
            {"id": "base2", "name": "Jungle", "series": "Base", "releaseDate": "1999/06/16"},
            {"id": "base3", "name": "Fossil", "series": "Base", "releaseDate": "1999/10/10"},
        ],
    )
    responses.add(
        responses.GET,
        CARDS_URL.format("base1"),
        json=[{"id": "base1-1", "name": "Alakazam"}, {"id": "base1-2", "name": "Blastoise"}],
    )
    responses.add(responses.GET, CARDS_URL.format("base2"), status=404)
    responses.add(
        responses.GET,
        CARDS_URL.format("base3"),
        json={"data": [{"id": "base3-1", "name": "Aerodactyl"}]},
    )

    dataset = PokemonTcgDataProvider().build_raw_card_dataset()

    assert [card["id"] for card in dataset["cards"]] == ["base1-1", "base1-2", "base3-1"]
    assert dataset["totalSets"] == 3
    assert dataset["totalCards"] == 3
    assert dataset["failedSets"] == ["base2"]
    assert dataset["lastUpdated"].endswith("Z")


@responses.activate
def test_sets_listing_failure_is_fatal():
    responses.add(responses.GET, SETS_URL, status=500)

    with pytest.raises(requests.HTTPError):
        PokemonTcgDataProvider().build_raw_card_dataset()


@responses.activate
def test_unexpected_sets_payload():
    responses.add(responses.GET, SETS_URL, json={"message": "rate limited"})

    with pytest.raises(ValueError):
        PokemonTcgDataProvider().fetch_sets()


@responses.activate
def test_requests_carry_headers():
    responses.add(responses.GET, SETS_URL, json={"data": []})

    assert PokemonTcgDataProvider().fetch_sets() == []

    headers = responses.calls[0].request.headers
    assert headers["Accept"] == "application/json"
    assert headers["User-Agent"].startswith("ptcgjson/")


@responses.activate
def test_set_session_replaces_session():
    provider = PokemonTcgDataProvider()
    session = requests.Session()
    provider.set_session(session)
    responses.add(responses.GET, SETS_URL, json=[{"id": "base1"}])

    assert provider.fetch_sets() == [{"id": "base1"}]
    assert provider.session is session
    assert responses.calls[0].request.headers["User-Agent"].startswith("python-requests/")

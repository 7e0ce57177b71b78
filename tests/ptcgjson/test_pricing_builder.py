import pathlib

import pytest
import responses

from conftest import read_json, write_json
from ptcgjson.pricing_builder import PricingBuilder

TCGCSV_GROUPS_URL = "https://tcgcsv.com/tcgplayer/3/groups"
FEED_URL = "https://prices.example.com/pokemon.json"


def write_csv(path: pathlib.Path) -> pathlib.Path:
    path.write_text(
        '"groupId","extNumber","subTypeName","marketPrice","lowPrice","name","productId"\n'
        '"sv3pt5","4","Reverse Holofoil","3.50","1.00","Charmander, Reverse","111"\n'
        '"151","4","Normal","0.75","n/a","Charmander","112"\n'
        '"","","","","","",""\n'
        '"","9","Normal","1.00","","No Group","113"\n',
        encoding="utf-8",
    )
    return path


def test_read_csv_rows_handles_quotes(tmp_path):
    rows = PricingBuilder.read_csv_rows(write_csv(tmp_path.joinpath("pricing.csv")))

    assert len(rows) == 3
    assert rows[0]["name"] == "Charmander, Reverse"
    assert rows[0]["subTypeName"] == "Reverse Holofoil"


def test_read_csv_rows_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PricingBuilder.read_csv_rows(tmp_path.joinpath("missing.csv"))


def test_csv_pricing_dataset(tmp_path, data_path):
    builder = PricingBuilder(csv_path=write_csv(tmp_path.joinpath("pricing.csv")))
    dataset = builder.build_pricing_dataset()

    assert dataset["source"] == "csv:pricing.csv"
    assert sorted(dataset["pricing"]) == ["sv3pt5|4|normal|EN", "sv3pt5|4|reverse|EN"]
    assert dataset["pricing"]["sv3pt5|4|reverse|EN"].market == 3.5
    assert dataset["pricing"]["sv3pt5|4|normal|EN"].low == 0
    assert dataset["totalProducts"] == 2
    assert dataset["processedGroups"] == 1
    assert dataset["rowsProcessed"] == 3
    assert dataset["rowsSkipped"] == 1


@responses.activate
def test_feed_pricing_dataset_uses_set_names(ptcgjson_config, data_path, raw_cards_dataset):
    ptcgjson_config.pricing_url = FEED_URL
    raw_cards_dataset["sets"].append({"id": "sv6", "name": "Twilight Masquerade"})
    write_json(data_path.joinpath("raw-cards.json"), raw_cards_dataset)

    responses.add(
        responses.GET,
        FEED_URL,
        json={
            "data": [
                {
                    "groupId": "SV06: Twilight Masquerade",
                    "extNumber": "025/167",
                    "subTypeName": "Holofoil",
                    "marketPrice": 2.5,
                }
            ]
        },
        status=200,
    )

    dataset = PricingBuilder().build_pricing_dataset()

    assert dataset["source"] == FEED_URL
    assert list(dataset["pricing"]) == ["sv6|025|holo|EN"]


@responses.activate
def test_unreachable_pricing_source_writes_error_dataset(data_path):
    responses.add(responses.GET, TCGCSV_GROUPS_URL, status=503)

    written = PricingBuilder().write_pricing_dataset()
    dataset = read_json(written)

    assert written == data_path.joinpath("pricing-raw.json")
    assert dataset["pricing"] == {}
    assert dataset["source"] == "error"
    assert "503" in dataset["error"]


@responses.activate
def test_tcgcsv_pricing_dataset(ptcgjson_config, data_path):
    ptcgjson_config.max_pricing_groups = 1
    responses.add(
        responses.GET,
        TCGCSV_GROUPS_URL,
        json={
            "success": True,
            "results": [
                {"groupId": 1373, "name": "Team Rocket", "abbreviation": "TR"},
                {"groupId": 604, "name": "Base Set", "abbreviation": "BS"},
            ],
        },
    )
    responses.add(
        responses.GET,
        "https://tcgcsv.com/tcgplayer/3/1373/products",
        json={
            "success": True,
            "results": [
                {
                    "productId": 500,
                    "name": "Dark Charizard",
                    "extendedData": [
                        {"name": "Number", "value": "4/82"},
                        {"name": "Rarity", "value": "Holo Rare"},
                    ],
                }
            ],
        },
    )
    responses.add(
        responses.GET,
        "https://tcgcsv.com/tcgplayer/3/1373/prices",
        json={
            "success": True,
            "results": [
                {"productId": 500, "subTypeName": "Holofoil", "marketPrice": 99.99},
                {"productId": 500, "subTypeName": "1st Edition Holofoil", "marketPrice": 450},
            ],
        },
    )

    PricingBuilder().write_pricing_dataset(pretty_print=True)
    dataset = read_json(data_path.joinpath("pricing-raw.json"))

    assert dataset["source"] == "tcgcsv.com API"
    assert dataset["processedGroups"] == 1
    assert dataset["failedGroups"] == 0
    assert dataset["totalProducts"] == 1
    assert dataset["duplicateKeys"] == 1
    assert list(dataset["pricing"]) == ["base5|4|holo|EN"]
    assert dataset["pricing"]["base5|4|holo|EN"]["market"] == 450
    assert dataset["pricing"]["base5|4|holo|EN"]["productId"] == "500"

import logging

from conftest import write_json
from ptcgjson.pricing_health import check_pricing_health, diagnose_pricing


def write_pricing_entries(data_path, count, **extra):
    pricing = {f"xy1|{number}|normal|EN": {"market": 1.0} for number in range(1, count + 1)}
    write_json(data_path.joinpath("pricing-raw.json"), {"pricing": pricing, **extra})
    return pricing


def test_missing_pricing_file(data_path):
    assert check_pricing_health(data_path) == 2


def test_enough_entries(data_path):
    write_pricing_entries(data_path, 3)
    assert check_pricing_health(data_path, min_entries=3, strict=True) == 0


def test_low_entries_strict(data_path):
    write_pricing_entries(data_path, 2)
    assert check_pricing_health(data_path, min_entries=3, strict=True) == 1


def test_low_entries_lenient_warns(data_path, caplog):
    write_pricing_entries(data_path, 2)

    with caplog.at_level(logging.WARNING):
        assert check_pricing_health(data_path, min_entries=3, strict=False) == 0

    assert "Low pricing entry count" in caplog.text


def test_strict_and_threshold_from_environment(monkeypatch, data_path):
    from ptcgjson.ptcgjson_config import PtcgjsonConfig

    monkeypatch.setenv("PRICING_STRICT", "true")
    monkeypatch.setenv("MIN_PRICING_ENTRIES", "5")
    PtcgjsonConfig._instance = None
    write_pricing_entries(data_path, 4)

    assert check_pricing_health() == 1


def test_error_dataset_is_reported(data_path, caplog):
    write_json(
        data_path.joinpath("pricing-raw.json"),
        {"pricing": {}, "source": "error", "error": "boom"},
    )

    with caplog.at_level(logging.ERROR):
        assert check_pricing_health(data_path, min_entries=1, strict=True) == 1

    assert "boom" in caplog.text


def test_diagnose_reports_unmatched_groups(data_path, raw_cards_dataset):
    write_json(data_path.joinpath("raw-cards.json"), raw_cards_dataset)
    pricing = {
        "base5|4|holo|EN": {},
        "xy1|1|normal|EN": {},
        "sv06|12|normal|EN": {},
    }

    diagnosis = diagnose_pricing(pricing, data_path, sample_size=2)

    assert diagnosis["pricingGroups"] == ["base5", "sv06", "xy1"]
    assert diagnosis["unmatchedGroups"] == ["sv06"]
    assert diagnosis["samplePricingKeys"] == ["base5|4|holo|EN", "sv06|12|normal|EN"]
    assert diagnosis["sampleCardKeys"] == ["base5|36|normal|EN", "xy1|1|normal|EN"]


def test_diagnose_without_cards(data_path):
    diagnosis = diagnose_pricing({"xy1|1|normal|EN": {}}, data_path)

    assert diagnosis["pricingGroups"] == ["xy1"]
    assert diagnosis["unmatchedGroups"] == []


def test_diagnose_tolerates_non_dict_set(data_path):
    write_json(
        data_path.joinpath("raw-cards.json"),
        {"sets": [], "cards": [{"id": "xy1-1", "number": "1", "set": "xy1"}]},
    )

    diagnosis = diagnose_pricing({"xy1|1|normal|EN": {}}, data_path)

    assert diagnosis["sampleCardKeys"] == ["xy1|1|normal|EN"]

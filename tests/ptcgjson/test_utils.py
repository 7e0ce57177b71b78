import json
import math

import pytest

from ptcgjson.classes import PtcgSetObject
from ptcgjson.utils import (
    chunk_list,
    get_first_present,
    load_json_file,
    parse_price,
    to_camel_case,
    unwrap_list,
    write_json_file,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12.50", 12.5),
        ("$1,234.56", 1234.56),
        (3, 3.0),
        (0.5, 0.5),
        ("", 0.0),
        ("n/a", 0.0),
        (None, 0.0),
        (True, 0.0),
        ({"price": 1}, 0.0),
        (math.nan, 0.0),
        ("inf", 0.0),
    ],
)
def test_parse_price_never_raises(value, expected):
    assert parse_price(value) == expected


def test_to_camel_case():
    assert to_camel_case("direct_low") == "directLow"
    assert to_camel_case("total_chunks") == "totalChunks"
    assert to_camel_case("set") == "set"


def test_get_first_present_skips_blank_values():
    row = {"groupId": " ", "setId": "", "group_id": "base5"}
    assert get_first_present(row, ("groupId", "setId", "group_id")) == "base5"
    assert get_first_present(row, ("set_code",)) is None


def test_unwrap_list():
    assert unwrap_list([1, 2], "data") == [1, 2]
    assert unwrap_list({"results": [3]}, "data", "results") == [3]
    assert unwrap_list({"data": "nope"}, "data") == []
    assert unwrap_list(None, "data") == []


def test_chunk_list():
    assert chunk_list([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunk_list([], 3) == []
    with pytest.raises(ValueError):
        chunk_list([1], 0)


def test_write_json_file_is_atomic_and_serializes_objects(tmp_path):
    target = tmp_path.joinpath("nested", "out.json")

    write_json_file(target, {"set": PtcgSetObject("base1", "Base")}, pretty_print=True)

    assert json.loads(target.read_text(encoding="utf-8")) == {
        "set": {"id": "base1", "name": "Base", "series": "", "releaseDate": ""}
    }
    assert target.read_text(encoding="utf-8").startswith("{\n    ")
    assert [path.name for path in target.parent.iterdir()] == ["out.json"]


def test_write_json_file_failure_keeps_previous_contents(tmp_path):
    target = tmp_path.joinpath("out.json")
    write_json_file(target, {"ok": True})

    with pytest.raises(AttributeError):
        write_json_file(target, {"bad": object()})

    assert json.loads(target.read_text(encoding="utf-8")) == {"ok": True}
    assert [path.name for path in tmp_path.iterdir()] == ["out.json"]


def test_write_json_file_keeps_unicode(tmp_path):
    target = write_json_file(tmp_path.joinpath("out.json"), {"supertype": "Pokémon"})
    assert "Pokémon" in target.read_text(encoding="utf-8")


def test_load_json_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="run it first"):
        load_json_file(tmp_path.joinpath("missing.json"), hint="run it first")

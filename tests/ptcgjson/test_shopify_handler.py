import json

import pytest
import responses

from conftest import write_json
from ptcgjson.shopify_handler import ShopifyAssetHandler

ASSETS_URL = "https://test-store.myshopify.com/admin/api/2023-10/themes/main/assets.json"


@pytest.fixture
def shopify_credentials(ptcgjson_config):
    ptcgjson_config.shopify_store = "test-store"
    ptcgjson_config.shopify_access_token = "shpat_test"


@pytest.fixture
def output_files(data_path):
    for file_name in (
        "tcg-cards-chunk-1.json",
        "tcg-cards-index.json",
        "tcg-summary.json",
        "raw-cards.json",
        "pricing-raw.json",
    ):
        write_json(data_path.joinpath(file_name), {"file": file_name})
    data_path.joinpath("notes.txt").write_text("skip me", encoding="utf-8")
    return data_path


def test_files_to_upload_skip_raw_datasets(output_files):
    assert [path.name for path in ShopifyAssetHandler.get_files_to_upload(output_files)] == [
        "tcg-cards-chunk-1.json",
        "tcg-cards-index.json",
        "tcg-summary.json",
    ]


def test_missing_credentials_skips_upload(output_files):
    with responses.RequestsMock() as rsps:
        assert ShopifyAssetHandler().upload_directory(output_files) == (0, 0)
        assert len(rsps.calls) == 0


@responses.activate
def test_upload_file_request(shopify_credentials, output_files):
    responses.add(responses.PUT, ASSETS_URL, json={"asset": {}}, status=200)

    assert ShopifyAssetHandler().upload_file(output_files.joinpath("tcg-summary.json"))

    request = responses.calls[0].request
    assert request.headers["X-Shopify-Access-Token"] == "shpat_test"
    assert json.loads(request.body) == {
        "asset": {
            "key": "assets/tcg-tcg-summary.json",
            "value": json.dumps({"file": "tcg-summary.json"}),
        }
    }


@responses.activate
def test_failed_upload_does_not_stop_the_run(shopify_credentials, output_files):
    responses.add(responses.PUT, ASSETS_URL, json={"errors": "Not Found"}, status=404)
    responses.add(responses.PUT, ASSETS_URL, json={"asset": {}}, status=200)
    responses.add(responses.PUT, ASSETS_URL, json={"asset": {}}, status=200)

    assert ShopifyAssetHandler().upload_directory(output_files) == (2, 1)
    assert len(responses.calls) == 3


@responses.activate
def test_unreadable_file_counts_as_failed(shopify_credentials, data_path):
    data_path.joinpath("a-bad.json").write_bytes(b"\xff\xfe\x00not utf-8")
    write_json(data_path.joinpath("b-good.json"), {"ok": True})
    responses.add(responses.PUT, ASSETS_URL, json={"asset": {}}, status=200)

    assert ShopifyAssetHandler().upload_directory(data_path) == (1, 1)
    assert len(responses.calls) == 1
    assert json.loads(responses.calls[0].request.body)["asset"]["key"] == "assets/tcg-b-good.json"

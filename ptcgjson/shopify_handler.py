"""
Shopify Uploader to publish PTCGJSON files as theme assets
"""

import logging
import pathlib
import time
from typing import List, Optional, Tuple

import requests

from . import constants
from .http_session import build_session
from .ptcgjson_config import PtcgjsonConfig


class ShopifyAssetHandler:
    """
    Upload PTCGJSON output data to a Shopify theme
    """

    logger: logging.Logger
    session: requests.Session
    store: Optional[str]
    access_token: Optional[str]
    theme_id: str
    api_version: str
    upload_delay_sec: float

    def __init__(self) -> None:
        config = PtcgjsonConfig()
        self.logger = logging.getLogger(__name__)
        self.session = build_session()
        self.store = config.shopify_store
        self.access_token = config.shopify_access_token
        self.theme_id = config.shopify_theme_id
        self.api_version = config.shopify_api_version
        self.upload_delay_sec = config.upload_delay_sec

    @property
    def assets_url(self) -> str:
        """
        Theme asset endpoint of the configured store
        """
        return (
            f"https://{self.store}.myshopify.com/admin/api/"
            f"{self.api_version}/themes/{self.theme_id}/assets.json"
        )

    @staticmethod
    def asset_key(file_name: str) -> str:
        """
        Theme asset key a data file is published under
        :param file_name: Local file name
        :return: Asset key
        """
        return f"assets/tcg-{file_name}"

    def upload_file(self, local_file_path: pathlib.Path) -> bool:
        """
        Upload a file as a theme asset
        :param local_file_path: Path on local system to upload
        :returns True if upload succeeded
        """
        try:
            response = self.session.put(
                self.assets_url,
                headers={
                    "X-Shopify-Access-Token": str(self.access_token),
                    "Content-Type": "application/json",
                },
                json={
                    "asset": {
                        "key": self.asset_key(local_file_path.name),
                        "value": local_file_path.read_text(encoding="utf-8"),
                    }
                },
            )
        except (requests.RequestException, OSError, UnicodeDecodeError) as error:
            self.logger.error(f"Error uploading {local_file_path.name}: {error}")
            return False

        if not response.ok:
            self.logger.error(
                f"Failed to upload {local_file_path.name}: "
                f"{response.status_code} {response.reason} - {response.text}"
            )
            return False

        self.logger.info(
            f"Successfully uploaded {local_file_path.name} to {self.store} "
            f"as {self.asset_key(local_file_path.name)}"
        )
        return True

    @staticmethod
    def get_files_to_upload(directory_path: pathlib.Path) -> List[pathlib.Path]:
        """
        Finished JSON artifacts of a directory, raw datasets excluded
        :param directory_path: Data directory
        :return: Files in upload order
        """
        return sorted(
            item
            for item in directory_path.glob("*.json")
            if item.is_file() and item.name not in constants.RAW_FILE_NAMES
        )

    def upload_directory(self, directory_path: pathlib.Path) -> Tuple[int, int]:
        """
        Upload every finished data file. A failed file is counted and the
        remaining files are still attempted.
        :param directory_path: Path on local system to upload
        :return: (succeeded, failed)
        """
        if not (self.store and self.access_token):
            self.logger.warning(
                "Missing Shopify credentials (set SHOPIFY_STORE and "
                "SHOPIFY_ACCESS_TOKEN), skipping upload"
            )
            return 0, 0

        files = self.get_files_to_upload(directory_path)
        self.logger.info(f"Uploading {len(files)} files from {directory_path} to {self.store}")

        succeeded = 0
        failed = 0
        for index, item in enumerate(files):
            if self.upload_file(item):
                succeeded += 1
            else:
                failed += 1

            if self.upload_delay_sec > 0 and index + 1 < len(files):
                time.sleep(self.upload_delay_sec)

        self.logger.info(f"Upload summary: {succeeded} successful, {failed} failed")
        return succeeded, failed

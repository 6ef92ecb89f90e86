from __future__ import annotations

import asyncio
import json
import logging

import requests

from ...settings import NetworthSettings
from .base import BalanceData, BaseBalanceAdapter

logger = logging.getLogger(__name__)


class BlockbookAdapter(BaseBalanceAdapter):
    """Adapter for NOWNodes-hosted Blockbook address endpoints.

    Each supported asset has its own Blockbook instance ("book"); the request
    URL is ``book + balance_path + address + balance_suffix``.
    """

    def __init__(self, config: NetworthSettings):
        super().__init__(config)
        self.books = config.provider_books
        self.headers = config.balance_headers
        self.timeout = config.http_timeout

    @property
    def adapter_name(self) -> str:
        return "blockbook"

    def supports(self, asset: str) -> bool:
        return asset in self.books

    def balance_url(self, asset: str, address: str) -> str:
        return (
            f"{self.books[asset]}{self.config.balance_path}"
            f"{address}{self.config.balance_suffix}"
        )

    async def fetch_balance(self, asset: str, address: str) -> BalanceData:
        """Fetch the raw integer balance for ``address``.

        Raises:
            KeyError: If ``asset`` has no book.
            ValueError: If the response is invalid or has no ``balance`` field.
            requests.exceptions.RequestException: If the request fails.
        """
        url = self.balance_url(asset, address)
        logger.debug("Calling %s", url)
        response = await asyncio.to_thread(
            requests.get, url, headers=self.headers, timeout=self.timeout
        )
        response.raise_for_status()

        try:
            data = response.json()
        except json.JSONDecodeError:
            raise ValueError(f"Invalid JSON from {self.adapter_name} for {asset}")

        if not isinstance(data, dict) or "balance" not in data:
            raise ValueError(f"Invalid response structure: {data}")

        return BalanceData(asset=asset, address=address, raw_balance=str(data["balance"]))

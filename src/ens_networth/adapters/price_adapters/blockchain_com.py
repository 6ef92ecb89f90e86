from __future__ import annotations

import asyncio
import json
import logging

import requests

from ...constants import PRICE_QUOTE_CURRENCY
from ...errors import AssetError
from ...settings import NetworthSettings
from ...units import parse_decimal
from .base import BasePriceAdapter, PriceQuote

logger = logging.getLogger(__name__)


class BlockchainComAdapter(BasePriceAdapter):
    """Adapter for the Blockchain.com exchange ticker endpoint."""

    def __init__(self, config: NetworthSettings):
        super().__init__(config)
        self.url_prefix = config.price_url_prefix
        self.bad_pair_status = config.price_bad_pair_status
        self.timeout = config.http_timeout

    @property
    def adapter_name(self) -> str:
        return "blockchain_com"

    def ticker_url(self, asset: str) -> str:
        return f"{self.url_prefix}{asset.upper()}-{PRICE_QUOTE_CURRENCY}"

    async def fetch_price(self, asset: str) -> PriceQuote:
        """Fetch the last trade price of ``asset`` against USD.

        Raises:
            AssetError: If the exchange has no market for the pair.
            ValueError: If the response is invalid or lacks ``last_trade_price``.
            requests.exceptions.RequestException: If the request fails.
        """
        url = self.ticker_url(asset)
        logger.debug("Calling %s", url)
        response = await asyncio.to_thread(requests.get, url, timeout=self.timeout)

        if response.status_code == self.bad_pair_status:
            raise AssetError(
                asset,
                f"No {asset.upper()}-{PRICE_QUOTE_CURRENCY} market on {self.adapter_name}",
            )
        response.raise_for_status()

        try:
            data = response.json()
        except json.JSONDecodeError:
            raise ValueError(f"Invalid JSON from {self.adapter_name} for {asset}")

        if not isinstance(data, dict) or "last_trade_price" not in data:
            raise ValueError(f"Invalid response structure: {data}")

        quote = PriceQuote(
            asset=asset,
            quote=PRICE_QUOTE_CURRENCY,
            price=parse_decimal(data["last_trade_price"]),
        )
        self.validate_price(quote)
        return quote

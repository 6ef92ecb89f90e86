from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import requests

from ...constants import COIN_TYPES_QUERY

logger = logging.getLogger(__name__)


class SubgraphAdapter:
    """Adapter for the ENS subgraph, which indexes each resolver's coin types."""

    def __init__(self, subgraph_url: str, timeout: float):
        self.subgraph_url = subgraph_url
        self.timeout = timeout

    @property
    def adapter_name(self) -> str:
        return "ens_subgraph"

    async def _post(self, payload: dict[str, Any]) -> requests.Response:
        return await asyncio.to_thread(
            requests.post, self.subgraph_url, json=payload, timeout=self.timeout
        )

    async def fetch_coin_types(self, name: str) -> list[str]:
        """Return the raw coin-type codes published by ``name``'s resolver.

        Raises:
            ValueError: If the response is not JSON or lacks ``data.domains``.
            requests.exceptions.RequestException: If the request fails.
        """
        payload = {"query": COIN_TYPES_QUERY, "variables": {"name": name}}
        logger.debug("Querying %s for coin types of %s", self.subgraph_url, name)
        response = await self._post(payload)
        response.raise_for_status()

        try:
            body = response.json()
        except json.JSONDecodeError:
            raise ValueError("Invalid JSON from ENS subgraph")

        if not isinstance(body, dict):
            raise ValueError(f"Invalid response structure: {body}")
        if body.get("errors"):
            raise ValueError(f"ENS subgraph returned errors: {body['errors']}")

        data = body.get("data")
        if not isinstance(data, dict) or not isinstance(data.get("domains"), list):
            raise ValueError(f"Invalid response structure: {body}")

        domains = data["domains"]
        if not domains:
            logger.info("Name %s is not indexed", name)
            return []

        resolver = domains[0].get("resolver")
        if not resolver:
            return []

        coin_types = resolver.get("coinTypes") or []
        if not isinstance(coin_types, list):
            raise ValueError(f"Invalid coinTypes value: {coin_types!r}")
        return [str(code) for code in coin_types]

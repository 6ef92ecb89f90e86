from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from web3 import Web3

from ...address_codec import EVM_COIN_TYPES, format_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolverHandle:
    """A name's resolver contract, scoped to that name's node.

    ``resolver`` is ``None`` when the name has no resolver set; every lookup
    through such a handle finds no record.
    """

    name: str
    node: bytes
    resolver: Any | None

    async def get_address(self, coin_type: int) -> str | None:
        """Fetch the address record for ``coin_type``, or None if it is empty."""
        if self.resolver is None:
            return None

        raw = await asyncio.to_thread(self.resolver.caller.addr, self.node, coin_type)
        raw = bytes(raw or b"")
        if not raw:
            return None
        if coin_type in EVM_COIN_TYPES and not any(raw):
            return None
        return format_address(coin_type, raw)


class EnsAdapter:
    """Adapter over web3's ENS module for resolver discovery."""

    def __init__(self, w3: Web3):
        self.w3 = w3

    @property
    def adapter_name(self) -> str:
        return "ens"

    async def get_resolver(self, name: str) -> ResolverHandle:
        ns = self.w3.ens
        resolver = await asyncio.to_thread(ns.resolver, name)
        if resolver is None:
            logger.warning("No resolver set for %s", name)
        node = bytes(ns.namehash(name))
        return ResolverHandle(name=name, node=node, resolver=resolver)

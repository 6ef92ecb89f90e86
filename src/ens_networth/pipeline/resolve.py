"""Name resolution and address materialization."""

from __future__ import annotations

import asyncio
import logging

from ..adapters.naming import EnsAdapter, ResolverHandle, SubgraphAdapter
from ..constants import ASSETS_BY_SYMBOL, SUPPORTED_ASSETS, SupportedAsset
from ..errors import ArgumentError, AssetError, funnel_errors
from ..state import AppState

logger = logging.getLogger(__name__)


def _require_name(name: str | None) -> str:
    if not name or not name.strip():
        raise ArgumentError("A name is required")
    return name.strip()


def _supported_asset(code: object) -> SupportedAsset | None:
    try:
        return SUPPORTED_ASSETS.get(int(str(code)))
    except ValueError:
        return None


@funnel_errors
async def init_resolver(state: AppState, name: str) -> ResolverHandle:
    """Establish the resolver handle for ``name``.

    Must be called once per name before any address lookup.
    """
    name = _require_name(name)
    state.logger.info("Establishing resolver for %s", name)
    return await EnsAdapter(state.w3_required).get_resolver(name)


@funnel_errors
async def get_coin_types(state: AppState, name: str) -> list[str]:
    """Return the coin-type codes ``name`` has published address records for.

    An unindexed name, or one without a resolver or records, yields ``[]``.
    """
    name = _require_name(name)
    s = state.settings
    adapter = SubgraphAdapter(s.ens_subgraph_url, s.http_timeout)
    coin_types = await adapter.fetch_coin_types(name)
    state.logger.info("Found %d coin type(s) for %s", len(coin_types), name)
    return coin_types


@funnel_errors
async def resolve_addrs(
    coin_types: list[str] | list[int], handle: ResolverHandle
) -> dict[str, str]:
    """Fetch one address per supported coin type.

    Unsupported codes are logged and skipped. Each supported symbol is fetched
    once even if its code is listed repeatedly; empty records are omitted.
    """
    if handle is None:
        raise ArgumentError("A resolver handle is required")

    wanted: dict[str, SupportedAsset] = {}
    for code in coin_types or []:
        asset = _supported_asset(code)
        if asset is None:
            logger.info('Coin type "%s" is not yet supported.', code)
            continue
        wanted.setdefault(asset.symbol, asset)

    if not wanted:
        return {}

    logger.info("Resolving %d address(es) for %s...", len(wanted), handle.name)
    results = await asyncio.gather(
        *(handle.get_address(asset.coin_type) for asset in wanted.values())
    )

    addresses: dict[str, str] = {}
    for symbol, address in zip(wanted, results):
        if not address:
            logger.info("%s has an empty %s record, skipping", handle.name, symbol)
            continue
        logger.debug("%s address: %s", symbol, address)
        addresses[symbol] = address
    return addresses


@funnel_errors
async def resolve_single_addr(asset: str, handle: ResolverHandle) -> dict[str, str]:
    """Fetch the address record for a single supported asset symbol."""
    if not asset:
        raise ArgumentError("An asset is required")
    if handle is None:
        raise ArgumentError("A resolver handle is required")

    supported = ASSETS_BY_SYMBOL.get(asset.lower())
    if supported is None:
        raise AssetError(asset)

    address = await handle.get_address(supported.coin_type)
    if not address:
        raise AssetError(asset, f"{handle.name} has no {supported.symbol} record")
    return {"address": address}

"""Balance aggregation and fiat valuation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from decimal import Decimal

from ..adapters.balance_adapters import BalanceData, BlockbookAdapter
from ..adapters.price_adapters import BlockchainComAdapter
from ..constants import SCALE
from ..errors import ArgumentError, AssetError, funnel_errors
from ..settings import NetworthSettings
from ..state import AppState
from ..units import format_decimal, parse_decimal, scale_down

logger = logging.getLogger(__name__)


def _normalize(data: BalanceData) -> str:
    return format_decimal(scale_down(data.raw_balance, SCALE[data.asset]))


def _require_pair(asset: str, balance: object) -> None:
    if not asset or balance is None or balance == "":
        raise ArgumentError("Both an asset and a balance are required")


def _parse_balance(balance: object) -> Decimal:
    try:
        return parse_decimal(balance)
    except ValueError as e:
        raise ArgumentError(f"Balance must be numeric, got {balance!r}") from e


async def _fiat_value(
    settings: NetworthSettings, asset: str, balance: object
) -> Decimal:
    amount = _parse_balance(balance)
    quote = await BlockchainComAdapter(settings).fetch_price(asset)
    value = amount * quote.price
    logger.debug(
        "%s %s x %s %s = %s", balance, asset, quote.price, quote.quote, value
    )
    return value


@funnel_errors
async def get_amounts(
    state: AppState, addresses: Mapping[str, str] | None
) -> dict[str, str]:
    """Return the normalized balance held at each address.

    Assets without a provider book are skipped silently, as are assets missing
    from ``coin_names``. A result with no balances at all is an AssetError.

    Raises:
        ArgumentError: If ``addresses`` is missing or empty.
        AssetError: If no asset could be resolved to a balance.
        UpstreamError: If any balance request fails; no partial result is kept.
    """
    if not addresses:
        raise ArgumentError("An address mapping is required")

    s = state.settings
    adapter = BlockbookAdapter(s)
    state.logger.info("Getting amounts owned for all addresses...")

    pending: list[tuple[str, str]] = []
    for asset, address in addresses.items():
        if not adapter.supports(asset):
            logger.debug("No balance book for %s, skipping", asset)
            continue
        pending.append((asset, address))

    results = await asyncio.gather(
        *(adapter.fetch_balance(asset, address) for asset, address in pending)
    )

    amounts: dict[str, str] = {}
    for data in results:
        if data.asset not in s.coin_names:
            logger.info("get_amounts: Asset %s is not supported", data.asset)
            continue
        amounts[data.asset] = _normalize(data)
        logger.info("%s balance: %s", data.asset, amounts[data.asset])

    if not amounts:
        raise AssetError(None, "None of the given assets has a retrievable balance")

    state.logger.info("Finished getting amounts owned")
    return amounts


@funnel_errors
async def get_single_amount(
    state: AppState, asset: str, address: str
) -> dict[str, str]:
    """Return the normalized balance of one asset held at ``address``."""
    if not asset or not address:
        raise ArgumentError("Both an asset and an address are required")

    s = state.settings
    adapter = BlockbookAdapter(s)
    if not adapter.supports(asset) or asset not in s.coin_names:
        raise AssetError(asset)

    state.logger.info("Getting amount of %s owned by address %s", asset, address)
    data = await adapter.fetch_balance(asset, address)
    amount = _normalize(data)
    state.logger.info("Found amount owned: %s", amount)
    return {"balance": amount}


@funnel_errors
async def to_fiat(state: AppState, asset: str, balance: str) -> dict[str, str]:
    """Convert ``balance`` units of ``asset`` to USD at the last trade price."""
    _require_pair(asset, balance)

    state.logger.info("Converting %s %s to usd...", balance, asset)
    value = await _fiat_value(state.settings, asset, balance)
    state.logger.info("Converted to %s usd", format_decimal(value))
    return {"usd": format_decimal(value)}


@funnel_errors
async def net_worth(
    state: AppState, balances: Mapping[str, str] | None
) -> dict[str, str]:
    """Sum the USD value of every balance.

    Any failed conversion aborts the whole computation.
    """
    if not balances:
        raise ArgumentError("A balance mapping is required")
    for asset, balance in balances.items():
        _require_pair(asset, balance)

    state.logger.info("Calculating net worth from passed amounts...")
    values = await asyncio.gather(
        *(
            _fiat_value(state.settings, asset, balance)
            for asset, balance in balances.items()
        )
    )
    net = sum(values, Decimal(0))

    state.logger.info("Net worth is %s usd", format_decimal(net))
    return {"net": format_decimal(net)}

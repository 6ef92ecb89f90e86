from __future__ import annotations

import logging
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from ens_networth.adapters.balance_adapters import BalanceData, BlockbookAdapter
from ens_networth.adapters.price_adapters import BlockchainComAdapter, PriceQuote
from ens_networth.errors import ArgumentError, AssetError, UpstreamError
from ens_networth.pipeline.worth import (
    get_amounts,
    get_single_amount,
    net_worth,
    to_fiat,
)
from ens_networth.settings import NetworthSettings
from ens_networth.state import AppState

BTC_ADDRESS = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"
ETH_ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def _state(**overrides) -> AppState:
    settings = NetworthSettings(
        eth_rpc="https://rpc.example", nownodes_api_key="test-key", **overrides
    )
    return AppState(settings=settings, logger=logging.getLogger("test"), w3=MagicMock())


@pytest.fixture
def state():
    return _state()


@pytest.fixture
def balance_calls(monkeypatch):
    """Serve raw balances from a dict and record every balance request."""
    raw = {"btc": "150000000", "eth": "2000000000000000000", "ltc": "0"}
    calls: list[tuple[str, str]] = []

    async def _fake_fetch_balance(self, asset: str, address: str) -> BalanceData:
        calls.append((asset, address))
        return BalanceData(asset=asset, address=address, raw_balance=raw[asset])

    monkeypatch.setattr(BlockbookAdapter, "fetch_balance", _fake_fetch_balance)
    return calls


@pytest.fixture
def prices(monkeypatch):
    """Quote prices from a dict; assets missing from it have no market."""
    table = {"btc": "20000", "eth": "3000"}

    async def _fake_fetch_price(self, asset: str) -> PriceQuote:
        if asset not in table:
            raise AssetError(asset)
        return PriceQuote(asset=asset, quote="USD", price=Decimal(table[asset]))

    monkeypatch.setattr(BlockchainComAdapter, "fetch_price", _fake_fetch_price)
    return table


class TestGetAmounts:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("addresses", [None, {}])
    async def test_missing_mapping_is_argument_error(self, state, addresses):
        with pytest.raises(ArgumentError):
            await get_amounts(state, addresses)

    @pytest.mark.asyncio
    async def test_normalizes_each_balance(self, state, balance_calls):
        amounts = await get_amounts(state, {"btc": BTC_ADDRESS, "eth": ETH_ADDRESS})

        assert amounts == {"btc": "1.5", "eth": "2"}
        assert balance_calls == [("btc", BTC_ADDRESS), ("eth", ETH_ADDRESS)]

    @pytest.mark.asyncio
    async def test_asset_outside_book_is_skipped(self, balance_calls):
        state = _state(provider_books={"btc": "https://btcbook.example"})

        amounts = await get_amounts(state, {"btc": BTC_ADDRESS, "eth": ETH_ADDRESS})

        assert amounts == {"btc": "1.5"}
        assert balance_calls == [("btc", BTC_ADDRESS)]

    @pytest.mark.asyncio
    async def test_all_assets_outside_book_is_asset_error(self, balance_calls):
        state = _state(provider_books={"btc": "https://btcbook.example"})

        with pytest.raises(AssetError):
            await get_amounts(state, {"eth": ETH_ADDRESS, "sol": "So1ana"})
        assert balance_calls == []

    @pytest.mark.asyncio
    async def test_asset_outside_coin_names_is_skipped(self, balance_calls):
        state = _state(coin_names=["eth"])

        amounts = await get_amounts(state, {"btc": BTC_ADDRESS, "eth": ETH_ADDRESS})

        assert amounts == {"eth": "2"}

    @pytest.mark.asyncio
    async def test_all_skipped_by_coin_names_is_asset_error(self, balance_calls):
        state = _state(coin_names=["ltc"])

        with pytest.raises(AssetError):
            await get_amounts(state, {"btc": BTC_ADDRESS})

    @pytest.mark.asyncio
    async def test_transport_failure_aborts_whole_call(self, state, monkeypatch):
        async def _fake_fetch_balance(self, asset: str, address: str) -> BalanceData:
            if asset == "eth":
                raise requests.exceptions.ConnectionError("refused")
            return BalanceData(asset=asset, address=address, raw_balance="100")

        monkeypatch.setattr(BlockbookAdapter, "fetch_balance", _fake_fetch_balance)

        with pytest.raises(UpstreamError):
            await get_amounts(state, {"btc": BTC_ADDRESS, "eth": ETH_ADDRESS})

    @pytest.mark.asyncio
    async def test_unparseable_balance_is_upstream_error(self, state, monkeypatch):
        async def _fake_fetch_balance(self, asset: str, address: str) -> BalanceData:
            return BalanceData(asset=asset, address=address, raw_balance="n/a")

        monkeypatch.setattr(BlockbookAdapter, "fetch_balance", _fake_fetch_balance)

        with pytest.raises(UpstreamError):
            await get_amounts(state, {"btc": BTC_ADDRESS})


class TestGetSingleAmount:
    @pytest.mark.asyncio
    async def test_returns_normalized_balance(self, state, balance_calls):
        assert await get_single_amount(state, "btc", BTC_ADDRESS) == {"balance": "1.5"}

    @pytest.mark.asyncio
    async def test_unsupported_asset_fails_without_request(self, balance_calls):
        state = _state(provider_books={"btc": "https://btcbook.example"})

        with pytest.raises(AssetError):
            await get_single_amount(state, "eth", ETH_ADDRESS)
        assert balance_calls == []

    @pytest.mark.asyncio
    async def test_missing_address_is_argument_error(self, state):
        with pytest.raises(ArgumentError):
            await get_single_amount(state, "btc", "")


class TestToFiat:
    @pytest.mark.asyncio
    async def test_multiplies_by_last_trade_price(self, state, prices):
        assert await to_fiat(state, "eth", "2") == {"usd": "6000"}

    @pytest.mark.asyncio
    async def test_fractional_balance(self, state, prices):
        assert await to_fiat(state, "btc", "1.5") == {"usd": "30000"}

    @pytest.mark.asyncio
    async def test_unquotable_pair_is_asset_error(self, state, prices):
        with pytest.raises(AssetError):
            await to_fiat(state, "doge", "10")

    @pytest.mark.asyncio
    async def test_non_numeric_balance_is_argument_error(self, state, prices):
        with pytest.raises(ArgumentError):
            await to_fiat(state, "eth", "lots")

    @pytest.mark.asyncio
    async def test_transport_failure_is_upstream_error(self, state, monkeypatch):
        async def _fake_fetch_price(self, asset: str) -> PriceQuote:
            raise requests.exceptions.Timeout("timed out")

        monkeypatch.setattr(BlockchainComAdapter, "fetch_price", _fake_fetch_price)

        with pytest.raises(UpstreamError):
            await to_fiat(state, "eth", "2")


class TestNetWorth:
    @pytest.mark.asyncio
    async def test_sums_converted_balances(self, state, prices):
        assert await net_worth(state, {"btc": "1", "eth": "2"}) == {"net": "26000"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("balances", [None, {}])
    async def test_missing_mapping_is_argument_error(self, state, balances):
        with pytest.raises(ArgumentError):
            await net_worth(state, balances)

    @pytest.mark.asyncio
    async def test_single_failed_conversion_aborts(self, state, prices):
        with pytest.raises(AssetError):
            await net_worth(state, {"btc": "1", "doge": "100", "eth": "2"})

    @pytest.mark.asyncio
    async def test_empty_asset_is_argument_error_without_request(
        self, state, monkeypatch
    ):
        calls: list[str] = []

        async def _fake_fetch_price(self, asset: str) -> PriceQuote:
            calls.append(asset)
            return PriceQuote(asset=asset, quote="USD", price=Decimal("1"))

        monkeypatch.setattr(BlockchainComAdapter, "fetch_price", _fake_fetch_price)

        with pytest.raises(ArgumentError):
            await net_worth(state, {"btc": "1", "": "1"})
        assert calls == []

    @pytest.mark.asyncio
    async def test_transport_failure_aborts_whole_call(self, state, monkeypatch):
        async def _fake_fetch_price(self, asset: str) -> PriceQuote:
            if asset == "eth":
                raise requests.exceptions.ConnectionError("refused")
            return PriceQuote(asset=asset, quote="USD", price=Decimal("20000"))

        monkeypatch.setattr(BlockchainComAdapter, "fetch_price", _fake_fetch_price)

        with pytest.raises(UpstreamError):
            await net_worth(state, {"btc": "1", "eth": "2"})

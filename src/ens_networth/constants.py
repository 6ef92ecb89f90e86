"""Static asset tables and default upstream endpoints."""

from typing import NamedTuple


class SupportedAsset(NamedTuple):
    symbol: str
    coin_type: int
    scale: int  # raw integer balance / 10**scale = human units


# ENSIP-9 coin type -> asset. Adding an asset is adding a row here.
SUPPORTED_ASSETS: dict[int, SupportedAsset] = {
    0: SupportedAsset("btc", 0, 8),
    2: SupportedAsset("ltc", 2, 8),
    3: SupportedAsset("doge", 3, 8),
    60: SupportedAsset("eth", 60, 18),
}

ASSETS_BY_SYMBOL: dict[str, SupportedAsset] = {
    asset.symbol: asset for asset in SUPPORTED_ASSETS.values()
}

SCALE: dict[str, int] = {
    asset.symbol: asset.scale for asset in SUPPORTED_ASSETS.values()
}

# NOWNodes Blockbook instances, one per chain
DEFAULT_PROVIDER_BOOKS: dict[str, str] = {
    "btc": "https://btcbook.nownodes.io",
    "ltc": "https://ltcbook.nownodes.io",
    "doge": "https://dogebook.nownodes.io",
    "eth": "https://eth-blockbook.nownodes.io",
}

DEFAULT_COIN_NAMES: list[str] = ["btc", "ltc", "doge", "eth"]

DEFAULT_BALANCE_PATH = "/api/v2/address/"
DEFAULT_BALANCE_SUFFIX = "?details=basic"

DEFAULT_PRICE_URL_PREFIX = "https://api.blockchain.com/v3/exchange/tickers/"
PRICE_QUOTE_CURRENCY = "USD"
BAD_PAIR_STATUS = 400

DEFAULT_ENS_SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"
INFURA_MAINNET_URL = "https://mainnet.infura.io/v3/{project_id}"

COIN_TYPES_QUERY = """
query CoinTypes($name: String!) {
  domains(where: { name: $name }) {
    resolver {
      coinTypes
    }
  }
}
"""

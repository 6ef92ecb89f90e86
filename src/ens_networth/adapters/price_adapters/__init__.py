from __future__ import annotations

from .base import BasePriceAdapter, PriceQuote
from .blockchain_com import BlockchainComAdapter

__all__ = ["BasePriceAdapter", "BlockchainComAdapter", "PriceQuote"]

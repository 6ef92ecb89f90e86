from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...settings import NetworthSettings


@dataclass
class PriceQuote:
    """Last trade price of one asset in the quote currency."""

    asset: str
    quote: str
    price: Decimal


class BasePriceAdapter(ABC):
    """Abstract base class for price providers."""

    def __init__(self, config: NetworthSettings):
        self.config = config

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    async def fetch_price(self, asset: str) -> PriceQuote:
        """Fetch the latest price for ``asset``."""
        ...

    def validate_price(self, quote: PriceQuote) -> None:
        """Raise if the quoted price is negative."""
        if quote.price < 0:
            raise ValueError(
                f"Negative price for {quote.asset}-{quote.quote}: {quote.price}"
            )

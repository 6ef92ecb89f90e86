from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...settings import NetworthSettings


@dataclass
class BalanceData:
    """Raw balance reported by a balance provider."""

    asset: str
    address: str
    raw_balance: str  # in the asset's smallest unit


class BaseBalanceAdapter(ABC):
    """Abstract base class for balance providers."""

    def __init__(self, config: NetworthSettings):
        self.config = config

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    def supports(self, asset: str) -> bool:
        """Whether the provider's book can quote ``asset``."""
        ...

    @abstractmethod
    async def fetch_balance(self, asset: str, address: str) -> BalanceData:
        """Fetch the raw balance held by ``address``."""
        ...

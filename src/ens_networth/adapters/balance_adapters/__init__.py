from __future__ import annotations

from .base import BalanceData, BaseBalanceAdapter
from .blockbook import BlockbookAdapter

__all__ = ["BalanceData", "BaseBalanceAdapter", "BlockbookAdapter"]

from __future__ import annotations

from .balance_adapters import BlockbookAdapter
from .naming import EnsAdapter, ResolverHandle, SubgraphAdapter
from .price_adapters import BlockchainComAdapter

__all__ = [
    "BlockbookAdapter",
    "BlockchainComAdapter",
    "EnsAdapter",
    "ResolverHandle",
    "SubgraphAdapter",
]

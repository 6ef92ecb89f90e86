from __future__ import annotations

from .ens import EnsAdapter, ResolverHandle
from .subgraph import SubgraphAdapter

__all__ = ["EnsAdapter", "ResolverHandle", "SubgraphAdapter"]

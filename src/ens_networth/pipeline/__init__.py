from __future__ import annotations

from .resolve import (
    get_coin_types,
    init_resolver,
    resolve_addrs,
    resolve_single_addr,
)
from .run import Stage, run_pipeline
from .worth import get_amounts, get_single_amount, net_worth, to_fiat

__all__ = [
    "Stage",
    "get_amounts",
    "get_coin_types",
    "get_single_amount",
    "init_resolver",
    "net_worth",
    "resolve_addrs",
    "resolve_single_addr",
    "run_pipeline",
    "to_fiat",
]

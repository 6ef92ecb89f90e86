from __future__ import annotations

from dataclasses import dataclass

from ..adapters.naming import ResolverHandle
from ..state import AppState


@dataclass
class PipelineContext:
    state: AppState
    name: str
    handle: ResolverHandle | None = None
    coin_types: list[str] | None = None
    addresses: dict[str, str] | None = None
    amounts: dict[str, str] | None = None
    net: dict[str, str] | None = None

    @property
    def handle_required(self) -> ResolverHandle:
        if self.handle is None:
            raise RuntimeError(
                "Resolver handle has not been set. Ensure init_resolver() is called before accessing this property."
            )
        return self.handle

    @property
    def addresses_required(self) -> dict[str, str]:
        if self.addresses is None:
            raise RuntimeError(
                "Addresses have not been set. Ensure resolve_addrs() is called before accessing this property."
            )
        return self.addresses

    @property
    def amounts_required(self) -> dict[str, str]:
        if self.amounts is None:
            raise RuntimeError(
                "Amounts have not been set. Ensure get_amounts() is called before accessing this property."
            )
        return self.amounts

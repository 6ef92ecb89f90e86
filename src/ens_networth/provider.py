"""Construction of the long-lived naming-system connection."""

from __future__ import annotations

from eth_typing import URI
from web3 import Web3

from .logger import get_logger
from .settings import NetworthSettings
from .state import AppState


def build_web3(settings: NetworthSettings) -> Web3:
    """Create the Ethereum mainnet connection used for ENS lookups."""
    request_kwargs: dict[str, object] = {"timeout": settings.http_timeout}
    if settings.infura_project_secret is not None and not settings.eth_rpc:
        request_kwargs["auth"] = (
            "",
            settings.infura_project_secret.get_secret_value(),
        )
    return Web3(
        Web3.HTTPProvider(
            URI(settings.eth_rpc_required), request_kwargs=request_kwargs
        )
    )


def build_state(settings: NetworthSettings, *, connect: bool = True) -> AppState:
    """Create the process-scoped state once, at startup.

    With ``connect=False`` no Ethereum connection is made, so no RPC endpoint
    needs to be configured.
    """
    return AppState(
        settings=settings,
        logger=get_logger("ens_networth"),
        w3=build_web3(settings) if connect else None,
    )

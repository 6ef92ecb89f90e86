"""Application state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from web3 import Web3

from .settings import NetworthSettings


@dataclass
class AppState:
    """Container for process-scoped state and dependencies.

    Built once per command and passed into every pipeline call, so tests can
    substitute a fake Web3 connection. Commands that never resolve a name
    leave ``w3`` unset.
    """

    settings: NetworthSettings
    logger: logging.Logger
    w3: Web3 | None = None

    @property
    def w3_required(self) -> Web3:
        if self.w3 is None:
            raise ValueError("No Ethereum connection was configured for this run")
        return self.w3

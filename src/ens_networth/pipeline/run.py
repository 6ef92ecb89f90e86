"""High-level pipeline orchestration."""

from __future__ import annotations

import asyncio
from enum import Enum

from ..errors import UpstreamError
from ..state import AppState
from .context import PipelineContext
from .resolve import get_coin_types, init_resolver, resolve_addrs
from .worth import get_amounts, net_worth


class Stage(str, Enum):
    ADDRS = "addrs"
    AMOUNTS = "amounts"
    NET = "net"


async def _run_stages(ctx: PipelineContext, stage: Stage) -> dict[str, str]:
    state = ctx.state

    ctx.handle = await init_resolver(state, ctx.name)
    ctx.coin_types = await get_coin_types(state, ctx.name)
    ctx.addresses = await resolve_addrs(ctx.coin_types, ctx.handle_required)
    if stage is Stage.ADDRS:
        return ctx.addresses

    ctx.amounts = await get_amounts(state, ctx.addresses_required)
    if stage is Stage.AMOUNTS:
        return ctx.amounts

    ctx.net = await net_worth(state, ctx.amounts_required)
    return ctx.net


async def run_pipeline(
    state: AppState, name: str, stage: Stage = Stage.NET
) -> dict[str, str]:
    """Resolve ``name`` and run the pipeline up to ``stage``.

    Stages run strictly in order: resolver, coin types, addresses, amounts,
    net worth. The first failing stage ends the run.

    Args:
        state: Application state containing settings, logger and Web3 connection
        name: The ENS name to resolve
        stage: Last stage to run; its output is returned

    Raises:
        UpstreamError: If the run exceeds ``global_timeout_seconds``.
    """
    timeout_s = state.settings.global_timeout_seconds
    ctx = PipelineContext(state=state, name=name)

    state.logger.info("Starting %s pipeline for %s", stage.value, name)
    try:
        if timeout_s is None or timeout_s <= 0:
            result = await _run_stages(ctx, stage)
        else:
            async with asyncio.timeout(timeout_s):
                result = await _run_stages(ctx, stage)
    except TimeoutError as exc:
        state.logger.error("Pipeline for %s timed out after %ss", name, timeout_s)
        raise UpstreamError(
            f"Pipeline exceeded global timeout {timeout_s}s (name={name})"
        ) from exc

    state.logger.info("Pipeline completed for %s", name)
    return result

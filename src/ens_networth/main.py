"""CLI entrypoint for ens-networth."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable

import typer

from .errors import NetworthError
from .logger import setup_logging
from .provider import build_state
from .settings import NetworthSettings
from .state import AppState

EXIT_CODES = {
    "argument": 2,
    "asset": 3,
    "upstream": 4,
}

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Resolve ENS names to multi-coin addresses and value them in USD.",
)


def _state(ctx: typer.Context, *, connect: bool = False) -> AppState:
    """Build the state for one command; only name lookups connect to Ethereum."""
    settings: NetworthSettings = ctx.obj
    try:
        return build_state(settings, connect=connect)
    except ValueError as e:
        raise typer.BadParameter(
            str(e), param_hint=["--eth-rpc", "ENS_NETWORTH_ETH_RPC"]
        )


def _emit(call: Callable[[], Awaitable[dict[str, Any]]]) -> None:
    """Run a pipeline call and print its mapping as JSON."""
    try:
        result = asyncio.run(call())
    except NetworthError as e:
        typer.echo(json.dumps({"error": e.kind, "message": e.message}), err=True)
        raise typer.Exit(code=EXIT_CODES.get(e.kind, 1))
    typer.echo(json.dumps(result, indent=2))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [ens_networth] table).",
        ),
    ] = None,
    eth_rpc: Annotated[
        str | None,
        typer.Option("--eth-rpc", help="Ethereum mainnet RPC used for ENS lookups."),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config (with secrets redacted) and exit.",
        ),
    ] = False,
):
    """Load configuration shared by every command."""
    if config_path:
        os.environ["ENS_NETWORTH_CONFIG"] = str(config_path)

    init_kwargs: dict[str, str] = {}
    if eth_rpc is not None:
        init_kwargs["eth_rpc"] = eth_rpc
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = NetworthSettings(**init_kwargs)
    setup_logging(settings.log_level)

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    ctx.obj = settings


@app.command()
def addrs(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="ENS name, e.g. vitalik.eth")],
):
    """Print every supported address record of NAME."""
    from .pipeline import Stage, run_pipeline

    state = _state(ctx, connect=True)
    _emit(lambda: run_pipeline(state, name, Stage.ADDRS))


@app.command()
def amounts(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="ENS name, e.g. vitalik.eth")],
):
    """Print the balance held at each supported address of NAME."""
    from .pipeline import Stage, run_pipeline

    state = _state(ctx, connect=True)
    _emit(lambda: run_pipeline(state, name, Stage.AMOUNTS))


@app.command()
def networth(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="ENS name, e.g. vitalik.eth")],
):
    """Print the USD net worth held across NAME's addresses."""
    from .pipeline import Stage, run_pipeline

    state = _state(ctx, connect=True)
    _emit(lambda: run_pipeline(state, name, Stage.NET))


@app.command()
def address(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="ENS name, e.g. vitalik.eth")],
    asset: Annotated[str, typer.Argument(help="Asset symbol (btc, ltc, doge, eth)")],
):
    """Print NAME's address record for a single ASSET."""
    from .pipeline import init_resolver, resolve_single_addr

    state = _state(ctx, connect=True)

    async def _lookup() -> dict[str, str]:
        handle = await init_resolver(state, name)
        return await resolve_single_addr(asset, handle)

    _emit(_lookup)


@app.command()
def balance(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset symbol (btc, ltc, doge, eth)")],
    wallet: Annotated[str, typer.Argument(metavar="ADDRESS", help="Address to query")],
):
    """Print the balance of ASSET held by ADDRESS."""
    from .pipeline import get_single_amount

    state = _state(ctx)
    _emit(lambda: get_single_amount(state, asset, wallet))


@app.command()
def fiat(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset symbol (btc, ltc, doge, eth)")],
    amount: Annotated[str, typer.Argument(metavar="BALANCE", help="Amount in asset units")],
):
    """Print the USD value of BALANCE units of ASSET."""
    from .pipeline import to_fiat

    state = _state(ctx)
    _emit(lambda: to_fiat(state, asset, amount))


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()

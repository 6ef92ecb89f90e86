"""Error taxonomy shared by every pipeline stage.

Public operations never surface raw transport or parsing exceptions: their
failure path goes through :func:`normalize_error`, so callers only ever see an
``ArgumentError``, an ``AssetError`` or an ``UpstreamError``.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NetworthError(Exception):
    """Base class for errors raised by the resolution and valuation pipeline."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ArgumentError(NetworthError):
    """A required input to an operation is missing or empty."""

    kind = "argument"


class AssetError(NetworthError):
    """The asset cannot be served by the operation that was asked for it."""

    kind = "asset"

    def __init__(self, asset: str | None, message: str | None = None):
        super().__init__(message or f"Asset {asset!r} is not supported")
        self.asset = asset


class UpstreamError(NetworthError):
    """An upstream call failed, timed out, or answered with an unusable payload."""

    kind = "upstream"


def normalize_error(exc: BaseException) -> NetworthError:
    """Map any exception onto the taxonomy, keeping taxonomy errors as they are."""
    if isinstance(exc, NetworthError):
        return exc
    error = UpstreamError(f"{type(exc).__name__}: {exc}")
    error.__cause__ = exc
    return error


def funnel_errors(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Route every failure of a public coroutine through normalize_error."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except Exception as exc:
            error = normalize_error(exc)
            logger.error("%s failed (%s): %s", func.__name__, error.kind, error)
            if error is exc:
                raise
            raise error from exc

    return wrapper

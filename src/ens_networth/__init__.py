"""Resolve ENS names to multi-coin addresses and compute their USD net worth."""

__version__ = "0.1.0"

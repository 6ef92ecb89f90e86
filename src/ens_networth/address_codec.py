"""Render ENSIP-9 multi-coin address records as human-readable addresses.

The resolver stores each non-EVM address as the output script it pays to.
UTXO chains are decoded back into base58check (P2PKH / P2SH) or bech32
(segwit) strings, EVM addresses into their EIP-55 checksum form.
"""

from __future__ import annotations

from typing import NamedTuple

import base58
import bech32
from web3 import Web3

OP_DUP = 0x76
OP_HASH160 = 0xA9
OP_EQUALVERIFY = 0x88
OP_CHECKSIG = 0xAC
OP_EQUAL = 0x87
OP_0 = 0x00
OP_1 = 0x51
OP_16 = 0x60


class UtxoFormat(NamedTuple):
    p2pkh_version: int
    p2sh_version: int
    hrp: str | None  # None when the chain has no segwit


UTXO_FORMATS: dict[int, UtxoFormat] = {
    0: UtxoFormat(0x00, 0x05, "bc"),
    2: UtxoFormat(0x30, 0x32, "ltc"),
    3: UtxoFormat(0x1E, 0x16, None),
}

EVM_COIN_TYPES = {60}


def _encode_base58check(version: int, payload: bytes) -> str:
    return base58.b58encode_check(bytes([version]) + payload).decode("ascii")


def _encode_segwit(hrp: str, script: bytes) -> str | None:
    if len(script) < 4 or script[1] != len(script) - 2:
        return None
    opcode = script[0]
    if opcode == OP_0:
        version = 0
    elif OP_1 <= opcode <= OP_16:
        version = opcode - OP_1 + 1
    else:
        return None
    return bech32.encode(hrp, version, list(script[2:]))


def format_utxo_address(coin_type: int, script: bytes) -> str:
    fmt = UTXO_FORMATS[coin_type]

    if (
        len(script) == 25
        and script[0] == OP_DUP
        and script[1] == OP_HASH160
        and script[2] == 20
        and script[23] == OP_EQUALVERIFY
        and script[24] == OP_CHECKSIG
    ):
        return _encode_base58check(fmt.p2pkh_version, script[3:23])

    if (
        len(script) == 23
        and script[0] == OP_HASH160
        and script[1] == 20
        and script[22] == OP_EQUAL
    ):
        return _encode_base58check(fmt.p2sh_version, script[2:22])

    if fmt.hrp is not None:
        encoded = _encode_segwit(fmt.hrp, script)
        if encoded:
            return encoded

    raise ValueError(
        f"Unrecognized output script for coin type {coin_type}: 0x{script.hex()}"
    )


def format_address(coin_type: int, raw: bytes) -> str:
    """Convert raw resolver bytes for ``coin_type`` into an address string.

    Raises:
        ValueError: If the coin type has no codec or the bytes do not decode.
    """
    if coin_type in EVM_COIN_TYPES:
        if len(raw) != 20:
            raise ValueError(
                f"EVM address for coin type {coin_type} must be 20 bytes, got {len(raw)}"
            )
        return Web3.to_checksum_address(raw)
    if coin_type in UTXO_FORMATS:
        return format_utxo_address(coin_type, raw)
    raise ValueError(f"No address codec for coin type {coin_type}")

from __future__ import annotations

from decimal import Decimal

import pytest

from ens_networth.units import format_decimal, parse_decimal, scale_down


def test_scale_down_btc_satoshis():
    assert format_decimal(scale_down("150000000", 8)) == "1.5"


def test_scale_down_eth_wei():
    assert format_decimal(scale_down("2500000000000000000", 18)) == "2.5"


def test_scale_down_zero_balance():
    assert format_decimal(scale_down("0", 8)) == "0"


def test_format_decimal_has_no_exponent_or_trailing_zeros():
    assert format_decimal(Decimal("6.0E+3")) == "6000"
    assert format_decimal(Decimal("26000.00")) == "26000"
    assert format_decimal(Decimal("0.00000001")) == "0.00000001"


def test_parse_decimal_accepts_floats_via_str():
    assert parse_decimal(3000.5) == Decimal("3000.5")


@pytest.mark.parametrize("value", [None, "", "abc", "NaN", "Infinity", True])
def test_parse_decimal_rejects_non_numeric(value):
    with pytest.raises(ValueError):
        parse_decimal(value)


def test_scale_down_keeps_every_digit_of_large_balances():
    raw = "1234567890123456789012345678901"

    assert format_decimal(scale_down(raw, 18)) == "1234567890123.456789012345678901"

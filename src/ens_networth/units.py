from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation, getcontext


def parse_decimal(value: object) -> Decimal:
    """Parse a provider number (string, int or float) into a Decimal.

    Raises:
        ValueError: If the value is missing, not numeric, or not finite.
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Expected a number, got {value!r}") from e
    if not parsed.is_finite():
        raise ValueError(f"Expected a finite number, got {value!r}")
    return parsed


def _exact(value: Decimal) -> Context:
    # Wide enough to hold every digit of ``value`` without rounding.
    return Context(prec=max(getcontext().prec, len(value.as_tuple().digits)))


def scale_down(raw: object, scale: int) -> Decimal:
    """Convert a raw integer amount into human units.

    Args:
        raw: Amount expressed in the asset's smallest unit.
        scale: Number of decimals; the result is ``raw / 10**scale``.
    """
    value = parse_decimal(raw)
    return value.scaleb(-scale, context=_exact(value))


def format_decimal(value: Decimal) -> str:
    """Render a Decimal without exponent notation or trailing zeros.

    ``Decimal("1.50000000")`` -> ``"1.5"``, ``Decimal("6.0E+3")`` -> ``"6000"``.
    """
    if value == 0:
        return "0"
    return format(value.normalize(context=_exact(value)), "f")

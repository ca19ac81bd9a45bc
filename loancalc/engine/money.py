"""Decimal value layer.

Every monetary and rate quantity passes through here. Floats are converted via
their display string so binary noise never enters a calculation.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")


class ConversionError(ValueError):
    """Raised when a value cannot be represented as a Decimal."""


def to_decimal(value) -> Decimal:
    """Coerce an int, float, numeric string or Decimal into a Decimal.

    Strings may carry surrounding whitespace and thousands separators
    ("1,250.50"). Booleans and None are rejected even though Python treats
    bools as ints.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ConversionError(f"Invalid numeric value: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            raise ConversionError("Invalid numeric value: empty string")
        try:
            return Decimal(cleaned)
        except InvalidOperation as exc:
            raise ConversionError(f"Invalid numeric value: {value!r}") from exc
    raise ConversionError(f"Unsupported type for decimal conversion: {type(value).__name__}")


def round_money(value: Decimal) -> Decimal:
    """Round to cents. Presentation boundary only."""
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def is_finite_decimal(value) -> bool:
    return isinstance(value, Decimal) and value.is_finite()

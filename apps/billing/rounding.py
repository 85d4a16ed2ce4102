"""
Rounding rules for bill amounts.

All three rules round half up (never banker's rounding) and collapse
negative or non-finite input to zero. Values are handled as Decimal built
from their string form, so 2106.795 rounds to 2106.80 as it reads.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal('0')
ONE = Decimal('1')
PAISE = Decimal('0.01')


def to_decimal(value, default=ZERO):
    """Coerce form input, floats and ints to Decimal; blank or junk gives ``default``."""
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default


def _half_up(value, exponent):
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


def round_gst_whole(value):
    """GST amounts are whole rupees. Zero and below round to 0."""
    value = to_decimal(value)
    if not value.is_finite() or value <= 0:
        return ZERO
    return _half_up(value, ONE)


def round_currency(value):
    """Round to paise (2 decimals)."""
    value = to_decimal(value)
    if not value.is_finite() or value < 0:
        return ZERO
    return _half_up(value, PAISE)


def round_whole(value):
    """Round to a whole number; used for the MC / value added total."""
    value = to_decimal(value)
    if not value.is_finite() or value < 0:
        return ZERO
    return _half_up(value, ONE)


def quantize_money(value):
    """Store an exact amount as paise without clamping negatives."""
    return _half_up(to_decimal(value), PAISE)

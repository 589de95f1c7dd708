from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.core.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value, field="amount"):
    """Parse ints, floats, strings and Decimals into a Decimal.

    None and "" count as zero. Floats go through str() so 0.1 stays 0.1.
    """
    if value is None or value == "":
        return ZERO
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    # NaN and Infinity parse but break every comparison after
    if not number.is_finite():
        raise ValidationError(f"{field} must be a finite number, got {value!r}")
    return number


def money(value):
    """Round to paise, half up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount, rate):
    return amount * rate / HUNDRED


def quintals(weight_kg):
    # 100 kg == 1 quintal
    return to_decimal(weight_kg) / HUNDRED

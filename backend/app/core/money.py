"""
Fixed-point money helpers.

Every amount that reaches the reconciliation engine is an integer number of
minor units (cents, paise, ...). Intermediate values such as a fair share are
kept as exact fractions of a minor unit; rounding happens only when a transfer
amount or a display value is produced, always half-to-even.
"""
from decimal import Decimal, ROUND_HALF_EVEN
from fractions import Fraction
from typing import Union

from app.core.config import settings

# Half of the smallest representable unit; magnitudes at or below this are settled.
EPSILON = Fraction(1, 2)

DEFAULT_EXPONENT = 2

# ISO 4217 currencies whose minor unit is not 1/100
_EXPONENTS = {
    "BIF": 0, "CLP": 0, "DJF": 0, "GNF": 0, "ISK": 0, "JPY": 0, "KMF": 0,
    "KRW": 0, "PYG": 0, "RWF": 0, "UGX": 0, "UYI": 0, "VND": 0, "VUV": 0,
    "XAF": 0, "XOF": 0, "XPF": 0,
    "BHD": 3, "IQD": 3, "JOD": 3, "KWD": 3, "LYD": 3, "OMR": 3, "TND": 3,
    "CLF": 4, "UYW": 4,
}

Number = Union[int, Decimal, Fraction]


def minor_unit_exponent(currency: str) -> int:
    """Number of decimal digits in the currency's minor unit."""
    code = (currency or settings.DEFAULT_CURRENCY).upper()
    if code in settings.CURRENCY_EXPONENTS:
        return settings.CURRENCY_EXPONENTS[code]
    return _EXPONENTS.get(code, DEFAULT_EXPONENT)


def _quantum(exponent: int) -> Decimal:
    return Decimal(1).scaleb(-exponent)


def round_minor(value: Number) -> int:
    """Round an exact amount of minor units to an integer, half-to-even."""
    if isinstance(value, float):
        raise TypeError("Binary floats are not accepted for money")
    # round() on a Fraction uses banker's rounding
    return round(Fraction(value))


def to_minor_units(amount: Union[Number, str], currency: str) -> int:
    """
    Convert a major-unit amount (e.g. Decimal("12.34")) to integer minor units.

    Precision beyond the currency's minor unit is rounded half-to-even.
    """
    if isinstance(amount, float):
        raise TypeError("Binary floats are not accepted for money")
    if isinstance(amount, Fraction):
        value = amount
    else:
        value = Fraction(Decimal(str(amount)) if isinstance(amount, str) else amount)
    return round_minor(value * 10 ** minor_unit_exponent(currency))


def from_minor_units(units: Number, currency: str) -> Decimal:
    """Convert minor units (possibly fractional) to a quantised major-unit Decimal."""
    exponent = minor_unit_exponent(currency)
    return Decimal(round_minor(units)).scaleb(-exponent).quantize(
        _quantum(exponent), rounding=ROUND_HALF_EVEN
    )


def format_amount(units: Number, currency: str) -> str:
    """Format minor units for display, e.g. ``1,234.50 INR``."""
    exponent = minor_unit_exponent(currency)
    value = from_minor_units(units, currency)
    return f"{value:,.{exponent}f} {currency.upper()}"


def quantize_amount(amount: Union[Number, str], currency: str) -> Decimal:
    """Round a major-unit amount to the currency's precision."""
    return from_minor_units(to_minor_units(amount, currency), currency)

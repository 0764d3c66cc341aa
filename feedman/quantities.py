"""
Numeric input coercion shared by the ledger, livestock and dosing.

Feed masses and fish weights are stored with three decimal places
(1 g when the unit is kg). A value with more places would be rounded by the
database and no longer match what a compare-and-set expects, so it is
rejected here instead.
"""

from decimal import Decimal, InvalidOperation

QUANTITY_PLACES = 3

GRAM = Decimal('0.001')


def to_decimal(value, places: int | None = None) -> Decimal | None:
    """
    Coerce user input to Decimal.

    Returns None if it is not a finite number, or has more than ``places``
    decimal places when ``places`` is given.

    Examples:
        to_decimal('12.5')               # Decimal('12.5')
        to_decimal('NaN')                # None
        to_decimal('0.0004', places=3)   # None
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    if places is None:
        return result
    try:
        quantized = result.quantize(Decimal(1).scaleb(-places))
    except InvalidOperation:
        # Too many digits for the context precision
        return None
    if quantized != result:
        return None
    return quantized

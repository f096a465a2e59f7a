from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round to the 2 decimals the Numeric(18, 2) columns store."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)

# app/services/pricing.py

from decimal import Decimal, ROUND_HALF_UP, localcontext

PRICE_PRECISION = 2


def normalize(amount: float, precision: int = PRICE_PRECISION) -> float:
    """
    Round `amount` to `precision` decimal places, halves away from zero.

    The value is rounded from its shortest decimal repr, so 2.005 becomes
    2.01 (and -2.005 becomes -2.01) even though the nearest binary double
    sits just below the half.
    """
    quantum = Decimal(1).scaleb(-precision)
    value = Decimal(repr(float(amount)))

    with localcontext() as ctx:
        # room for every integer digit plus the requested decimals
        ctx.prec = max(ctx.prec, value.adjusted() + precision + 2)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)

    return float(rounded)

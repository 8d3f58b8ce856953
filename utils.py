"""
TL Payroll — Money helpers
"""
import functools
from decimal import Decimal, ROUND_HALF_UP, localcontext

CENT = Decimal('0.01')

# Digits kept while calculating; well past any salary, so cents survive
MONEY_PRECISION = 60


def to_decimal(value) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal; floats go through str() so 0.1 stays 0.1."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal('0')
    return Decimal(str(value))


def round_money(amount) -> Decimal:
    """Round to 2 decimal places, half-up. NaN and infinities pass through."""
    value = to_decimal(amount)
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        # integer digits + 2 cents + 1 spare
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def money_context(func):
    """Run the wrapped calculation with MONEY_PRECISION digits."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with localcontext() as ctx:
            ctx.prec = MONEY_PRECISION
            return func(*args, **kwargs)
    return wrapper


def fmt(amount) -> str:
    """Format amount as US dollars."""
    value = to_decimal(amount)
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"

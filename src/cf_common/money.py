"""Amount utilities.

Amounts (deposits, purchase prices, totals) are taka held as Decimal with at
most two fractional digits, stored as NUMERIC(16, 2). No float arithmetic.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

CURRENCY_SYMBOL = "৳"

MIN_AMOUNT = Decimal("1")
MAX_AMOUNT = Decimal("1000000000000")
AMOUNT_MAX_DIGITS = 15
AMOUNT_DECIMAL_PLACES = 2

ZERO = Decimal("0")

# JSON clients get a plain number, not pydantic's default Decimal string.
AmountOut = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def amount_to_display(amount: Decimal | int) -> str:
    """Render an amount for people: 12500 -> '৳12,500.00', -300.5 -> '-৳300.50'."""
    if amount < 0:
        return f"-{CURRENCY_SYMBOL}{-amount:,.2f}"
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"

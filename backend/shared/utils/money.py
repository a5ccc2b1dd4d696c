"""
Money helpers.

Amounts are stored as integer cents and exposed as decimal amounts with two
places. Rounding is ROUND_HALF_UP and happens once, at the conversion or
tax boundary.
"""

from decimal import ROUND_HALF_UP, Decimal

from shared.config.constants import TAX_RATE

CENT = Decimal("0.01")


def to_cents(amount: Decimal | int | float | str) -> int:
    """
    Convert a decimal amount to integer cents.

        to_cents(Decimal("10.00"))  # 1000
        to_cents("0.125")           # 13
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value.quantize(CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())


def from_cents(cents: int) -> Decimal:
    """Convert integer cents to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def cents_to_amount(cents: int) -> float:
    """Amount as a JSON-friendly number (2320 -> 23.2)."""
    return float(from_cents(cents))


def line_total_cents(unit_price_cents: int, quantity: int) -> int:
    return unit_price_cents * quantity


def apply_tax(subtotal_cents: int) -> int:
    """Total in cents: subtotal * (1 + TAX_RATE), rounded half-up to the cent."""
    total = Decimal(subtotal_cents) * (Decimal(1) + TAX_RATE)
    return int(total.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_totals(lines: list[tuple[int, int]]) -> tuple[int, int]:
    """
    Subtotal and total in cents for (unit_price_cents, quantity) pairs.

        compute_totals([(1000, 2)])  # (2000, 2320)
    """
    subtotal = sum(line_total_cents(price, qty) for price, qty in lines)
    return subtotal, apply_tax(subtotal)

"""
Tests for money conversion and tax helpers.
"""

from decimal import Decimal

import pytest

from shared.utils.money import (
    apply_tax,
    cents_to_amount,
    compute_totals,
    from_cents,
    to_cents,
)


class TestConversion:

    @pytest.mark.parametrize(
        "amount,cents",
        [
            (10, 1000),
            (19.99, 1999),
            ("0.125", 13),
            ("0.124", 12),
            (Decimal("8.50"), 850),
            (0, 0),
        ],
    )
    def test_to_cents(self, amount, cents):
        assert to_cents(amount) == cents

    def test_from_cents(self):
        assert from_cents(2320) == Decimal("23.20")
        assert cents_to_amount(2320) == 23.2


class TestTax:

    def test_apply_tax(self):
        assert apply_tax(2000) == 2320
        assert apply_tax(0) == 0

    def test_apply_tax_rounds_to_nearest_cent(self):
        assert apply_tax(125) == 145
        # 3.48 -> 3, 4.64 -> 5
        assert apply_tax(3) == 3
        assert apply_tax(4) == 5

    def test_compute_totals(self):
        assert compute_totals([(1000, 2)]) == (2000, 2320)
        assert compute_totals([(1000, 1), (550, 3)]) == (2650, 3074)

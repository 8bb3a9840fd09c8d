#!/usr/bin/env python3
"""Tests for milliunit currency conversion and proportional distribution."""

from decimal import Decimal

import pytest

from receipt_ledger.core.currency import (
    SPLIT_TOLERANCE_MILLIUNITS,
    allocate_remainder,
    distribute_proportionally,
    format_milliunits,
    is_within_split_tolerance,
    milliunits_to_decimal,
    receipt_amount_to_milliunits,
    safe_divide_proportional,
    to_decimal,
)


class TestReceiptAmountConversion:
    """Receipt dollars -> signed, truncated milliunits."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "amount,expected",
        [
            ("45.99", -45990),
            (Decimal("107.00"), -107000),
            (167.28, -167280),
            (0, 0),
            ("-12.50", 12500),
            ("$1,234.56", -1234560),
        ],
        ids=["string", "decimal", "float", "zero", "refund", "formatted"],
    )
    def test_sign_flip(self, amount, expected):
        """Money spent becomes a negative ledger amount."""
        assert receipt_amount_to_milliunits(amount) == expected

    @pytest.mark.currency
    def test_truncates_toward_zero(self):
        """Extra precision is truncated, never rounded to nearest."""
        assert receipt_amount_to_milliunits("0.0019") == -1
        assert receipt_amount_to_milliunits("12.3459") == -12345
        assert receipt_amount_to_milliunits("-12.3459") == 12345

    @pytest.mark.currency
    def test_float_does_not_leak_binary_noise(self):
        """0.1 + 0.2 style floats convert by their printed value."""
        assert receipt_amount_to_milliunits(0.3) == -300
        assert receipt_amount_to_milliunits(19.99) == -19990

    @pytest.mark.currency
    def test_rejects_garbage(self):
        with pytest.raises(ValueError, match="Not a currency amount"):
            to_decimal("FREE")
        with pytest.raises(ValueError):
            to_decimal(float("nan"))

    @pytest.mark.currency
    def test_back_to_decimal_keeps_ledger_sign(self):
        assert milliunits_to_decimal(-157820) == Decimal("-157.82")
        assert milliunits_to_decimal(50) == Decimal("0.05")


class TestProportionalDistribution:
    """Proportional shares with the remainder on the last item."""

    @pytest.mark.currency
    def test_safe_divide_truncates_and_keeps_total_sign(self):
        assert safe_divide_proportional(1, 3, 100) == 33
        assert safe_divide_proportional(-1, -3, -100) == -33
        assert safe_divide_proportional(2, 3, -100) == -66

    @pytest.mark.currency
    def test_safe_divide_zero_denominator(self):
        assert safe_divide_proportional(5, 0, 100) == 0

    @pytest.mark.currency
    def test_allocate_remainder(self):
        assert allocate_remainder([33, 33, 33], 100) == [33, 33, 34]
        assert allocate_remainder([], 100) == []

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "weights,total",
        [
            ([-62400, -31990, -41430, -22000], -9460),
            ([-1, -1, -1], -10),
            ([-100000], -7),
            ([-33333, -33333, -33334], 50),
            ([0, 0], -20),
        ],
        ids=["receipt", "thirds", "single", "positive_total", "zero_weights"],
    )
    def test_shares_always_sum_to_total(self, weights, total):
        """The last share absorbs truncation so the sum is exact."""
        shares = distribute_proportionally(weights, total)
        assert len(shares) == len(weights)
        assert sum(shares) == total

    @pytest.mark.currency
    def test_only_last_share_gets_remainder(self):
        shares = distribute_proportionally([-1, -1, -1], -10)
        assert shares == [-3, -3, -4]

    @pytest.mark.currency
    def test_empty_weights(self):
        assert distribute_proportionally([], -10) == []


class TestToleranceAndFormatting:
    """Tolerance gate and dollar formatting."""

    @pytest.mark.currency
    def test_tolerance_is_inclusive(self):
        assert SPLIT_TOLERANCE_MILLIUNITS == 50
        assert is_within_split_tolerance(50)
        assert is_within_split_tolerance(-50)
        assert not is_within_split_tolerance(51)
        assert not is_within_split_tolerance(-51)

    @pytest.mark.currency
    def test_format_milliunits(self):
        assert format_milliunits(-80000) == "$-80.00"
        assert format_milliunits(20000) == "$20.00"

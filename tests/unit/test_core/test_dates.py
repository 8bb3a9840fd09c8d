#!/usr/bin/env python3
"""Tests for FinancialDate and the transaction date window."""

from datetime import date, timedelta

import pytest

from receipt_ledger.core.dates import (
    FUTURE_DATE_REASON,
    TOO_OLD_DATE_REASON,
    FinancialDate,
    InvalidDateError,
    normalize_transaction_date,
)

TODAY = FinancialDate(date=date(2025, 6, 1))


class TestFinancialDate:
    """Test FinancialDate construction and formatting."""

    def test_from_string(self):
        assert FinancialDate.from_string("2024-01-15").date == date(2024, 1, 15)

    def test_from_string_custom_format(self):
        assert FinancialDate.from_string("01/15/2024", date_format="%m/%d/%Y").date == date(2024, 1, 15)

    @pytest.mark.parametrize("value", ["2024-13-01", "yesterday", "", None])
    def test_from_string_invalid(self, value):
        with pytest.raises(InvalidDateError):
            FinancialDate.from_string(value)

    def test_to_ynab_format(self):
        assert FinancialDate(date=date(2024, 1, 5)).to_ynab_format() == "2024-01-05"

    def test_years_before(self):
        assert TODAY.years_before(5).date == date(2020, 6, 1)

    def test_years_before_leap_day(self):
        """Feb 29 has no counterpart five years earlier; Feb 28 is used."""
        leap = FinancialDate(date=date(2024, 2, 29))
        assert leap.years_before(5).date == date(2019, 2, 28)

    def test_today(self):
        assert FinancialDate.today().date == date.today()


class TestNormalizeTransactionDate:
    """Clamp receipt dates into [today - 5 years, today]."""

    def test_today_is_unchanged(self):
        validated, adjustment = normalize_transaction_date(TODAY, TODAY)
        assert validated == TODAY
        assert adjustment is None

    def test_one_day_in_future_is_clamped_to_today(self):
        tomorrow = FinancialDate(date=TODAY.date + timedelta(days=1))
        validated, adjustment = normalize_transaction_date(tomorrow, TODAY)
        assert validated == TODAY
        assert adjustment is not None
        assert adjustment.reason == FUTURE_DATE_REASON == "Date was in the future"
        assert adjustment.original_date == tomorrow
        assert adjustment.adjusted_date == TODAY

    def test_just_inside_five_years_is_unchanged(self):
        recent_enough = FinancialDate(date=date(2020, 6, 2))
        validated, adjustment = normalize_transaction_date(recent_enough, TODAY)
        assert validated == recent_enough
        assert adjustment is None

    def test_exactly_five_years_is_unchanged(self):
        boundary = FinancialDate(date=date(2020, 6, 1))
        validated, adjustment = normalize_transaction_date(boundary, TODAY)
        assert validated == boundary
        assert adjustment is None

    def test_five_years_and_a_day_is_clamped(self):
        too_old = FinancialDate(date=date(2020, 5, 31))
        validated, adjustment = normalize_transaction_date(too_old, TODAY)
        assert validated.date == date(2020, 6, 1)
        assert adjustment is not None
        assert adjustment.reason == TOO_OLD_DATE_REASON == "Date was more than 5 years ago"

    def test_old_receipt_clamped_to_five_years_ago(self):
        validated, adjustment = normalize_transaction_date(FinancialDate.from_string("2019-01-01"), TODAY)
        assert validated.to_iso_string() == "2020-06-01"
        assert adjustment.to_dict() == {
            "originalDate": "2019-01-01",
            "adjustedDate": "2020-06-01",
            "reason": "Date was more than 5 years ago",
        }

    def test_defaults_to_real_today(self):
        validated, adjustment = normalize_transaction_date(FinancialDate.today())
        assert validated == FinancialDate.today()
        assert adjustment is None

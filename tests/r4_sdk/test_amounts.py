# tests/r4_sdk/test_amounts.py
"""
Тесты форматирования сумм, дат и референсов.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from src.r4_sdk.amounts import (
    format_amount,
    format_bcv_date,
    format_dispersion_date,
    format_reference,
    sum_amounts,
    venezuela_today,
)


class TestFormatAmount:
    """Тесты каноничной суммы."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10", "10.00"),
            ("10.5", "10.50"),
            ("10.50", "10.50"),
            (" 7.25 ", "7.25"),
            (10, "10.00"),
            (10.0, "10.00"),
            (0.1, "0.10"),
            (1234.56, "1234.56"),
            (Decimal("99.9"), "99.90"),
            ("99999999.99", "99999999.99"),
        ],
    )
    def test_valid(self, value, expected):
        assert format_amount(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "1,50", "1.234,50", "-5", "0", "0.00", "10.123", 10.123, "123456789.00", True, None, "1e3"],
    )
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            format_amount(value)

    def test_float_noise_not_rounded_silently(self):
        """0.1 + 0.2 не превращается молча в 0.30."""
        with pytest.raises(ValueError):
            format_amount(0.1 + 0.2)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            format_amount(Decimal("NaN"))


def test_sum_amounts_exact():
    """Сумма без ошибок округления float."""
    assert sum_amounts(["0.10", "0.20"]) == "0.30"
    assert sum_amounts(["100.50", "50.25"]) == "150.75"


class TestDates:
    """Тесты форматов дат."""

    def test_bcv_date_from_date(self):
        assert format_bcv_date(date(2024, 1, 5)) == "2024-01-05"

    def test_bcv_date_from_datetime(self):
        assert format_bcv_date(datetime(2024, 1, 5, 23, 0)) == "2024-01-05"

    def test_bcv_date_string_kept(self):
        assert format_bcv_date("2024-01-15") == "2024-01-15"

    @pytest.mark.parametrize("value, expected", [("2024-1-5", "2024-01-05"), ("2024-01-5", "2024-01-05")])
    def test_bcv_date_padded(self, value, expected):
        assert format_bcv_date(value) == expected

    @pytest.mark.parametrize("value", ["15/01/2024", "2024-13-01", "", "hoy"])
    def test_bcv_date_invalid(self, value):
        with pytest.raises(ValueError):
            format_bcv_date(value)

    def test_dispersion_date_from_date(self):
        assert format_dispersion_date(date(2024, 1, 5)) == "01/05/2024"

    def test_dispersion_date_string_kept(self):
        assert format_dispersion_date("01/15/2024") == "01/15/2024"

    @pytest.mark.parametrize("value", ["2024-01-15", "1/5/2024", "15/01/2024"])
    def test_dispersion_date_invalid(self, value):
        with pytest.raises(ValueError):
            format_dispersion_date(value)

    def test_venezuela_today_before_midnight_utc(self):
        """02:00 UTC это ещё предыдущий день в Каракасе."""
        now = datetime(2024, 1, 16, 2, 0, tzinfo=timezone.utc)
        assert venezuela_today(now) == date(2024, 1, 15)

    def test_venezuela_today_afternoon(self):
        now = datetime(2024, 1, 16, 15, 0, tzinfo=timezone.utc)
        assert venezuela_today(now) == date(2024, 1, 16)

    def test_venezuela_today_naive_is_utc(self):
        assert venezuela_today(datetime(2024, 1, 16, 3, 59)) == date(2024, 1, 15)


class TestReference:
    """Тесты референса."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("12345", "00012345"),
            ("12345678", "12345678"),
            ("1234567890", "12345678"),
        ],
    )
    def test_format_reference(self, value, expected):
        assert format_reference(value) == expected

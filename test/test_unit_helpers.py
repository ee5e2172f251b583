# Test type: Unit Test
# Validation to be executed: Validates helper utility functions — amount
#   parsing of free-form form input, half-up rounding, and currency rounding.
# Command: pytest test/test_unit_helpers.py -v

"""Unit tests for app.utils.helpers module."""

import pytest

from app.utils.helpers import parse_amount, round_currency, round_half_up


# ── Amount parsing ────────────────────────────────────────────────────────

class TestParseAmount:
    """Blank-tolerant coercion of form values; never raises."""

    def test_plain_numbers(self):
        assert parse_amount(1500) == 1500.0
        assert parse_amount(1500.75) == 1500.75

    def test_numeric_string(self):
        assert parse_amount("250000") == 250_000.0

    def test_indian_grouping(self):
        assert parse_amount("12,00,000") == 1_200_000.0

    def test_western_grouping(self):
        assert parse_amount("1,200,000") == 1_200_000.0

    def test_rupee_sign_and_whitespace(self):
        assert parse_amount("  ₹ 1,50,000 ") == 150_000.0

    def test_decimal_string(self):
        assert parse_amount("1,234.50") == 1234.5

    @pytest.mark.parametrize("value", ["", "   ", None, ",,"])
    def test_blank_is_zero(self, value):
        assert parse_amount(value) == 0.0

    @pytest.mark.parametrize("value", ["abc", "12L", "1.2.3", "NaN", "inf", "-inf"])
    def test_invalid_is_zero(self, value):
        assert parse_amount(value) == 0.0

    def test_negative_is_zero(self):
        assert parse_amount(-5000) == 0.0
        assert parse_amount("-5,000") == 0.0

    def test_non_scalar_is_zero(self):
        assert parse_amount([1, 2]) == 0.0
        assert parse_amount({"a": 1}) == 0.0

    def test_bool_is_zero(self):
        assert parse_amount(True) == 0.0

    def test_float_nan_is_zero(self):
        assert parse_amount(float("nan")) == 0.0


# ── Rounding ──────────────────────────────────────────────────────────────

class TestRoundHalfUp:
    def test_halves_go_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(500.5) == 501

    def test_below_half_goes_down(self):
        assert round_half_up(3600.008) == 3600
        assert round_half_up(2.49) == 2

    def test_above_half_goes_up(self):
        assert round_half_up(1949.6) == 1950

    def test_zero(self):
        assert round_half_up(0.0) == 0

    def test_returns_int(self):
        assert isinstance(round_half_up(10.2), int)


class TestRoundCurrency:
    def test_two_decimals(self):
        assert round_currency(86.8812345) == 86.88

    def test_exact_value(self):
        assert round_currency(145.0) == 145.0

    def test_float_noise_removed(self):
        assert round_currency(0.1 + 0.2) == 0.3


class TestHugeAmounts:
    """Amounts that do not fit a float, or sit above MAX_AMOUNT, read as 0."""

    def test_int_too_large_for_float(self):
        assert parse_amount(10**400) == 0.0

    def test_string_overflowing_to_inf(self):
        assert parse_amount("1" + "0" * 400) == 0.0

    def test_above_max_amount(self):
        assert parse_amount(1e301) == 0.0

    def test_large_finite_kept(self):
        assert parse_amount(1e30) == 1e30

    def test_round_half_up_beyond_default_decimal_precision(self):
        assert round_half_up(4e28) == 4 * 10**28
        assert isinstance(round_half_up(1e300), int)

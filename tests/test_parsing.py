from datetime import date
from decimal import Decimal

import pytest

from pocket_ledger.core.errors import ValidationError
from pocket_ledger.core.parsing import (
    clean_description,
    ensure_positive_amount,
    parse_amount,
    parse_date,
    parse_kind,
)


def test_parse_amount_accepts_plain_numbers():
    assert parse_amount("12.50") == Decimal("12.50")
    assert parse_amount(" 1000 ") == Decimal("1000")


@pytest.mark.parametrize("text", ["", "   ", None, "abc", "12abc", "1,5", "0", "-5", "NaN", "Infinity"])
def test_parse_amount_rejects_invalid(text):
    with pytest.raises(ValidationError):
        parse_amount(text)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        parse_amount("abc")


def test_ensure_positive_amount_rejects_bool_and_strings():
    with pytest.raises(ValidationError):
        ensure_positive_amount(True)
    with pytest.raises(ValidationError):
        ensure_positive_amount("10")
    assert ensure_positive_amount(2.5) == Decimal("2.5")
    assert ensure_positive_amount(3) == Decimal(3)


def test_parse_kind():
    assert parse_kind("income") == "income"
    assert parse_kind(" Expense ") == "expense"
    with pytest.raises(ValidationError):
        parse_kind("transfer")


def test_parse_date_defaults_and_errors():
    fallback = date(2024, 5, 1)
    assert parse_date("", default=fallback) == fallback
    assert parse_date("2024-03-15", default=fallback) == date(2024, 3, 15)
    with pytest.raises(ValidationError):
        parse_date("15/03/2024", default=fallback)


def test_clean_description():
    assert clean_description("  lunch ") == "lunch"
    assert clean_description("   ") is None
    assert clean_description(None) is None


def test_amount_upper_bound():
    assert parse_amount("1000000000000") == Decimal("1000000000000")
    for text in ["1000000000000.01", "1e27", "1e5000"]:
        with pytest.raises(ValidationError):
            parse_amount(text)


def test_amount_fraction_digits_bound():
    assert parse_amount("0.00000001") == Decimal("0.00000001")
    assert parse_amount("12.50000000000") == Decimal("12.5")
    for text in ["0.000000001", "1E-400"]:
        with pytest.raises(ValidationError):
            parse_amount(text)


def test_amount_rejects_underscore_grouping():
    with pytest.raises(ValidationError):
        parse_amount("1_000")

import pytest

from budget_tracker.services.rates.conversion import convert_amount

RATES = {"USD": 1.0, "EUR": 0.9, "JPY": 150.0}


@pytest.mark.parametrize("amount", [0.0, 1.0, 123.456, 1e9])
def test_same_currency_returns_input_exactly(amount):
    assert convert_amount(amount, "EUR", "EUR", RATES, "USD") == amount
    # no lookup needed, so even an unknown code passes through
    assert convert_amount(amount, "XYZ", "XYZ", {}, "USD") == amount


def test_converts_through_base():
    assert convert_amount(200, "EUR", "USD", RATES, "USD") == pytest.approx(222.2222, rel=1e-6)
    assert convert_amount(100, "USD", "JPY", RATES, "USD") == pytest.approx(15000.0)
    assert convert_amount(90, "EUR", "JPY", RATES, "USD") == pytest.approx(15000.0)


@pytest.mark.parametrize("amount", [0.01, 7.5, 1000.0, 98765.4321])
@pytest.mark.parametrize("currency", ["EUR", "JPY"])
def test_round_trip_through_base(amount, currency):
    in_base = convert_amount(amount, currency, "USD", RATES, "USD")
    back = convert_amount(in_base, "USD", currency, RATES, "USD")
    assert back == pytest.approx(amount, rel=1e-12)


def test_empty_table_is_noop():
    assert convert_amount(50, "EUR", "USD", {}, "USD") == 50


def test_missing_rate_is_noop():
    assert convert_amount(50, "GBP", "USD", RATES, "USD") == 50
    assert convert_amount(50, "USD", "GBP", RATES, "USD") == 50


def test_non_positive_rate_treated_as_missing():
    assert convert_amount(50, "EUR", "USD", {"EUR": 0.0}, "USD") == 50


def test_codes_are_case_insensitive():
    assert convert_amount(90, "eur", "usd", RATES, "usd") == pytest.approx(100.0)

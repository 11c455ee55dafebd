"""
Tests for money arithmetic.
"""
import pytest
from decimal import Decimal
from pydantic import ValidationError
from ledger.core.exceptions import InvalidCurrency
from ledger.core.money import Money, check_supported, money_sum, round2, subtract_floor_zero


def test_round2_rounds_half_up():
    """Half cents round away from zero, not to even."""
    assert round2(Decimal("0.125")) == Decimal("0.13")
    assert round2(Decimal("0.135")) == Decimal("0.14")
    assert round2(Decimal("2.5")) == Decimal("2.50")
    assert round2("33.333") == Decimal("33.33")


def test_round2_rejects_floats():
    with pytest.raises(TypeError):
        round2(0.1)


def test_money_sum_has_no_drift():
    """A thousand ten-cent additions are exactly 100.00."""
    total = money_sum([Money.of("0.10", "TRY")] * 1000)
    assert total == Money.of("100.00", "TRY")


def test_money_sum_rejects_mixed_currencies():
    with pytest.raises(InvalidCurrency):
        money_sum([Money.of(1, "TRY"), Money.of(1, "USD")])


def test_money_sum_empty_needs_currency():
    assert money_sum([], currency="EUR") == Money.zero("EUR")
    with pytest.raises(InvalidCurrency):
        money_sum([])


def test_money_addition_checks_currency():
    assert Money.of("1.50", "USD") + Money.of("2.25", "USD") == Money.of("3.75", "USD")
    with pytest.raises(InvalidCurrency):
        Money.of(1, "USD") + Money.of(1, "GBP")


def test_money_validation():
    """Negative amounts and sub-cent precision are rejected; codes are upper-cased."""
    with pytest.raises(ValidationError):
        Money(amount=Decimal("-1"), currency="TRY")
    with pytest.raises(ValidationError):
        Money(amount=Decimal("1.005"), currency="TRY")
    assert Money(amount=Decimal("1.5"), currency="try").currency == "TRY"


def test_subtract_floor_zero():
    assert subtract_floor_zero(Money.of(200, "TRY"), Money.of(250, "TRY")).amount == Decimal("0.00")
    assert subtract_floor_zero(Money.of(200, "TRY"), Money.of(50, "TRY")).amount == Decimal("150.00")


def test_check_supported():
    assert check_supported("usd", ["TRY", "USD"]) == "USD"
    with pytest.raises(InvalidCurrency):
        check_supported("JPY", ["TRY", "USD"])

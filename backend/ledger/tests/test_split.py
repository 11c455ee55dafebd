"""
Tests for split allocation.
"""
import pytest
from decimal import Decimal
from ledger.core.exceptions import AmountMismatch, DuplicateParticipant, EmptyParticipants, InvalidCurrency
from ledger.core.money import Money
from ledger.models.group import SplitMethod
from ledger.services.split_service import (
    allocate_by_percentage,
    allocate_equal,
    allocate_split,
    allocate_with_method,
    validate_custom_split,
)


def _amounts(shares):
    return [share.amount for share in shares.values()]


def test_equal_split_three_ways():
    """100.00 between three people: the first participant takes the extra cent."""
    shares = allocate_equal(Money.of("100.00", "TRY"), ["a", "b", "c"])
    assert list(shares) == ["a", "b", "c"]
    assert _amounts(shares) == [Decimal("33.34"), Decimal("33.33"), Decimal("33.33")]


def test_equal_split_negative_remainder():
    """0.05 between three rounds the base up to 0.02, so a cent is taken back in order."""
    shares = allocate_equal(Money.of("0.05", "TRY"), ["a", "b", "c"])
    assert _amounts(shares) == [Decimal("0.01"), Decimal("0.02"), Decimal("0.02")]


@pytest.mark.parametrize("amount", ["0.01", "10.00", "99.99", "100.00", "1234.57", "999999999.99"])
@pytest.mark.parametrize("count", [1, 2, 3, 6, 7, 11])
def test_equal_split_conserves_amount(amount, count):
    total = Money.of(amount, "USD")
    participants = [f"user{i}" for i in range(count)]
    shares = allocate_equal(total, participants)
    assert sum(_amounts(shares)) == total.amount
    assert all(share.currency == "USD" for share in shares.values())
    assert max(_amounts(shares)) - min(_amounts(shares)) <= Decimal("0.01")


def test_equal_split_is_deterministic():
    first = allocate_equal(Money.of("10.00", "TRY"), ["x", "y", "z"])
    second = allocate_equal(Money.of("10.00", "TRY"), ["x", "y", "z"])
    assert first == second
    assert first["x"].amount == Decimal("3.34")


def test_equal_split_order_decides_remainder():
    shares = allocate_equal(Money.of("10.00", "TRY"), ["z", "y", "x"])
    assert shares["z"].amount == Decimal("3.34")
    assert shares["x"].amount == Decimal("3.33")


def test_empty_participants():
    with pytest.raises(EmptyParticipants):
        allocate_equal(Money.of(10, "TRY"), [])


def test_duplicate_participant():
    with pytest.raises(DuplicateParticipant) as exc_info:
        allocate_equal(Money.of(10, "TRY"), ["a", "b", "a"])
    assert exc_info.value.participant_id == "a"


def test_custom_split_is_returned_unmodified():
    explicit = {"a": Money.of("70.00", "TRY"), "b": Money.of("30.00", "TRY")}
    assert validate_custom_split(Money.of("100.00", "TRY"), explicit) == explicit


def test_custom_split_mismatch():
    with pytest.raises(AmountMismatch):
        validate_custom_split(
            Money.of("100.00", "TRY"),
            {"a": Money.of("70.00", "TRY"), "b": Money.of("29.99", "TRY")},
        )


def test_custom_split_duplicate_pairs():
    with pytest.raises(DuplicateParticipant):
        validate_custom_split(
            Money.of("10.00", "TRY"),
            [("a", Money.of("5.00", "TRY")), ("a", Money.of("5.00", "TRY"))],
        )


def test_custom_split_currency_mismatch():
    with pytest.raises(InvalidCurrency):
        validate_custom_split(Money.of("10.00", "TRY"), {"a": Money.of("10.00", "USD")})


def test_percentage_split():
    shares = allocate_by_percentage(
        Money.of("100.00", "TRY"),
        {"a": Decimal("50"), "b": Decimal("30"), "c": Decimal("20")},
    )
    assert _amounts(shares) == [Decimal("50.00"), Decimal("30.00"), Decimal("20.00")]


def test_percentage_split_distributes_remainder():
    """Thirds of 10.00 round to 3.33 each; the missing cent goes to the first participant."""
    shares = allocate_by_percentage(
        Money.of("10.00", "TRY"),
        [("a", Decimal("33.34")), ("b", Decimal("33.33")), ("c", Decimal("33.33"))],
    )
    assert sum(_amounts(shares)) == Decimal("10.00")
    assert shares["a"].amount == Decimal("3.34")


def test_percentage_split_zero_weight_never_goes_negative():
    shares = allocate_by_percentage(
        Money.of("0.05", "TRY"),
        [("zero", Decimal("0")), ("a", Decimal("50")), ("b", Decimal("50"))],
    )
    assert shares["zero"].amount == Decimal("0.00")
    assert sum(_amounts(shares)) == Decimal("0.05")


@pytest.mark.parametrize("weights", [
    {"a": Decimal("50"), "b": Decimal("49.99")},
    {"a": Decimal("60"), "b": Decimal("50")},
    {"a": Decimal("110"), "b": Decimal("-10")},
])
def test_percentage_split_must_sum_to_100(weights):
    with pytest.raises(AmountMismatch):
        allocate_by_percentage(Money.of("100.00", "TRY"), weights)


def test_allocate_split_dispatch():
    amount = Money.of("9.00", "TRY")
    assert _amounts(allocate_split(amount, ["a", "b"])) == [Decimal("4.50"), Decimal("4.50")]
    assert _amounts(allocate_split(amount, percentages={"a": 100})) == [Decimal("9.00")]
    assert allocate_split(amount, explicit_amounts={"a": amount}) == {"a": amount}
    with pytest.raises(ValueError):
        allocate_split(amount, ["a"], percentages={"a": 100})
    with pytest.raises(ValueError):
        allocate_split(amount)


def test_allocate_with_method():
    amount = Money.of("10.00", "TRY")
    assert len(allocate_with_method(SplitMethod.EQUAL, amount, ["a", "b", "c"])) == 3
    assert allocate_with_method("percentage", amount, [], percentages={"a": 25, "b": 75})["b"].amount == Decimal("7.50")
    with pytest.raises(AmountMismatch):
        allocate_with_method(SplitMethod.CUSTOM, amount, ["a"])

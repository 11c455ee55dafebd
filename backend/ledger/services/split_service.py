"""
Split allocation for shared expenses.

Every allocator returns an ordered ``{participant_id: Money}`` mapping whose
values add up to the expense amount exactly.
"""
from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union
import logging

from ledger.core.exceptions import AmountMismatch, DuplicateParticipant, EmptyParticipants
from ledger.core.money import MINOR_UNIT, Money, money_sum, round2, to_decimal
from ledger.models.group import SplitMethod

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)

AmountPairs = Union[Mapping[str, Money], Iterable[Tuple[str, Money]]]
PercentPairs = Union[Mapping[str, Decimal], Iterable[Tuple[str, Decimal]]]


def check_participants(participants: Sequence[str]) -> None:
    if not participants:
        raise EmptyParticipants("At least one participant is required to split an expense")
    seen = set()
    for participant_id in participants:
        if participant_id in seen:
            raise DuplicateParticipant(participant_id)
        seen.add(participant_id)


def _pairs(items) -> list:
    if isinstance(items, Mapping):
        return list(items.items())
    return list(items)


def _distribute_remainder(
    shares: Dict[str, Decimal],
    remainder: Decimal,
    eligible: Optional[Sequence[str]] = None,
) -> None:
    """Hand out (or take back) the remainder one minimal unit at a time, in order."""
    order = list(eligible) if eligible else list(shares)
    step = MINOR_UNIT if remainder > 0 else -MINOR_UNIT
    i = 0
    while remainder != 0:
        participant_id = order[i % len(order)]
        i += 1
        # Shares never go below zero when taking units back
        if step < 0 and shares[participant_id] <= 0:
            continue
        shares[participant_id] += step
        remainder -= step


def allocate_equal(amount: Money, participants: Sequence[str]) -> Dict[str, Money]:
    """
    Split ``amount`` equally between ``participants``.

    Each participant gets ``round2(amount / n)``; the rounding discrepancy is
    then distributed one cent at a time starting with the first participant.
    100.00 between three people gives 33.34, 33.33, 33.33.
    """
    participants = list(participants)
    check_participants(participants)

    total = amount.amount
    count = len(participants)
    base = round2(total / count)
    shares = {participant_id: base for participant_id in participants}
    _distribute_remainder(shares, total - base * count)

    return {pid: Money(amount=value, currency=amount.currency) for pid, value in shares.items()}


def validate_custom_split(amount: Money, explicit_amounts: AmountPairs) -> Dict[str, Money]:
    """
    Check caller-supplied shares without modifying them.

    Raises AmountMismatch unless the shares add up to ``amount`` exactly.
    """
    pairs = _pairs(explicit_amounts)
    check_participants([participant_id for participant_id, _ in pairs])

    total = money_sum((share for _, share in pairs), currency=amount.currency)
    if total.amount != amount.amount:
        raise AmountMismatch(
            f"Split amounts add up to {total.amount} but the expense is {amount.amount}"
        )
    return dict(pairs)


def allocate_by_percentage(amount: Money, percentages: PercentPairs) -> Dict[str, Money]:
    """
    Split ``amount`` by percentage weights that must sum to exactly 100.

    Each share is ``round2(amount * p / 100)``; the rounding discrepancy is
    distributed like the equal split.
    """
    pairs = [(participant_id, to_decimal(p)) for participant_id, p in _pairs(percentages)]
    check_participants([participant_id for participant_id, _ in pairs])

    if any(p < 0 for _, p in pairs):
        raise AmountMismatch("Split percentages must not be negative")
    weight_total = sum((p for _, p in pairs), Decimal(0))
    if weight_total != HUNDRED:
        raise AmountMismatch(f"Split percentages add up to {weight_total}, expected 100")

    total = amount.amount
    shares = {participant_id: round2(total * p / HUNDRED) for participant_id, p in pairs}
    weighted = [participant_id for participant_id, p in pairs if p > 0]
    _distribute_remainder(shares, total - sum(shares.values(), Decimal(0)), eligible=weighted)

    return {pid: Money(amount=value, currency=amount.currency) for pid, value in shares.items()}


def allocate_split(
    amount: Money,
    participants: Optional[Sequence[str]] = None,
    explicit_amounts: Optional[AmountPairs] = None,
    percentages: Optional[PercentPairs] = None,
) -> Dict[str, Money]:
    """Allocate a split from exactly one of participants, explicit amounts or percentages."""
    provided = [x is not None for x in (participants, explicit_amounts, percentages)]
    if sum(provided) != 1:
        raise ValueError("Provide exactly one of participants, explicit_amounts or percentages")

    if explicit_amounts is not None:
        return validate_custom_split(amount, explicit_amounts)
    if percentages is not None:
        return allocate_by_percentage(amount, percentages)
    return allocate_equal(amount, participants)


def allocate_with_method(
    method: SplitMethod,
    amount: Money,
    participants: Sequence[str],
    explicit_amounts: Optional[AmountPairs] = None,
    percentages: Optional[PercentPairs] = None,
) -> Dict[str, Money]:
    """Allocate using a group's configured split method."""
    method = SplitMethod(method)
    logger.debug(f"Allocating {amount} between {len(participants)} participants using {method.value} split")
    if method == SplitMethod.CUSTOM:
        if explicit_amounts is None:
            raise AmountMismatch("Custom split requires explicit amounts")
        return validate_custom_split(amount, explicit_amounts)
    if method == SplitMethod.PERCENTAGE:
        if percentages is None:
            raise AmountMismatch("Percentage split requires percentages")
        return allocate_by_percentage(amount, percentages)
    return allocate_equal(amount, participants)

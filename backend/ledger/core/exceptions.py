"""
Error kinds raised by the ledger engine.

Every error is a ``ValueError`` so callers that only care about bad input can
catch that; the engine itself never logs or retries them.
"""


class LedgerError(ValueError):
    """Base class for all ledger computation errors."""
    code = "ledger_error"


class AmountMismatch(LedgerError):
    """Explicit split amounts (or percentages) do not add up to the total."""
    code = "amount_mismatch"


class EmptyParticipants(LedgerError):
    """A split was requested with nobody to split between."""
    code = "empty_participants"


class DuplicateParticipant(LedgerError):
    """The same participant appears more than once in a split."""
    code = "duplicate_participant"

    def __init__(self, participant_id: str):
        super().__init__(f"Participant {participant_id} appears more than once")
        self.participant_id = participant_id


class InvalidCurrency(LedgerError):
    """Money values with different (or unsupported) currency codes were combined."""
    code = "invalid_currency"


class InvalidDateRange(LedgerError):
    """A budget window whose end is not after its start."""
    code = "invalid_date_range"


class MemberNotFound(LedgerError):
    """No active membership record exists for the user."""
    code = "member_not_found"

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} is not an active member of this group")
        self.user_id = user_id


class RecurrenceMisconfigured(LedgerError):
    """Recurring expense with a non-positive interval or no frequency."""
    code = "recurrence_misconfigured"


class CategoryCycle(LedgerError):
    """Assigning the parent would make a category its own ancestor."""
    code = "category_cycle"


class InviteCodeExhausted(LedgerError):
    """Every generated invite code collided with an existing one."""
    code = "invite_code_exhausted"


class CategoryNotFound(LedgerError):
    """A category (or the requested parent) is not in the forest."""
    code = "category_not_found"


class DuplicateCategory(LedgerError):
    """Two categories share the same id."""
    code = "duplicate_category"


class InvalidBudgetAmount(LedgerError):
    """A budget whose amount is not greater than zero."""
    code = "invalid_budget_amount"


class InvalidTransition(LedgerError):
    """A manual status change not allowed from the record's current state."""
    code = "invalid_transition"

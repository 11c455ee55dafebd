"""
Group membership, roles and invite codes.

Membership operations update the Group passed in and recompute
``stats.member_count`` from the roster every time.
"""
from datetime import datetime
from typing import Callable, Iterable, List, Optional
import logging
import secrets

from ledger.core.config import LedgerDefaults, get_defaults
from ledger.core.exceptions import InviteCodeExhausted, MemberNotFound
from ledger.core.money import money_sum
from ledger.core.utils import to_utc_naive
from ledger.models.expense import Expense
from ledger.models.group import Group, GroupMember, GroupSettings, MemberRole
from ledger.models.lifecycle import is_active

logger = logging.getLogger(__name__)

# Upper-case letters and digits without look-alikes (0/O, 1/I/L)
INVITE_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"


def _find(group: Group, user_id: str) -> Optional[GroupMember]:
    for member in group.members:
        if member.user_id == user_id:
            return member
    return None


def active_members(group: Group) -> List[GroupMember]:
    return [member for member in group.members if member.is_active]


def admin_members(group: Group) -> List[GroupMember]:
    return [member for member in active_members(group) if member.role == MemberRole.ADMIN]


def recompute_member_count(group: Group) -> int:
    group.stats.member_count = len(active_members(group))
    return group.stats.member_count


def add_member(
    group: Group,
    user_id: str,
    now: datetime,
    role: MemberRole = MemberRole.MEMBER,
) -> GroupMember:
    """
    Add ``user_id`` to the roster and return its record.

    An inactive record is reactivated with a fresh ``joined_at``; an active
    record is returned unchanged.
    """
    member = _find(group, user_id)
    if member is None:
        member = GroupMember(user_id=user_id, role=MemberRole(role), joined_at=now, is_active=True)
        group.members.append(member)
        logger.debug(f"Added {user_id} to group {group.id} as {member.role.value}")
    elif not member.is_active:
        member.is_active = True
        member.joined_at = to_utc_naive(now)
        logger.debug(f"Reactivated {user_id} in group {group.id}")

    recompute_member_count(group)
    return member


def remove_member(group: Group, user_id: str) -> GroupMember:
    """Mark the active record inactive. The record stays in the roster."""
    member = _find(group, user_id)
    if member is None or not member.is_active:
        raise MemberNotFound(user_id)

    member.is_active = False
    recompute_member_count(group)
    return member


def is_member(group: Group, user_id: str) -> bool:
    member = _find(group, user_id)
    return member is not None and member.is_active


def is_admin(group: Group, user_id: str) -> bool:
    member = _find(group, user_id)
    return member is not None and member.is_active and member.role == MemberRole.ADMIN


def require_member(group: Group, user_id: str, role: Optional[MemberRole] = None) -> GroupMember:
    """Return the active record, raising MemberNotFound if absent or lacking ``role``."""
    member = _find(group, user_id)
    if member is None or not member.is_active:
        raise MemberNotFound(user_id)
    if role is not None and member.role != MemberRole(role):
        raise MemberNotFound(user_id)
    return member


def change_role(group: Group, user_id: str, role: MemberRole) -> GroupMember:
    member = require_member(group, user_id)
    member.role = MemberRole(role)
    return member


def generate_invite_code(length: Optional[int] = None) -> str:
    """Short random code from a cryptographic source."""
    length = length or get_defaults().invite_code_length
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def issue_invite_code(
    is_taken: Callable[[str], bool],
    defaults: Optional[LedgerDefaults] = None,
) -> str:
    """
    Generate a code the caller's uniqueness check accepts.

    ``is_taken`` should consult the store's unique index; the caller must still
    rely on that constraint when persisting.
    """
    defaults = defaults or get_defaults()
    for _ in range(defaults.invite_code_attempts):
        code = generate_invite_code(defaults.invite_code_length)
        if not is_taken(code):
            return code
    raise InviteCodeExhausted(
        f"No free invite code after {defaults.invite_code_attempts} attempts"
    )


def create_group(
    name: str,
    created_by: str,
    now: datetime,
    member_ids: Iterable[str] = (),
    is_taken: Optional[Callable[[str], bool]] = None,
    defaults: Optional[LedgerDefaults] = None,
    **fields,
) -> Group:
    """
    Create a group with the creator as admin and a one-time invite code.

    Extra keyword arguments (description, icon, color, is_public) pass through
    to the Group model.
    """
    defaults = defaults or get_defaults()
    fields.setdefault("icon", defaults.default_group_icon)
    fields.setdefault("color", defaults.default_color)
    group = Group(
        name=name,
        created_by=created_by,
        settings=GroupSettings(
            default_currency=defaults.default_currency,
            split_method=defaults.default_split_method,
        ),
        **fields,
    )
    add_member(group, created_by, now, role=MemberRole.ADMIN)
    for user_id in member_ids:
        add_member(group, user_id, now)

    group.invite_code = issue_invite_code(is_taken or (lambda code: False), defaults)
    group.stats.last_activity = to_utc_naive(now)
    return group


def refresh_group_stats(group: Group, expenses: Iterable[Expense], now: datetime) -> Group:
    """Recompute expense totals from the group's active expenses."""
    group_expenses = [
        expense for expense in expenses
        if expense.group_id == group.id and is_active(expense.lifecycle)
    ]
    total = money_sum((expense.amount for expense in group_expenses), currency=group.settings.default_currency)

    group.stats.total_expenses = len(group_expenses)
    group.stats.total_amount = total.amount
    group.stats.last_activity = to_utc_naive(now)
    recompute_member_count(group)
    return group

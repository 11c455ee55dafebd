"""
Pydantic schemas for group membership.
"""
from pydantic import BaseModel
from typing import Optional
from ledger.core.utils import UtcDatetime
from ledger.models.group import Group, GroupMember, MemberRole


class MemberRequest(BaseModel):
    """Schema for membership changes against a supplied roster."""
    group: Group
    user_id: str
    role: MemberRole = MemberRole.MEMBER
    now: Optional[UtcDatetime] = None  # Required when adding


class MemberResponse(BaseModel):
    group: Group
    member: GroupMember


class MembershipCheck(BaseModel):
    user_id: str
    is_member: bool
    is_admin: bool


class InviteCodeResponse(BaseModel):
    invite_code: str

"""
Group membership routes.

The caller sends the current roster and persists the returned one.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from ledger.api.dependencies import get_ledger_defaults, ledger_errors
from ledger.core.config import LedgerDefaults
from ledger.schemas.group import InviteCodeResponse, MemberRequest, MemberResponse, MembershipCheck
from ledger.services import group_service

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("/members/add", response_model=MemberResponse)
async def add_member(request: MemberRequest):
    """Add or reactivate a member."""
    if request.now is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="now is required when adding a member"
        )
    group = request.group
    member = group_service.add_member(group, request.user_id, request.now, role=request.role)
    return MemberResponse(group=group, member=member)


@router.post("/members/remove", response_model=MemberResponse)
async def remove_member(request: MemberRequest):
    """Deactivate a member. The record stays in the roster."""
    group = request.group
    with ledger_errors():
        member = group_service.remove_member(group, request.user_id)
    return MemberResponse(group=group, member=member)


@router.post("/members/check", response_model=MembershipCheck)
async def check_member(request: MemberRequest):
    """Report whether the user is an active member and/or admin."""
    return MembershipCheck(
        user_id=request.user_id,
        is_member=group_service.is_member(request.group, request.user_id),
        is_admin=group_service.is_admin(request.group, request.user_id)
    )


@router.post("/invite-code", response_model=InviteCodeResponse)
async def invite_code(defaults: LedgerDefaults = Depends(get_ledger_defaults)):
    """Generate a fresh invite code; uniqueness is enforced by the caller's store."""
    return InviteCodeResponse(invite_code=group_service.generate_invite_code(defaults.invite_code_length))

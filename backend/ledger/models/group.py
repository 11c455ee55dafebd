"""
Group model for shared expense management.
"""
from decimal import Decimal
from typing import List, Optional
import enum

from pydantic import BaseModel, Field, model_validator

from ledger.core.utils import UtcDatetime
from ledger.models.lifecycle import Active, Lifecycle


class MemberRole(str, enum.Enum):
    ADMIN = "admin"
    MEMBER = "member"


class SplitMethod(str, enum.Enum):
    EQUAL = "equal"
    PERCENTAGE = "percentage"
    CUSTOM = "custom"


class GroupMember(BaseModel):
    """Membership record. Deactivated on leave, never removed from the roster."""
    user_id: str
    role: MemberRole = MemberRole.MEMBER
    joined_at: UtcDatetime
    is_active: bool = True


class NotificationPreferences(BaseModel):
    new_expense: bool = True
    new_member: bool = True
    expense_reminder: bool = False


class GroupSettings(BaseModel):
    allow_member_invites: bool = True
    require_approval_for_expenses: bool = False
    default_currency: str = "TRY"
    split_method: SplitMethod = SplitMethod.EQUAL
    notifications: NotificationPreferences = NotificationPreferences()


class GroupStats(BaseModel):
    member_count: int = 0  # Always derived from members
    total_expenses: int = 0
    total_amount: Decimal = Decimal("0.00")
    last_activity: Optional[UtcDatetime] = None


class Group(BaseModel):
    """A set of users sharing expenses."""
    id: Optional[str] = None
    name: str = Field(max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    icon: str = "👥"
    color: str = Field(default="#3B82F6", pattern=r"^#[0-9A-Fa-f]{6}$")

    members: List[GroupMember] = []
    created_by: str

    settings: GroupSettings = GroupSettings()
    stats: GroupStats = GroupStats()

    lifecycle: Lifecycle = Active()
    is_public: bool = False
    invite_code: Optional[str] = None

    @model_validator(mode="after")
    def check_roster(self) -> "Group":
        """One record per user; member_count is derived from active records."""
        seen = set()
        for member in self.members:
            if member.user_id in seen:
                raise ValueError(f"User {member.user_id} has more than one membership record")
            seen.add(member.user_id)
        self.stats.member_count = sum(1 for member in self.members if member.is_active)
        return self

"""
Notification drafts handed to the delivery collaborator.
"""
from typing import Optional
import enum

from pydantic import BaseModel, Field

from ledger.core.utils import UtcDatetime


class NotificationType(str, enum.Enum):
    EXPENSE = "expense"
    GROUP = "group"
    BUDGET = "budget"
    SYSTEM = "system"
    REMINDER = "reminder"


DEFAULT_ICONS = {
    NotificationType.EXPENSE: "💰",
    NotificationType.GROUP: "👥",
    NotificationType.BUDGET: "📊",
    NotificationType.SYSTEM: "⚙️",
    NotificationType.REMINDER: "⏰",
}


class NotificationDraft(BaseModel):
    """Notification record the caller persists and delivers."""
    user_id: str
    title: str = Field(max_length=100)
    message: str = Field(max_length=500)
    type: NotificationType
    related_id: Optional[str] = None
    related_type: Optional[str] = None
    icon: str = "🔔"
    action_url: Optional[str] = None
    expires_at: UtcDatetime

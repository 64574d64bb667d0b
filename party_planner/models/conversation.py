# Role: Canonical party-planning conversation snapshot. This is the "source of truth" the engine reads from;
# the engine never mutates it and instead returns a StatePatch that apply_patch() merges into a new snapshot.

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class PartyType(str, Enum):
    BACHELOR = "bachelor"
    BACHELORETTE = "bachelorette"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class City(str, Enum):
    BANGKOK = "bangkok"
    PATTAYA = "pattaya"
    PHUKET = "phuket"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ActivityPreference(str, Enum):
    ACTIVITIES = "activities"
    PACKAGE = "package"
    NIGHTLIFE = "nightlife"


class ConversationStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class StatePatch(BaseModel):
    """Subset of ConversationState fields changed by one turn.

    Only explicitly assigned fields count as changes (see changes()).
    """

    party_type: Optional[PartyType] = None
    city: Optional[City] = None
    activity_preference: Optional[ActivityPreference] = None
    party_name: Optional[str] = None
    guest_count: Optional[int] = Field(default=None, gt=0)
    budget: Optional[Decimal] = Field(default=None, gt=0)
    party_dates: Optional[str] = None
    status: Optional[ConversationStatus] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set


class ConversationState(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None

    party_type: Optional[PartyType] = None
    city: Optional[City] = None
    activity_preference: Optional[ActivityPreference] = None
    party_name: Optional[str] = None
    guest_count: Optional[int] = Field(default=None, gt=0)
    # Key line: per-guest amount, kept as Decimal so "5000.50" survives unchanged.
    budget: Optional[Decimal] = Field(default=None, gt=0)
    party_dates: Optional[str] = None

    # Free-form extras owned by the caller; the engine never reads or writes them.
    theme: Optional[str] = None
    preferences: Optional[str] = None

    status: ConversationStatus = ConversationStatus.ACTIVE

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def apply_patch(self, patch: StatePatch) -> "ConversationState":
        # Snapshot semantics: return a new state, leave self untouched.
        changes = patch.changes()
        if not changes:
            return self
        return self.model_copy(update=changes)

    @property
    def is_completed(self) -> bool:
        return self.status == ConversationStatus.COMPLETED

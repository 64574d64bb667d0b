# Role: The single ordered slot list. Both "which question is next" and "which answer are we reading"
# derive from SLOT_ORDER, so asking and interpreting can never disagree about ordering.

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from party_planner.models.conversation import ConversationState


class Slot(str, Enum):
    PARTY_TYPE = "party_type"
    CITY = "city"
    ACTIVITY_PREFERENCE = "activity_preference"
    PARTY_NAME = "party_name"
    GUEST_COUNT = "guest_count"
    BUDGET = "budget"
    PARTY_DATES = "party_dates"


SLOT_ORDER: Tuple[Slot, ...] = (
    Slot.PARTY_TYPE,
    Slot.CITY,
    Slot.ACTIVITY_PREFERENCE,
    Slot.PARTY_NAME,
    Slot.GUEST_COUNT,
    Slot.BUDGET,
    Slot.PARTY_DATES,
)


def is_filled(state: ConversationState, slot: Slot) -> bool:
    value = getattr(state, slot.value)
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def first_unset_slot(state: ConversationState) -> Optional[Slot]:
    # Key line: re-scan every call instead of storing a cursor (self-healing against missed updates).
    for slot in SLOT_ORDER:
        if not is_filled(state, slot):
            return slot
    return None


def filled_in_order(state: ConversationState) -> bool:
    """True when no slot is filled while an earlier one is still unset."""
    seen_gap = False
    for slot in SLOT_ORDER:
        if not is_filled(state, slot):
            seen_gap = True
        elif seen_gap:
            return False
    return True

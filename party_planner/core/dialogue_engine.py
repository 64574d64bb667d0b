# Role: Slot-filling state machine for one turn. Pure function of (ConversationState, Turn) -> EngineResult:
# read the answer for the first unset slot, then ask the next question or emit the completion summary.

from __future__ import annotations

from typing import Any, Dict, Optional

import party_planner.config as config
from party_planner.core.errors import ValidationRejected
from party_planner.core.slots import Slot, first_unset_slot
from party_planner.models.conversation import ConversationState, ConversationStatus, StatePatch
from party_planner.models.metadata import ActivityCard, MessageMetadata, RichMedia
from party_planner.models.result import EngineResult, ResponseKind
from party_planner.models.turn import Turn
from party_planner.utils.clarification import build_slot_question
from party_planner.utils.extractors import SLOT_PARSERS
from party_planner.utils.formatting import format_amount, json_number

CLOSING_MESSAGE = "Your party planning is complete! I'll be in touch with your personalized itinerary soon."


class DialogueEngine:
    """
    Scripted slot-filling dialogue.

    No hidden state: every decision derives from the slots already filled in the snapshot.
    The returned state_patch is the only thing the caller needs to persist.
    """

    def apply_turn(self, state: ConversationState, turn: Turn) -> EngineResult:
        # 1) Completed conversations only get the closing acknowledgment
        # 2) Interpret the turn as the answer to the first unset slot
        # 3) Recompute the first unset slot -> ask it, or complete
        if state.status == ConversationStatus.COMPLETED:
            return EngineResult(response_text=CLOSING_MESSAGE)

        asked = first_unset_slot(state)
        if asked is None:
            # All slots set but status never flipped (e.g. hand-edited snapshot): nothing left to ask.
            return EngineResult(response_text=CLOSING_MESSAGE)

        changes: Dict[str, Any] = {}
        rejected: Optional[ValidationRejected] = None
        try:
            changes[asked.value] = SLOT_PARSERS[asked](turn.text)
        except ValidationRejected as e:
            rejected = e

        if asked == Slot.PARTY_DATES and rejected is None:
            # Key line: status flips in the same call that accepts party_dates, and only then.
            changes["status"] = ConversationStatus.COMPLETED

        patch = StatePatch(**changes)
        updated = state.apply_patch(patch)

        if config.DEBUG:
            print("\n--- DIALOGUE ENGINE ---")
            print("ASKED SLOT:", asked.value)
            print("TURN:", turn.text, f"({turn.message_type.value})")
            print("REJECTED:", rejected.reason if rejected else None)
            print("PATCH:", patch.changes())
            print("-----------------------\n")

        next_slot = first_unset_slot(updated)
        if next_slot is None:
            return self._completion(updated, patch)

        question = build_slot_question(next_slot, updated, retry=rejected is not None)
        metadata = MessageMetadata(quick_replies=question.quick_replies) if question.quick_replies else None
        return EngineResult(
            response_text=question.text,
            response_kind=ResponseKind.QUICK_REPLY if metadata else ResponseKind.TEXT,
            metadata=metadata,
            state_patch=patch,
            next_prompt_hint=question.hint,
        )

    def _completion(self, state: ConversationState, patch: StatePatch) -> EngineResult:
        # Role: summary of everything collected + placeholder card until the itinerary is generated.
        party_label = state.party_type.label if state.party_type else "Bachelor"
        city_label = state.city.label if state.city else "Thailand"
        focus = state.activity_preference.value if state.activity_preference else "experiences"
        budget = format_amount(state.budget) if state.budget is not None else "Budget"

        text = (
            f"Fantastic! I have all the details for {state.party_name}:\n\n"
            f"🎉 {party_label} Party in {city_label}\n"
            f"👥 {state.guest_count} guests\n"
            f"💰 {budget} per person\n"
            f"📅 {state.party_dates}\n"
            f"🎯 Focus: {focus}\n\n"
            "I'm now preparing personalized recommendations for your group. "
            "You'll receive a detailed itinerary shortly!"
        )

        card = ActivityCard(
            name="Custom Itinerary",
            description="Personalized recommendations being prepared",
            cost=json_number(state.budget) if state.budget is not None else None,
        )
        return EngineResult(
            response_text=text,
            response_kind=ResponseKind.RICH_MEDIA,
            metadata=MessageMetadata(rich_media=RichMedia(activities=[card])),
            state_patch=patch,
            auto_continue=False,
        )

#!/usr/bin/env python3
"""Slot-filling dialogue: ordering, validation re-asks, completion."""

import sys
import unittest
from decimal import Decimal
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from party_planner.core.dialogue_engine import CLOSING_MESSAGE, DialogueEngine  # noqa: E402
from party_planner.core.slots import SLOT_ORDER, filled_in_order, first_unset_slot  # noqa: E402
from party_planner.models.conversation import (  # noqa: E402
    ActivityPreference,
    City,
    ConversationState,
    ConversationStatus,
    PartyType,
)
from party_planner.models.result import ResponseKind  # noqa: E402
from party_planner.models.turn import MessageType, Turn  # noqa: E402


def _almost_done() -> ConversationState:
    return ConversationState(
        party_type=PartyType.BACHELOR,
        city=City.BANGKOK,
        activity_preference=ActivityPreference.NIGHTLIFE,
        party_name="Mike's Last Stand",
        guest_count=8,
        budget=Decimal("5000"),
    )


class DialogueEngineTests(unittest.TestCase):
    def setUp(self):
        self.engine = DialogueEngine()

    def test_party_type_then_city_question(self):
        result = self.engine.apply_turn(ConversationState(), Turn(text="Bachelor Party", message_type=MessageType.QUICK_REPLY))
        self.assertEqual(result.state_patch.changes(), {"party_type": PartyType.BACHELOR})
        self.assertIn("Which city", result.response_text)
        self.assertEqual(result.response_kind, ResponseKind.QUICK_REPLY)
        self.assertEqual(result.metadata.quick_replies, ["Bangkok", "Pattaya", "Phuket"])
        self.assertFalse(result.auto_continue)

    def test_greeting_repeats_party_type_question(self):
        result = self.engine.apply_turn(ConversationState(), Turn(text="Hello"))
        self.assertTrue(result.state_patch.is_empty())
        self.assertIn("What type of celebration", result.response_text)
        self.assertEqual(result.metadata.quick_replies, ["Bachelor Party", "Bachelorette Party"])
        self.assertIn("type of party", result.next_prompt_hint)

    def test_unknown_city_repeats_city_question(self):
        state = ConversationState(party_type=PartyType.BACHELORETTE)
        result = self.engine.apply_turn(state, Turn(text="Chiang Mai"))
        self.assertTrue(result.state_patch.is_empty())
        self.assertIn("Which city", result.response_text)
        self.assertEqual(result.metadata.quick_replies, ["Bangkok", "Pattaya", "Phuket"])

    def test_city_answer_asks_activity_with_capitalized_city(self):
        state = ConversationState(party_type=PartyType.BACHELOR)
        result = self.engine.apply_turn(state, Turn(text="bangkok"))
        self.assertEqual(result.state_patch.city, City.BANGKOK)
        self.assertIn("Bangkok is an amazing destination", result.response_text)
        self.assertEqual(
            result.metadata.quick_replies,
            ["Adventure Activities", "Complete Package", "Nightlife Focus"],
        )

    def test_free_text_questions_have_no_quick_replies(self):
        state = ConversationState(party_type=PartyType.BACHELOR, city=City.PHUKET)
        result = self.engine.apply_turn(state, Turn(text="Adventure Activities"))
        self.assertEqual(result.state_patch.activity_preference, ActivityPreference.ACTIVITIES)
        self.assertIn("call this party", result.response_text)
        self.assertIsNone(result.metadata)
        self.assertEqual(result.response_kind, ResponseKind.TEXT)

    def test_guest_count_accepts_leading_integer(self):
        state = _almost_done().model_copy(update={"guest_count": None, "budget": None})
        result = self.engine.apply_turn(state, Turn(text="8 people"))
        self.assertEqual(result.state_patch.changes(), {"guest_count": 8})
        self.assertIn("budget", result.response_text.lower())

    def test_guest_count_rejection_repeats_question(self):
        state = _almost_done().model_copy(update={"guest_count": None, "budget": None})
        result = self.engine.apply_turn(state, Turn(text="not a number"))
        self.assertTrue(result.state_patch.is_empty())
        self.assertIn("valid number of guests", result.response_text)
        self.assertIn("How many people", result.response_text)

    def test_budget_acceptance_and_rejection(self):
        state = _almost_done().model_copy(update={"budget": None})

        ok = self.engine.apply_turn(state, Turn(text="$5,000.50"))
        self.assertEqual(ok.state_patch.budget, Decimal("5000.50"))
        self.assertNotIn("status", ok.state_patch.changes())
        self.assertIn("When are you planning", ok.response_text)

        bad = self.engine.apply_turn(state, Turn(text="free"))
        self.assertTrue(bad.state_patch.is_empty())
        self.assertIn("valid budget", bad.response_text)

    def test_dates_complete_the_conversation(self):
        result = self.engine.apply_turn(_almost_done(), Turn(text="March 15-17"))
        self.assertEqual(
            result.state_patch.changes(),
            {"party_dates": "March 15-17", "status": ConversationStatus.COMPLETED},
        )
        self.assertEqual(result.response_kind, ResponseKind.RICH_MEDIA)
        for expected in ("Mike's Last Stand", "Bangkok", "Bachelor", "8", "5000", "March 15-17"):
            self.assertIn(expected, result.response_text)
        card = result.metadata.rich_media.activities[0]
        self.assertEqual(card.name, "Custom Itinerary")
        self.assertEqual(card.cost, 5000)
        self.assertIsInstance(card.cost, int)
        self.assertNotIn("5000.0", result.metadata.to_json())

    def test_completed_conversation_is_closed(self):
        done = _almost_done().model_copy(
            update={"party_dates": "March 15-17", "status": ConversationStatus.COMPLETED}
        )
        result = self.engine.apply_turn(done, Turn(text="bachelorette in phuket"))
        self.assertEqual(result.response_text, CLOSING_MESSAGE)
        self.assertTrue(result.state_patch.is_empty())

    def test_engine_does_not_mutate_input_state(self):
        state = ConversationState()
        self.engine.apply_turn(state, Turn(text="Bachelorette"))
        self.assertIsNone(state.party_type)

    def test_full_walkthrough_keeps_slot_order_and_flips_status_once(self):
        answers = [
            # Mentions later slots too; only the party type may be taken from it.
            "Bachelorette party in Phuket with nightlife for 6",
            "Phuket, 6 people",
            "nightlife",
            "Sarah's Big Weekend",
            "6",
            "10000",
            "Next weekend",
        ]
        state = ConversationState()
        statuses = []
        for answer in answers:
            result = self.engine.apply_turn(state, Turn(text=answer))
            state = state.apply_patch(result.state_patch)
            self.assertTrue(filled_in_order(state))
            statuses.append(state.status)

        self.assertIsNone(first_unset_slot(state))
        self.assertEqual(statuses[:-1], [ConversationStatus.ACTIVE] * (len(SLOT_ORDER) - 1))
        self.assertEqual(statuses[-1], ConversationStatus.COMPLETED)
        self.assertEqual(state.party_type, PartyType.BACHELORETTE)
        self.assertEqual(state.city, City.PHUKET)
        self.assertEqual(state.activity_preference, ActivityPreference.NIGHTLIFE)
        self.assertEqual(state.party_name, "Sarah's Big Weekend")
        self.assertEqual(state.guest_count, 6)
        self.assertEqual(state.budget, Decimal("10000"))


if __name__ == "__main__":
    unittest.main()

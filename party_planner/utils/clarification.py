# Role: Deterministic "one question" builder. Converts the next unset slot (from core.slots) into a single
# user-facing question, its input hint, and the quick replies offered for enumerable answers.

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import party_planner.config as config
from party_planner.core.slots import Slot
from party_planner.models.conversation import ConversationState
from party_planner.utils.formatting import format_amount, people

PARTY_TYPE_REPLIES: List[str] = ["Bachelor Party", "Bachelorette Party"]
CITY_REPLIES: List[str] = ["Bangkok", "Pattaya", "Phuket"]
ACTIVITY_REPLIES: List[str] = ["Adventure Activities", "Complete Package", "Nightlife Focus"]


@dataclass(frozen=True)
class SlotQuestion:
    text: str
    hint: str
    quick_replies: Optional[List[str]] = None


@dataclass(frozen=True)
class _SlotPrompt:
    question: str
    hint: str
    retry: str
    acknowledge: Callable[[ConversationState], str]
    quick_replies: Optional[List[str]] = None


def _ack_city(state: ConversationState) -> str:
    if state.city is None:
        return "Perfect!"
    return f"Perfect! {state.city.label} is an amazing destination."


def _ack_name(state: ConversationState) -> str:
    if not state.party_name:
        return "Love it!"
    return f"\"{state.party_name}\" sounds like it's going to be epic!"


def _ack_guests(state: ConversationState) -> str:
    if state.guest_count is None:
        return "Perfect!"
    return f"Perfect! That's {people(state.guest_count)}."


def _ack_budget(state: ConversationState) -> str:
    if state.budget is None:
        return "Great!"
    return f"Great! With a budget of {format_amount(state.budget)} per person, we can create something amazing."


_PROMPTS: Dict[Slot, _SlotPrompt] = {
    Slot.PARTY_TYPE: _SlotPrompt(
        question="What type of celebration are you organizing?",
        hint="Please select the type of party you're planning.",
        # First contact ("hi") lands here too, so the repeat is the welcome itself.
        retry="Welcome! I'm here to help you plan an amazing party.",
        acknowledge=lambda _s: "Welcome! I'm here to help you plan an amazing party.",
        quick_replies=PARTY_TYPE_REPLIES,
    ),
    Slot.CITY: _SlotPrompt(
        question="Which city would you like to celebrate in? Each destination offers unique experiences.",
        hint="Please choose your destination city.",
        retry="We currently plan parties in Bangkok, Pattaya and Phuket.",
        acknowledge=lambda _s: "Great choice!",
        quick_replies=CITY_REPLIES,
    ),
    Slot.ACTIVITY_PREFERENCE: _SlotPrompt(
        question="What type of experience are you looking for?",
        hint="What's your preferred style of celebration?",
        retry="Please pick adventure activities, a complete package or a nightlife focus.",
        acknowledge=_ack_city,
        quick_replies=ACTIVITY_REPLIES,
    ),
    Slot.PARTY_NAME: _SlotPrompt(
        question="Now, what should we call this party? This will help personalize your experience.",
        hint="Please enter a name for your party (e.g., 'John's Bachelor Bash', 'Sarah's Big Weekend').",
        retry="The party name can't be empty.",
        acknowledge=lambda _s: "Excellent!",
    ),
    Slot.GUEST_COUNT: _SlotPrompt(
        question="How many people will be joining the celebration?",
        hint="Please enter the number of guests (including yourself).",
        retry="Please enter a valid number of guests (e.g., 8, 12).",
        acknowledge=_ack_name,
    ),
    Slot.BUDGET: _SlotPrompt(
        question="What's your budget per person? This helps me recommend the best options.",
        hint="Please enter your budget per person (e.g., 5000, 10000).",
        retry="Please enter a valid budget amount (numbers only, e.g., 5000, 10000).",
        acknowledge=_ack_guests,
    ),
    Slot.PARTY_DATES: _SlotPrompt(
        question="When are you planning to celebrate?",
        hint="Please provide your preferred dates (e.g., 'March 15-17' or 'Next weekend').",
        retry="Please tell me when the party will take place.",
        acknowledge=_ack_budget,
    ),
}


def build_slot_question(slot: Slot, state: ConversationState, *, retry: bool = False) -> SlotQuestion:
    # 1) Pick the prompt for this slot
    # 2) Fresh ask -> acknowledge the previous answer; retry -> corrective hint instead
    # 3) Attach quick replies only for enumerable answers
    prompt = _PROMPTS[slot]
    lead = prompt.retry if retry else prompt.acknowledge(state)

    if config.DEBUG:
        print("CLARIFICATION_BUILDER slot:", slot.value, "retry:", retry)

    replies = list(prompt.quick_replies) if prompt.quick_replies else None
    return SlotQuestion(text=f"{lead} {prompt.question}", hint=prompt.hint, quick_replies=replies)

# Role: Read-only template table for the live-preview streaming path. Placeholders are filled from values
# parsed out of the conversation-context summary (see utils.context_parser).

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TemplateKey(str, Enum):
    GREETING = "greeting"
    PARTY_TYPE_FOLLOWUP = "party_type_followup"
    CITY_FOLLOWUP = "city_followup"
    ACTIVITY_FOLLOWUP = "activity_followup"
    PLANNING_DETAILS = "planning_details"
    BUDGET_DISCUSSION = "budget_discussion"
    FINAL_PLANNING = "final_planning"
    DEFAULT = "default"


STREAM_TEMPLATES: Mapping[TemplateKey, str] = MappingProxyType({
    TemplateKey.GREETING: (
        "Hello! I'm here to help you plan the perfect {partyType} party. "
        "Let's start by getting to know what you have in mind!"
    ),
    TemplateKey.PARTY_TYPE_FOLLOWUP: (
        "Great choice on a {partyType} party! These are always so much fun. "
        "What city are you thinking of celebrating in?"
    ),
    TemplateKey.CITY_FOLLOWUP: (
        "{city} is an amazing choice for a {partyType} party! There's so much to do there. "
        "Are you more interested in activities, a complete package, or nightlife?"
    ),
    TemplateKey.ACTIVITY_FOLLOWUP: (
        "Perfect! I love working with people who want {activityPreference}. "
        "What's the name of the party guest we're celebrating?"
    ),
    TemplateKey.PLANNING_DETAILS: (
        "Wonderful! Now let's get into the fun details. When are you planning to have this celebration?"
    ),
    TemplateKey.BUDGET_DISCUSSION: (
        "That sounds like it's going to be an incredible {partyType} party for {guestCount} people! "
        "What's your budget range for this celebration?"
    ),
    TemplateKey.FINAL_PLANNING: (
        "Excellent! I have all the details I need. "
        "Let me create a personalized itinerary for your {partyType} party in {city}..."
    ),
    TemplateKey.DEFAULT: (
        "That's great! Let me help you with the next steps for planning your perfect party experience."
    ),
})

# Role: Pulls template values out of a free-form conversation-context summary
# (e.g. "party_type: bachelor, city: bangkok, guest_count: 8") using keyword containment only.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict

_GUEST_COUNT = re.compile(r"guest_count:\s*(\d+)|(\d+)\s*people|(\d+)\s*guest")

_CITY_NAMES = (("bangkok", "Bangkok"), ("pattaya", "Pattaya"), ("phuket", "Phuket"))
_ACTIVITY_NAMES = (("activities", "activities"), ("package", "complete packages"), ("nightlife", "nightlife"))


@dataclass(frozen=True)
class ContextValues:
    party_type: str = "bachelor"
    city: str = "Thailand"
    activity_preference: str = "experiences"
    guest_count: str = "your group"

    def as_placeholders(self) -> Dict[str, str]:
        return {
            "partyType": self.party_type,
            "city": self.city,
            "activityPreference": self.activity_preference,
            "guestCount": self.guest_count,
        }


def parse_context(context: str) -> ContextValues:
    low = (context or "").lower()

    party_type = "bachelorette" if "bachelorette" in low else "bachelor"
    city = next((label for key, label in _CITY_NAMES if key in low), "Thailand")
    activity = next((label for key, label in _ACTIVITY_NAMES if key in low), "experiences")

    m = _GUEST_COUNT.search(low)
    guest_count = next((g for g in m.groups() if g), "your group") if m else "your group"

    return ContextValues(
        party_type=party_type,
        city=city,
        activity_preference=activity,
        guest_count=guest_count,
    )

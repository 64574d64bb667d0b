# Role: Deterministic slot parsing helpers. Turns a raw utterance into a typed slot value using plain
# keyword containment and number parsing (no LLM), raising ValidationRejected when the answer doesn't fit.

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict

from party_planner.core.errors import ValidationRejected
from party_planner.core.slots import Slot
from party_planner.models.conversation import ActivityPreference, City, PartyType

_LEADING_INT = re.compile(r"^[+-]?\d+")
_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")

# Order matters: first keyword hit wins.
_ACTIVITY_KEYWORDS = (
    ("activities", ActivityPreference.ACTIVITIES),
    ("adventure", ActivityPreference.ACTIVITIES),
    ("package", ActivityPreference.PACKAGE),
    ("complete", ActivityPreference.PACKAGE),
    ("nightlife", ActivityPreference.NIGHTLIFE),
)


def extract_party_type(text: str) -> PartyType:
    low = (text or "").lower()
    # Key line: "bachelorette" contains "bachelor", so test the longer word first.
    if "bachelorette" in low:
        return PartyType.BACHELORETTE
    if "bachelor" in low:
        return PartyType.BACHELOR
    raise ValidationRejected(Slot.PARTY_TYPE.value, "no party type mentioned")


def extract_city(text: str) -> City:
    low = (text or "").lower()
    for city in City:
        if city.value in low:
            return city
    raise ValidationRejected(Slot.CITY.value, "no supported city mentioned")


def extract_activity_preference(text: str) -> ActivityPreference:
    low = (text or "").lower()
    for keyword, preference in _ACTIVITY_KEYWORDS:
        if keyword in low:
            return preference
    raise ValidationRejected(Slot.ACTIVITY_PREFERENCE.value, "no activity style mentioned")


def parse_party_name(text: str) -> str:
    name = (text or "").strip()
    if not name:
        raise ValidationRejected(Slot.PARTY_NAME.value, "empty name")
    return name


def parse_guest_count(text: str) -> int:
    # Role: read the leading integer ("8 people" -> 8); anything else is rejected.
    m = _LEADING_INT.match((text or "").strip())
    if not m:
        raise ValidationRejected(Slot.GUEST_COUNT.value, "no leading number")
    count = int(m.group(0))
    if count <= 0:
        raise ValidationRejected(Slot.GUEST_COUNT.value, "guest count must be > 0")
    return count


def parse_budget(text: str) -> Decimal:
    # Role: keep only digits and decimal points ("$5,000.50" -> "5000.50"), then parse.
    cleaned = re.sub(r"[^0-9.]", "", text or "")
    m = _NUMBER.match(cleaned)
    if not m:
        raise ValidationRejected(Slot.BUDGET.value, "no amount found")
    try:
        amount = Decimal(m.group(0))
    except InvalidOperation as e:
        raise ValidationRejected(Slot.BUDGET.value, "unparseable amount") from e
    if amount <= 0:
        raise ValidationRejected(Slot.BUDGET.value, "budget must be > 0")
    return amount


def parse_party_dates(text: str) -> str:
    dates = (text or "").strip()
    if not dates:
        raise ValidationRejected(Slot.PARTY_DATES.value, "empty dates")
    return dates


SLOT_PARSERS: Dict[Slot, Callable[[str], Any]] = {
    Slot.PARTY_TYPE: extract_party_type,
    Slot.CITY: extract_city,
    Slot.ACTIVITY_PREFERENCE: extract_activity_preference,
    Slot.PARTY_NAME: parse_party_name,
    Slot.GUEST_COUNT: parse_guest_count,
    Slot.BUDGET: parse_budget,
    Slot.PARTY_DATES: parse_party_dates,
}

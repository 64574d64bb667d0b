# Role: Day itinerary synthesis. Picks the per-city / per-preference catalog, prices every stop as a fixed
# fraction of the per-guest budget share, assigns deterministic time slots, and writes the intro text.

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import List, Mapping, Tuple

from party_planner.models.conversation import ActivityPreference, City, ConversationState, PartyType
from party_planner.models.metadata import ActivityCard, DayItinerary, ItineraryStop, MessageMetadata, RichMedia
from party_planner.models.result import ItineraryResult
from party_planner.utils.formatting import round_half_up

DEFAULT_CITY = City.BANGKOK
DEFAULT_PREFERENCE = ActivityPreference.NIGHTLIFE
DEFAULT_PARTY_TYPE = PartyType.BACHELOR
DEFAULT_BUDGET = Decimal("5000")
DEFAULT_GUEST_COUNT = 8
DEFAULT_PARTY_NAME = "the party"

TIME_SLOTS: Tuple[str, ...] = ("10:00", "14:00", "17:00", "19:30", "22:00")
HIGHLIGHT_COUNT = 3


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    location: str
    # Share of (budget / guest_count) spent on this stop.
    fraction: Decimal


def _entries(*rows: Tuple[str, str, str]) -> Tuple[CatalogEntry, ...]:
    return tuple(CatalogEntry(name, location, Decimal(fraction)) for name, location, fraction in rows)


CATALOG: Mapping[City, Mapping[ActivityPreference, Tuple[CatalogEntry, ...]]] = MappingProxyType({
    City.BANGKOK: MappingProxyType({
        ActivityPreference.NIGHTLIFE: _entries(
            ("Sky Bar Experience", "Lebua State Tower", "0.15"),
            ("Khao San Road Crawl", "Street Food & Bars", "0.1"),
            ("Rooftop Club Night", "Octave Rooftop Bar", "0.2"),
            ("Tuk-Tuk Night Tour", "Temple & Market Tour", "0.08"),
        ),
        ActivityPreference.ACTIVITIES: _entries(
            ("Thai Cooking Class", "Authentic Local Experience", "0.12"),
            ("Floating Market Visit", "Damnoen Saduak Market", "0.1"),
            ("Temple Hopping Tour", "Wat Pho & Grand Palace", "0.15"),
            ("Chao Phraya River Cruise", "Sunset Dinner Cruise", "0.18"),
        ),
        ActivityPreference.PACKAGE: _entries(
            ("VIP Party Package", "All-Inclusive Night Out", "0.4"),
            ("Cultural Experience Day", "Temples + Cooking + Markets", "0.25"),
            ("Adventure Day Trip", "Ayutthaya Historical Park", "0.2"),
        ),
    }),
    City.PATTAYA: MappingProxyType({
        ActivityPreference.NIGHTLIFE: _entries(
            ("Walking Street Party", "Famous Nightlife District", "0.12"),
            ("Beach Club Experience", "Beach Road Clubs", "0.18"),
            ("Cabaret Show", "Tiffany's or Alcazar", "0.15"),
            ("Rooftop Bar Crawl", "Sky Gallery & More", "0.14"),
        ),
        ActivityPreference.ACTIVITIES: _entries(
            ("Coral Island Day Trip", "Snorkeling & Beach Fun", "0.16"),
            ("Jet Ski Adventure", "Pattaya Beach Water Sports", "0.12"),
            ("Sanctuary of Truth", "Ancient Wooden Temple", "0.08"),
            ("Nong Nooch Garden", "Tropical Garden & Shows", "0.1"),
        ),
        ActivityPreference.PACKAGE: _entries(
            ("Beach & Nightlife Combo", "Day at Beach + Night Out", "0.35"),
            ("Adventure Water Package", "All Water Sports Included", "0.28"),
            ("Cultural & Entertainment", "Shows + Temples + Gardens", "0.22"),
        ),
    }),
    City.PHUKET: MappingProxyType({
        ActivityPreference.NIGHTLIFE: _entries(
            ("Bangla Road Experience", "Patong's Famous Street", "0.14"),
            ("Beach Club Sunset", "Kata Rocks or Catch", "0.22"),
            ("Phi Phi Party Cruise", "Island Hopping with Drinks", "0.25"),
            ("Old Town Bar Crawl", "Historic Phuket Town", "0.12"),
        ),
        ActivityPreference.ACTIVITIES: _entries(
            ("James Bond Island Tour", "Phang Nga Bay Adventure", "0.18"),
            ("Elephant Sanctuary Visit", "Ethical Elephant Experience", "0.15"),
            ("Big Buddha & Temples", "Cultural Sightseeing Tour", "0.1"),
            ("Snorkeling at Similan", "World-Class Diving Spots", "0.2"),
        ),
        ActivityPreference.PACKAGE: _entries(
            ("Island Paradise Package", "Multi-Island Tour + Dining", "0.4"),
            ("Adventure & Culture Mix", "Activities + Temples + Markets", "0.3"),
            ("Luxury Beach Experience", "Premium Beach Clubs + Spa", "0.45"),
        ),
    }),
})

CITY_IMAGES: Mapping[City, Tuple[str, ...]] = MappingProxyType({
    City.BANGKOK: (
        "https://example.com/bangkok-skyline.jpg",
        "https://example.com/bangkok-temples.jpg",
        "https://example.com/bangkok-nightlife.jpg",
    ),
    City.PATTAYA: (
        "https://example.com/pattaya-beach.jpg",
        "https://example.com/pattaya-walking-street.jpg",
        "https://example.com/pattaya-activities.jpg",
    ),
    City.PHUKET: (
        "https://example.com/phuket-beaches.jpg",
        "https://example.com/phuket-islands.jpg",
        "https://example.com/phuket-nightlife.jpg",
    ),
})


@dataclass(frozen=True)
class PricedActivity:
    name: str
    location: str
    cost: int


def time_slot(index: int) -> str:
    # Past the table, every extra stop moves two hours later.
    if index < len(TIME_SLOTS):
        return TIME_SLOTS[index]
    return f"{10 + index * 2}:00"


def price_activities(
    city: City,
    preference: ActivityPreference,
    budget: Decimal,
    guest_count: int,
) -> List[PricedActivity]:
    entries = CATALOG[city][preference]
    share = budget / Decimal(guest_count)
    return [PricedActivity(e.name, e.location, round_half_up(share * e.fraction)) for e in entries]


def synthesize_itinerary(state: ConversationState) -> ItineraryResult:
    # 1) Fill defaults for unset slots (never fail on an incomplete conversation)
    # 2) Price the catalog entries in catalog order
    # 3) Build highlights (top 3) + the full day plan with time slots
    city = state.city or DEFAULT_CITY
    preference = state.activity_preference or DEFAULT_PREFERENCE
    budget = state.budget if state.budget is not None else DEFAULT_BUDGET
    guest_count = state.guest_count or DEFAULT_GUEST_COUNT
    party_type = state.party_type or DEFAULT_PARTY_TYPE
    party_name = (state.party_name or "").strip() or DEFAULT_PARTY_NAME

    priced = price_activities(city, preference, budget, guest_count)

    highlights = [
        ActivityCard(name=a.name, description=a.location, cost=a.cost) for a in priced[:HIGHLIGHT_COUNT]
    ]
    stops = [
        ItineraryStop(time=time_slot(i), activity=a.name, location=a.location, cost=a.cost)
        for i, a in enumerate(priced)
    ]
    metadata = MessageMetadata(
        rich_media=RichMedia(
            images=list(CITY_IMAGES[city]),
            activities=highlights,
            itinerary=DayItinerary(day=1, activities=stops),
        )
    )

    text = (
        f"Here's your personalized {party_type.label} Party itinerary for {party_name} in {city.label}! 🎉 "
        "Get ready for an unforgettable experience!"
    )
    return ItineraryResult(text=text, metadata=metadata)

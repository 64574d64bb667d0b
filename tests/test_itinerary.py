#!/usr/bin/env python3
"""Itinerary synthesis: catalog selection, pricing, time slots, defaults."""

import sys
import unittest
from decimal import Decimal
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from party_planner.core.itinerary import CATALOG, synthesize_itinerary, time_slot  # noqa: E402
from party_planner.models.conversation import (  # noqa: E402
    ActivityPreference,
    City,
    ConversationState,
    PartyType,
)


class ItineraryTests(unittest.TestCase):
    def test_bangkok_nightlife_pricing(self):
        state = ConversationState(
            city=City.BANGKOK,
            activity_preference=ActivityPreference.NIGHTLIFE,
            budget=Decimal("5000"),
            guest_count=8,
        )
        itinerary = synthesize_itinerary(state).metadata.rich_media.itinerary

        self.assertEqual(itinerary.day, 1)
        self.assertEqual(
            [s.activity for s in itinerary.activities],
            ["Sky Bar Experience", "Khao San Road Crawl", "Rooftop Club Night", "Tuk-Tuk Night Tour"],
        )
        # 625 per guest x (0.15, 0.1, 0.2, 0.08), halves rounded up.
        self.assertEqual([s.cost for s in itinerary.activities], [94, 63, 125, 50])
        self.assertEqual([s.time for s in itinerary.activities], ["10:00", "14:00", "17:00", "19:30"])
        self.assertEqual(itinerary.activities[0].location, "Lebua State Tower")

    def test_highlights_and_images(self):
        state = ConversationState(city=City.PHUKET, activity_preference=ActivityPreference.PACKAGE)
        rich = synthesize_itinerary(state).metadata.rich_media
        self.assertEqual(len(rich.activities), 3)
        self.assertEqual(rich.activities[0].name, "Island Paradise Package")
        self.assertTrue(all("phuket" in url for url in rich.images))

    def test_defaults_for_empty_state(self):
        result = synthesize_itinerary(ConversationState())
        stops = result.metadata.rich_media.itinerary.activities
        expected = [e.name for e in CATALOG[City.BANGKOK][ActivityPreference.NIGHTLIFE]]
        self.assertEqual([s.activity for s in stops], expected)
        self.assertEqual(stops[2].cost, 125)
        self.assertIn("Bachelor Party", result.text)
        self.assertIn("the party", result.text)
        self.assertIn("Bangkok", result.text)

    def test_text_names_party(self):
        state = ConversationState(
            party_type=PartyType.BACHELORETTE,
            city=City.PATTAYA,
            party_name="Girls Night",
        )
        text = synthesize_itinerary(state).text
        self.assertIn("Bachelorette Party", text)
        self.assertIn("Girls Night", text)
        self.assertIn("Pattaya", text)

    def test_deterministic(self):
        state = ConversationState(
            city=City.PATTAYA,
            activity_preference=ActivityPreference.ACTIVITIES,
            budget=Decimal("12000"),
            guest_count=5,
        )
        first = synthesize_itinerary(state)
        second = synthesize_itinerary(state)
        self.assertEqual(first.metadata.to_json(), second.metadata.to_json())
        self.assertEqual(first.text, second.text)

    def test_time_slots_extend_by_two_hours(self):
        self.assertEqual([time_slot(i) for i in range(5)], ["10:00", "14:00", "17:00", "19:30", "22:00"])
        self.assertEqual(time_slot(5), "20:00")
        self.assertEqual(time_slot(6), "22:00")

    def test_catalog_sizes(self):
        for city, by_pref in CATALOG.items():
            for pref, entries in by_pref.items():
                with self.subTest(city=city, pref=pref):
                    self.assertIn(len(entries), (3, 4))


if __name__ == "__main__":
    unittest.main()

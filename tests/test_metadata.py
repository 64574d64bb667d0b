#!/usr/bin/env python3
"""Message metadata serialization boundary."""

import json
import sys
import unittest
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from party_planner.core.errors import InvalidMetadata  # noqa: E402
from party_planner.core.itinerary import synthesize_itinerary  # noqa: E402
from party_planner.models.conversation import ConversationState  # noqa: E402
from party_planner.models.metadata import MessageMetadata  # noqa: E402


class MessageMetadataTests(unittest.TestCase):
    def test_quick_replies_only_omits_rich_media(self):
        raw = MessageMetadata(quick_replies=["Bangkok", "Pattaya", "Phuket"]).to_json()
        self.assertEqual(json.loads(raw), {"quick_replies": ["Bangkok", "Pattaya", "Phuket"]})

    def test_itinerary_payload_survives_storage(self):
        metadata = synthesize_itinerary(ConversationState()).metadata
        restored = MessageMetadata.from_json(metadata.to_json())
        self.assertEqual(restored, metadata)
        payload = json.loads(metadata.to_json())
        self.assertEqual(set(payload["rich_media"]), {"images", "activities", "itinerary"})

    def test_whole_unit_costs_stay_integers(self):
        metadata = synthesize_itinerary(ConversationState()).metadata
        raw = metadata.to_json()
        self.assertNotIn(".0", raw)
        stops = json.loads(raw)["rich_media"]["itinerary"]["activities"]
        self.assertEqual([s["cost"] for s in stops], [94, 63, 125, 50])
        self.assertTrue(all(isinstance(s["cost"], int) for s in stops))

        restored = MessageMetadata.from_json(raw)
        self.assertIsInstance(restored.rich_media.itinerary.activities[0].cost, int)
        fractional = MessageMetadata.from_json('{"rich_media": {"activities": [{"name": "x", "description": "y", "cost": 62.5}]}}')
        self.assertEqual(fractional.rich_media.activities[0].cost, 62.5)

    def test_cost_is_optional(self):
        raw = '{"rich_media": {"activities": [{"name": "Custom Itinerary", "description": "soon"}]}}'
        metadata = MessageMetadata.from_json(raw)
        self.assertIsNone(metadata.rich_media.activities[0].cost)

    def test_empty_payload_is_none(self):
        self.assertIsNone(MessageMetadata.from_json(None))
        self.assertIsNone(MessageMetadata.from_json("  "))

    def test_malformed_payloads_rejected(self):
        bad = [
            "not json",
            '{"quick_replies": "Bangkok"}',
            '{"rich_media": {"itinerary": {"day": 1}}}',
            '{"unexpected": true}',
            '{"quick_replies": ["  "]}',
        ]
        for raw in bad:
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidMetadata):
                    MessageMetadata.from_json(raw)


if __name__ == "__main__":
    unittest.main()

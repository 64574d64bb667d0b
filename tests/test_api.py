#!/usr/bin/env python3
"""HTTP surface: chat, state, itinerary and streaming routes."""

import json
import sys
import unittest
from pathlib import Path
from unittest.mock import patch


ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from party_planner.api import deps  # noqa: E402
from party_planner.main import app  # noqa: E402


class ApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def _new_conversation(self) -> str:
        resp = self.client.post("/conversations", json={"user_id": "u-1"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "active")
        self.assertIsNone(body["party_type"])
        return body["id"]

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_chat_turn_updates_state(self):
        cid = self._new_conversation()
        resp = self.client.post(
            "/chat",
            json={"conversation_id": cid, "user_message": "Bachelorette Party", "message_type": "quick_reply"},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"]["message_type"], "quick_reply")
        self.assertEqual(json.loads(body["message"]["metadata"])["quick_replies"], ["Bangkok", "Pattaya", "Phuket"])
        self.assertFalse(body["is_streaming"])
        self.assertFalse(body["auto_continue"])

        state = self.client.get(f"/state/{cid}").json()
        self.assertEqual(state["party_type"], "bachelorette")

        history = self.client.get(f"/conversations/{cid}/messages").json()
        self.assertEqual([m["role"] for m in history], ["user", "assistant"])

    def test_itinerary_route(self):
        cid = self._new_conversation()
        resp = self.client.post(f"/conversations/{cid}/itinerary")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message_type"], "itinerary")
        self.assertIn("itinerary", json.loads(body["metadata"])["rich_media"])

    def test_unknown_conversation_is_404(self):
        self.assertEqual(
            self.client.post("/chat", json={"conversation_id": "nope", "user_message": "hi"}).status_code,
            404,
        )
        self.assertEqual(self.client.get("/state/nope").status_code, 404)
        self.assertEqual(self.client.post("/conversations/nope/itinerary").status_code, 404)
        self.assertEqual(self.client.get("/conversations/nope/messages").status_code, 404)

    def test_stream_returns_ndjson_chunks(self):
        with patch.object(deps.response_streamer, "_base_delay", 0.0):
            resp = self.client.post(
                "/stream",
                json={"prompt": "I chose bachelor party", "context": "party_type: bachelor, user wants to plan"},
            )
        self.assertEqual(resp.status_code, 200)
        chunks = [json.loads(line) for line in resp.text.splitlines() if line.strip()]
        self.assertGreater(len(chunks), 1)
        self.assertEqual(sum(c["is_final"] for c in chunks), 1)
        self.assertTrue(chunks[-1]["is_final"])
        self.assertIn("city", chunks[-1]["text"].lower())


if __name__ == "__main__":
    unittest.main()

# Role: Streamlit chat UI.
# - Backend is authoritative (chat + snapshot + itinerary).
# - Quick replies render as buttons; rich media renders as cards / a day plan.
# - Sidebar shows ONLY a human-readable Party Summary.

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

import requests
import streamlit as st

BACKEND_URL = "http://127.0.0.1:8000"


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "conversation_id" not in st.session_state:
        st.session_state["conversation_id"] = create_conversation()
    if "messages" not in st.session_state:
        st.session_state["messages"] = []
    if "busy" not in st.session_state:
        st.session_state["busy"] = False
    if "snapshot" not in st.session_state:
        st.session_state["snapshot"] = None


# ----------------------------
# Backend calls
# ----------------------------
def create_conversation() -> Optional[str]:
    try:
        resp = requests.post(f"{BACKEND_URL}/conversations", json={}, timeout=10)
        resp.raise_for_status()
        return resp.json()["id"]
    except requests.RequestException:
        return None


def send_to_backend(conversation_id: str, user_message: str, message_type: str = "text") -> Dict[str, Any]:
    resp = requests.post(
        f"{BACKEND_URL}/chat",
        json={"conversation_id": conversation_id, "user_message": user_message, "message_type": message_type},
        timeout=30,
    )
    resp.raise_for_status()
    return resp.json()["message"]


def request_itinerary(conversation_id: str) -> Dict[str, Any]:
    resp = requests.post(f"{BACKEND_URL}/conversations/{conversation_id}/itinerary", timeout=30)
    resp.raise_for_status()
    return resp.json()


def fetch_snapshot(conversation_id: str) -> Optional[Dict[str, Any]]:
    try:
        r = requests.get(f"{BACKEND_URL}/state/{conversation_id}", timeout=10)
        if r.status_code != 200:
            return None
        return r.json()
    except requests.RequestException:
        return None


# ----------------------------
# Formatting helpers
# ----------------------------
def _fmt_value(v: Any) -> str:
    # Free text (party name, dates) is shown as entered.
    if v is None:
        return "—"
    if isinstance(v, str):
        s = v.strip()
        return s if s else "—"
    return str(v)


def _fmt_choice(v: Any) -> str:
    # Enumerated slots arrive lowercase ("bachelorette", "phuket").
    s = _fmt_value(v)
    return s if s == "—" else s.capitalize()


def _parse_metadata(msg: Dict[str, Any]) -> Dict[str, Any]:
    raw = msg.get("metadata")
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        return {}


# ----------------------------
# Sidebar: Party Summary ONLY
# ----------------------------
def party_summary_rows(snapshot: Dict[str, Any]) -> List[Tuple[str, str, str]]:
    return [
        ("🎉", "Party", _fmt_choice(snapshot.get("party_type"))),
        ("📍", "City", _fmt_choice(snapshot.get("city"))),
        ("🎯", "Focus", _fmt_choice(snapshot.get("activity_preference"))),
        ("🏷️", "Name", _fmt_value(snapshot.get("party_name"))),
        ("👥", "Guests", _fmt_value(snapshot.get("guest_count"))),
        ("💸", "Budget / person", _fmt_value(snapshot.get("budget"))),
        ("🗓️", "Dates", _fmt_value(snapshot.get("party_dates"))),
    ]


def render_party_summary(snapshot: Dict[str, Any]) -> None:
    for icon, label, value in party_summary_rows(snapshot):
        st.sidebar.markdown(f"{icon} **{label}:** {value}")

    st.sidebar.caption(f"Status: {snapshot.get('status', 'active')}")


def render_sidebar() -> None:
    st.sidebar.title("Your party")

    col1, col2 = st.sidebar.columns(2)
    with col1:
        if st.button("📝 New chat", use_container_width=True, disabled=st.session_state["busy"]):
            st.session_state["conversation_id"] = create_conversation()
            st.session_state["messages"] = []
            st.session_state["snapshot"] = None
            st.rerun()

    with col2:
        snap = st.session_state.get("snapshot") or {}
        done = snap.get("status") == "completed"
        if st.button("🗺️ Itinerary", use_container_width=True, disabled=st.session_state["busy"] or not done):
            try:
                msg = request_itinerary(st.session_state["conversation_id"])
                st.session_state["messages"].append(msg)
            except requests.RequestException:
                st.sidebar.error("Couldn't generate the itinerary right now.")
            st.rerun()

    st.sidebar.divider()

    snap = st.session_state.get("snapshot")
    if not snap:
        st.sidebar.info("Start chatting to build your party summary.")
        return

    render_party_summary(snap)


# ----------------------------
# Chat
# ----------------------------
def render_rich_media(rich: Dict[str, Any]) -> None:
    images: List[str] = rich.get("images") or []
    if images:
        st.image(images, width=180)

    for card in rich.get("activities") or []:
        cost = card.get("cost")
        suffix = f" — {cost:g} per guest" if isinstance(cost, (int, float)) else ""
        st.markdown(f"**{card.get('name')}** · {card.get('description')}{suffix}")

    itinerary = rich.get("itinerary")
    if itinerary:
        st.markdown(f"**Day {itinerary.get('day', 1)}**")
        st.table([
            {"Time": s.get("time"), "Activity": s.get("activity"), "Where": s.get("location"), "Cost": s.get("cost")}
            for s in itinerary.get("activities") or []
        ])


def render_chat() -> Optional[str]:
    # Returns a quick reply the user clicked on the latest assistant message, if any.
    clicked: Optional[str] = None
    messages = st.session_state["messages"]
    for i, msg in enumerate(messages):
        with st.chat_message(msg["role"]):
            st.write(msg["content"])
            meta = _parse_metadata(msg)
            if meta.get("rich_media"):
                render_rich_media(meta["rich_media"])
            replies = meta.get("quick_replies") or []
            if replies and i == len(messages) - 1:
                cols = st.columns(len(replies))
                for col, label in zip(cols, replies):
                    if col.button(label, key=f"qr-{i}-{label}", disabled=st.session_state["busy"]):
                        clicked = label
    return clicked


def submit(user_input: str, message_type: str) -> None:
    st.session_state["messages"].append({"role": "user", "content": user_input})
    st.session_state["busy"] = True
    try:
        with st.spinner("Planning..."):
            message = send_to_backend(st.session_state["conversation_id"], user_input, message_type)
        st.session_state["messages"].append(message)

        # Refresh snapshot after each turn
        st.session_state["snapshot"] = fetch_snapshot(st.session_state["conversation_id"])

    except requests.RequestException:
        msg = "I couldn't reach the backend. Make sure the API is running on http://127.0.0.1:8000."
        st.session_state["messages"].append({"role": "assistant", "content": msg})
    finally:
        st.session_state["busy"] = False


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="Party Planner", page_icon="🎉", layout="wide")

    st.title("🎉 Party Planner")
    st.caption("Plan a bachelor or bachelorette party in Bangkok, Pattaya or Phuket.")

    ensure_session()
    if st.session_state["conversation_id"] is None:
        st.error("I couldn't reach the backend. Make sure the API is running on http://127.0.0.1:8000.")
        return

    render_sidebar()
    clicked = render_chat()

    user_input = st.chat_input("Say hi to start planning…", disabled=st.session_state["busy"])
    if clicked:
        submit(clicked, "quick_reply")
        st.rerun()
    elif user_input:
        submit(user_input, "text")
        st.rerun()


if __name__ == "__main__":
    main()

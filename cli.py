# Role: Local developer CLI to interact with FlowController without the web UI.
# Useful for deterministic testing and seeing debug logs in the terminal.

from __future__ import annotations

import party_planner.config
party_planner.config.load_env()

from party_planner.core.errors import ConversationNotFound
from party_planner.core.flow_controller import FlowController
from party_planner.models.message import Message


def _print_assistant(message: Message) -> None:
    print(f"\nAssistant: {message.content}")
    metadata = message.parsed_metadata()
    if metadata is None:
        return
    if metadata.quick_replies:
        print("Quick replies: " + " | ".join(metadata.quick_replies))
    itinerary = metadata.rich_media.itinerary if metadata.rich_media else None
    if itinerary is not None:
        print(f"Day {itinerary.day}:")
        for stop in itinerary.activities:
            cost = f" ({stop.cost:g} per guest)" if stop.cost is not None else ""
            print(f"  {stop.time}  {stop.activity} @ {stop.location}{cost}")


def main() -> None:
    # 1) Create FlowController
    # 2) Maintain a conversation_id across turns
    # 3) Route user input -> FlowController -> print assistant output
    print("Party Planner CLI")
    print("Commands: /new (new conversation), /state, /itinerary, /exit")
    print("-" * 50)

    flow = FlowController()
    conversation_id = flow.start_conversation().id
    print(f"conversation_id: {conversation_id}")

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        cmd = user_message.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd in {"/new", "new"}:
            conversation_id = flow.start_conversation().id
            print(f"New conversation_id: {conversation_id}")
            continue

        if cmd in {"/state", "state"}:
            state = flow.state_manager.get(conversation_id)
            print(state.model_dump_json(indent=2, exclude={"created_at", "updated_at"}))
            continue

        try:
            if cmd in {"/itinerary", "itinerary"}:
                _print_assistant(flow.generate_itinerary(conversation_id))
                continue

            result = flow.handle_turn(conversation_id, user_message)
        except ConversationNotFound as e:
            print(f"Error: {e}. Use /new to start over.")
            continue

        _print_assistant(result.message)
        if result.next_prompt:
            print(f"({result.next_prompt})")


if __name__ == "__main__":
    main()

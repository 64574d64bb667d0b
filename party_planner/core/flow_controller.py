# Role: Orchestrator for one conversation turn. It glues together the store and the pure DialogueEngine:
# resolve the conversation, record the user message, run the engine, persist its patch and the reply.

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional, Union

import party_planner.config as config
from party_planner.core.dialogue_engine import DialogueEngine
from party_planner.core.itinerary import synthesize_itinerary
from party_planner.core.state_manager import StateManager
from party_planner.models.conversation import ConversationState
from party_planner.models.message import Message, StoredMessageType
from party_planner.models.turn import MessageType, Turn


@dataclass(frozen=True)
class TurnResponse:
    conversation_id: str
    message: Message
    state: ConversationState
    next_prompt: Optional[str] = None
    auto_continue: bool = False
    is_streaming: bool = False


class FlowController:
    def __init__(
        self,
        state_manager: Optional[StateManager] = None,
        engine: Optional[DialogueEngine] = None,
    ) -> None:
        # Key line: dependencies are injectable for testing.
        self.state_manager = state_manager or StateManager()
        self.engine = engine or DialogueEngine()
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, conversation_id: str) -> threading.Lock:
        # Key line: at most one in-flight turn per conversation (engine reads a snapshot, patch is last-write-wins).
        # Unknown ids raise ConversationNotFound before a lock is allocated.
        self.state_manager.get(conversation_id)
        with self._locks_guard:
            lock = self._locks.get(conversation_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[conversation_id] = lock
            return lock

    def start_conversation(self, user_id: Optional[str] = None) -> ConversationState:
        self.cleanup_expired()
        return self.state_manager.create(user_id=user_id)

    def cleanup_expired(self) -> int:
        # Drop expired conversations, then the locks of ids the store no longer holds.
        removed = self.state_manager.cleanup_expired()
        with self._locks_guard:
            for conversation_id in [cid for cid in self._locks if cid not in self.state_manager]:
                del self._locks[conversation_id]
        return removed

    def handle_turn(
        self,
        conversation_id: str,
        user_message: str,
        message_type: Union[MessageType, str] = MessageType.TEXT,
    ) -> TurnResponse:
        # 1) Resolve conversation (ConversationNotFound propagates to the caller)
        # 2) Persist user message
        # 3) Run the engine on the current snapshot
        # 4) Persist patch + assistant message and return
        turn = Turn(text=user_message, message_type=MessageType(message_type))

        with self._lock_for(conversation_id):
            state = self.state_manager.get(conversation_id)

            self.state_manager.add_message(
                conversation_id,
                role="user",
                content=user_message,
                message_type=StoredMessageType(turn.message_type.value),
            )

            result = self.engine.apply_turn(state, turn)
            state = self.state_manager.apply_patch(conversation_id, result.state_patch)

            message = self.state_manager.add_message(
                conversation_id,
                role="assistant",
                content=result.response_text,
                message_type=StoredMessageType(result.response_kind.value),
                metadata=result.metadata,
            )

        if config.DEBUG:
            print("\n--- FLOW DEBUG ---")
            print("CONVERSATION:", conversation_id)
            print("USER MESSAGE:", user_message)
            print("PATCH:", result.state_patch.changes())
            print("STATUS:", state.status.value)
            print("RESPONSE KIND:", result.response_kind.value)
            print("NEXT PROMPT:", result.next_prompt_hint)
            print("------------------\n")

        return TurnResponse(
            conversation_id=conversation_id,
            message=message,
            state=state,
            next_prompt=result.next_prompt_hint,
            auto_continue=result.auto_continue,
        )

    def generate_itinerary(self, conversation_id: str) -> Message:
        # Role: separate entry point; works for incomplete conversations too (defaults fill the gaps).
        with self._lock_for(conversation_id):
            state = self.state_manager.get(conversation_id)
            itinerary = synthesize_itinerary(state)
            message = self.state_manager.add_message(
                conversation_id,
                role="assistant",
                content=itinerary.text,
                message_type=StoredMessageType.ITINERARY,
                metadata=itinerary.metadata,
            )

        if config.DEBUG:
            print("ITINERARY generated for", conversation_id, "->", itinerary.metadata.to_json())

        return message

# Role: In-memory conversation store. Owns lifecycle of ConversationState snapshots and their message
# history: create/get by id, merge engine patches, append messages, enforce bounded history, cleanup.

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import party_planner.config as config
from party_planner.core.errors import ConversationNotFound
from party_planner.models.conversation import ConversationState, StatePatch
from party_planner.models.message import Message, Role, StoredMessageType
from party_planner.models.metadata import MessageMetadata


class StateManager:
    def __init__(
        self,
        max_history_messages: Optional[int] = None,
        session_ttl_minutes: Optional[int] = None,
    ) -> None:
        self._conversations: Dict[str, ConversationState] = {}
        self._messages: Dict[str, List[Message]] = {}
        self._max_history_messages = max_history_messages or config.MAX_HISTORY_MESSAGES
        self._ttl = timedelta(minutes=session_ttl_minutes or config.SESSION_TTL_MINUTES)

    def create(self, user_id: Optional[str] = None, conversation_id: Optional[str] = None) -> ConversationState:
        conversation_id = conversation_id or str(uuid.uuid4())
        state = ConversationState(id=conversation_id, user_id=user_id or str(uuid.uuid4()))
        self._conversations[conversation_id] = state
        self._messages[conversation_id] = []
        return state

    def get(self, conversation_id: str) -> ConversationState:
        state = self._conversations.get(conversation_id)
        if state is None:
            raise ConversationNotFound(conversation_id)
        return state

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._conversations

    def apply_patch(self, conversation_id: str, patch: StatePatch) -> ConversationState:
        # Key line: last-write-wins; the FlowController serializes turns per conversation.
        state = self.get(conversation_id)
        if patch.is_empty():
            return state
        updated = state.apply_patch(patch).model_copy(update={"updated_at": datetime.now(timezone.utc)})
        self._conversations[conversation_id] = updated
        return updated

    def add_message(
        self,
        conversation_id: str,
        role: Role,
        content: str,
        message_type: StoredMessageType = StoredMessageType.TEXT,
        metadata: Optional[MessageMetadata] = None,
    ) -> Message:
        # 1) Append message
        # 2) Update last-seen timestamp
        # 3) Trim to last N messages (bounded memory)
        state = self.get(conversation_id)
        message = Message(
            conversation_id=conversation_id,
            role=role,
            content=content,
            message_type=message_type,
            metadata=metadata.to_json() if metadata is not None else None,
        )
        history = self._messages.setdefault(conversation_id, [])
        history.append(message)
        if len(history) > self._max_history_messages:
            self._messages[conversation_id] = history[-self._max_history_messages :]

        self._conversations[conversation_id] = state.model_copy(update={"updated_at": message.created_at})
        return message

    def messages(self, conversation_id: str) -> List[Message]:
        self.get(conversation_id)
        return list(self._messages.get(conversation_id, []))

    def cleanup_expired(self) -> int:
        # Role: drop inactive conversations to avoid unbounded growth (best for long-running servers).
        now = datetime.now(timezone.utc)
        to_delete = [cid for cid, st in self._conversations.items() if (now - st.updated_at) > self._ttl]
        for cid in to_delete:
            del self._conversations[cid]
            self._messages.pop(cid, None)
        return len(to_delete)

# Role: Single chat message schema for a conversation's history. Stored by the StateManager and returned
# to clients (role + content + type + serialized metadata + timestamp).

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from party_planner.models.metadata import MessageMetadata

Role = Literal["user", "assistant", "system"]


class StoredMessageType(str, Enum):
    TEXT = "text"
    QUICK_REPLY = "quick_reply"
    RICH_MEDIA = "rich_media"
    ITINERARY = "itinerary"


class Message(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    conversation_id: str
    role: Role
    content: str
    message_type: StoredMessageType = StoredMessageType.TEXT
    # Key line: metadata travels as a JSON string, exactly as storage keeps it.
    metadata: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def parsed_metadata(self) -> Optional[MessageMetadata]:
        return MessageMetadata.from_json(self.metadata)

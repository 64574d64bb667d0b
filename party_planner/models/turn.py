# Role: One user utterance plus its declared input kind. Not persisted by the core; only inspected
# for keyword matches while filling the current slot.

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class MessageType(str, Enum):
    TEXT = "text"
    QUICK_REPLY = "quick_reply"


class Turn(BaseModel):
    text: str
    message_type: MessageType = MessageType.TEXT

# Role: Output contracts of the core. EngineResult tells the caller what to say and what to persist;
# StreamChunk is one step of the typing-effect stream; ItineraryResult is the synthesized day plan.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from party_planner.models.conversation import StatePatch
from party_planner.models.metadata import MessageMetadata


class ResponseKind(str, Enum):
    TEXT = "text"
    QUICK_REPLY = "quick_reply"
    RICH_MEDIA = "rich_media"
    ITINERARY = "itinerary"


class EngineResult(BaseModel):
    response_text: str
    response_kind: ResponseKind = ResponseKind.TEXT
    metadata: Optional[MessageMetadata] = None
    state_patch: StatePatch = Field(default_factory=StatePatch)
    next_prompt_hint: Optional[str] = None
    auto_continue: bool = False


class StreamChunk(BaseModel):
    text: str
    is_final: bool = False
    # Key line: only the final chunk carries the message id.
    message_id: Optional[str] = None


@dataclass(frozen=True)
class ItineraryResult:
    text: str
    metadata: MessageMetadata

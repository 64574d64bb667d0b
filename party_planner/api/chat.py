# Role: Thin HTTP adapter for the chat endpoint. Validates request/response shapes and delegates the entire
# conversation turn to FlowController (business logic lives in core, not in the API layer).

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from party_planner.api.deps import flow_controller
from party_planner.core.errors import ConversationNotFound
from party_planner.models.message import Message
from party_planner.models.turn import MessageType

router = APIRouter(tags=["chat"])

class ChatRequest(BaseModel):
    conversation_id: str
    user_message: str
    message_type: MessageType = MessageType.TEXT

class ChatResponse(BaseModel):
    message: Message
    is_streaming: bool
    next_prompt: Optional[str] = None
    auto_continue: bool = False

@router.post("/chat", response_model=ChatResponse)
def chat(req: ChatRequest) -> ChatResponse:
    # 1) Forward (conversation_id, user_message, message_type) to the orchestrator
    # 2) Return the assistant message in a stable schema for UI/clients
    try:
        result = flow_controller.handle_turn(req.conversation_id, req.user_message, req.message_type)
    except ConversationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return ChatResponse(
        message=result.message,
        is_streaming=result.is_streaming,
        next_prompt=result.next_prompt,
        auto_continue=result.auto_continue,
    )

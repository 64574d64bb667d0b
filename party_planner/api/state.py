# Role: Conversation lifecycle + transparency endpoints for the UI.
# Creates conversations and exposes the current snapshot / message history by conversation_id.

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from party_planner.api.deps import flow_controller
from party_planner.core.errors import ConversationNotFound
from party_planner.models.conversation import ConversationState
from party_planner.models.message import Message

router = APIRouter(tags=["state"])

class CreateConversationRequest(BaseModel):
    user_id: Optional[str] = None

@router.post("/conversations", response_model=ConversationState)
def create_conversation(req: Optional[CreateConversationRequest] = None) -> ConversationState:
    return flow_controller.start_conversation(user_id=req.user_id if req else None)

@router.get("/state/{conversation_id}", response_model=ConversationState)
def get_state(conversation_id: str) -> ConversationState:
    try:
        return flow_controller.state_manager.get(conversation_id)
    except ConversationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

@router.get("/conversations/{conversation_id}/messages", response_model=List[Message])
def get_messages(conversation_id: str) -> List[Message]:
    try:
        return flow_controller.state_manager.messages(conversation_id)
    except ConversationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

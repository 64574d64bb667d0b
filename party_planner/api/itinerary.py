# Role: HTTP adapter for itinerary generation. Unknown conversations surface as 404.

from fastapi import APIRouter, HTTPException

from party_planner.api.deps import flow_controller
from party_planner.core.errors import ConversationNotFound
from party_planner.models.message import Message

router = APIRouter(tags=["itinerary"])

@router.post("/conversations/{conversation_id}/itinerary", response_model=Message)
def generate_itinerary(conversation_id: str) -> Message:
    try:
        return flow_controller.generate_itinerary(conversation_id)
    except ConversationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

# Role: Live-preview streaming endpoint. Emits StreamChunks as newline-delimited JSON so front-ends can
# render a typing effect; the stream always ends with exactly one final chunk.

from typing import AsyncIterator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from party_planner.api.deps import response_streamer

router = APIRouter(tags=["stream"])

class StreamRequest(BaseModel):
    prompt: str
    context: str = ""

@router.post("/stream")
def stream(req: StreamRequest) -> StreamingResponse:
    async def _ndjson() -> AsyncIterator[str]:
        async for chunk in response_streamer.stream_response(req.prompt, req.context):
            yield chunk.model_dump_json() + "\n"

    return StreamingResponse(_ndjson(), media_type="application/x-ndjson")

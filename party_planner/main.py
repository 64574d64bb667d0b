# Role: FastAPI app bootstrap. Loads environment config early, registers routers, and exposes health/docs endpoints.

from fastapi import FastAPI

import party_planner.config
party_planner.config.load_env()

from party_planner.api.chat import router as chat_router
from party_planner.api.itinerary import router as itinerary_router
from party_planner.api.state import router as state_router
from party_planner.api.stream import router as stream_router

app = FastAPI(title="Party Planner API", version="0.1.0")
app.include_router(chat_router)
app.include_router(state_router)
app.include_router(itinerary_router)
app.include_router(stream_router)

@app.get("/")
def root() -> dict:
    # Role: quick discoverability for clients (where are docs/health).
    return {
        "message": "Party Planner API is running",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}

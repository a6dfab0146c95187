"""FastAPI application, status route, and startup."""

from typing import Any, Dict, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from automate.adapters.web import automate_routes
from automate.adapters.web.automate_routes import automate_router
from automate.config import CONFIG, __version__

app = FastAPI(title="AutoMate Assistant", version=__version__)
app.include_router(automate_router)


class StatusResponse(BaseModel):
    sessionId: str
    model: str
    geminiConfigured: bool
    backendBaseUrl: str
    activeSessions: int
    usage: Optional[Dict[str, Any]] = None


@app.get("/status", response_model=StatusResponse)
async def status():
    """Server status endpoint"""
    llm = automate_routes.llm
    return StatusResponse(
        sessionId=CONFIG["session_id"],
        model=llm.config.model,
        geminiConfigured=llm.is_configured,
        backendBaseUrl=automate_routes.app_config.backend.base_url,
        activeSessions=len(automate_routes.registry),
        usage=llm.usage_tracker.get_status(),
    )


@app.on_event("startup")
async def startup_event():
    print("AutoMate server starting")
    print(f"Session: {CONFIG['session_id']}")
    print(f"Store backend: {CONFIG['store_api_base_url']}")
    if not automate_routes.llm.is_configured:
        print("Gemini not configured (set GEMINI_API_KEY in .env); commands will fall back")
    print("Ready!")

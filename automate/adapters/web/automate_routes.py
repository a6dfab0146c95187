"""AutoMate assistant API routes."""

import base64
import binascii
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from automate.adapters.http.backend_executor import BackendExecutor
from automate.adapters.llm.gemini_adapter import GeminiAdapter
from automate.adapters.speech.passthrough import PassthroughTranscriber, TranscriptionUnavailable
from automate.config import AppConfig
from automate.domain.catalog import QUICK_ACTIONS, build_catalog, catalog_slice, catalog_to_dict
from automate.domain.commands import ActionSelection, ImageCommand, TextCommand, VoiceCommand
from automate.domain.errors import NoDomainSelectedError, NoPendingPlanError
from automate.domain.generator import ActionGenerator
from automate.session import CommandSession, SessionRegistry

automate_router = APIRouter(prefix="/automate", tags=["AutoMate"])

app_config = AppConfig.from_env()
catalog = build_catalog(app_config.backend.base_url)
llm = GeminiAdapter(app_config.gemini)
registry = SessionRegistry(
    ActionGenerator(llm),
    BackendExecutor(app_config.backend.timeout_seconds),
    catalog,
)
transcriber = PassthroughTranscriber()


class DomainRequest(BaseModel):
    domain_area: str


class CommandRequest(BaseModel):
    transcript: Optional[str] = None
    audio_base64: Optional[str] = None
    text: Optional[str] = None
    image_base64: Optional[str] = None
    image_mime_type: str = "image/jpeg"
    action: Optional[str] = None


class SessionResponse(BaseModel):
    session_id: str
    domain_area: Optional[str] = None
    pending: Optional[Dict[str, Any]] = None
    messages: List[Dict[str, Any]]


class PlanResponse(BaseModel):
    session_id: str
    plan: Optional[Dict[str, Any]] = None
    messages: List[Dict[str, Any]]


class OutcomeResponse(BaseModel):
    session_id: str
    outcome: Dict[str, Any]
    messages: List[Dict[str, Any]]


def _session(session_id: str) -> CommandSession:
    try:
        return registry.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="session not found")


def _session_response(session: CommandSession) -> SessionResponse:
    pending = session.gate.pending
    return SessionResponse(
        session_id=session.id,
        domain_area=session.domain_area,
        pending=pending.to_dict() if pending else None,
        messages=session.log.to_list(),
    )


def _decode(data: str, field: str) -> bytes:
    # Accept both bare base64 and data URLs
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail=f"{field} is not valid base64")


@automate_router.get("/actions")
async def quick_actions():
    return {"actions": [asdict(a) for a in QUICK_ACTIONS]}


@automate_router.get("/catalog")
async def endpoint_catalog(area: Optional[str] = None):
    selected = catalog_slice(catalog, area) if area else catalog
    return {"catalog": catalog_to_dict(selected)}


@automate_router.post("/sessions", response_model=SessionResponse)
async def create_session():
    return _session_response(registry.create())


@automate_router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    return _session_response(_session(session_id))


@automate_router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    if not registry.drop(session_id):
        raise HTTPException(status_code=404, detail="session not found")
    return {"success": True}


@automate_router.post("/sessions/{session_id}/domain", response_model=SessionResponse)
async def select_domain(session_id: str, req: DomainRequest):
    session = _session(session_id)
    try:
        session.select_domain(req.domain_area)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _session_response(session)


@automate_router.post("/sessions/{session_id}/commands", response_model=PlanResponse)
async def submit_command(session_id: str, req: CommandRequest):
    session = _session(session_id)

    transcript = req.transcript
    if not transcript and req.audio_base64:
        try:
            transcript = await transcriber.transcribe(_decode(req.audio_base64, "audio_base64"))
        except TranscriptionUnavailable as e:
            raise HTTPException(status_code=400, detail=str(e))

    inputs = [
        VoiceCommand(transcript) if transcript else None,
        ImageCommand(_decode(req.image_base64, "image_base64"), req.image_mime_type)
        if req.image_base64 else None,
        TextCommand(req.text) if req.text else None,
        ActionSelection(req.action) if req.action else None,
    ]
    try:
        plan = await session.submit(*inputs)
    except (NoDomainSelectedError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PlanResponse(
        session_id=session.id,
        plan=plan.to_dict() if plan else None,
        messages=session.log.to_list(),
    )


@automate_router.post("/sessions/{session_id}/approve", response_model=OutcomeResponse)
async def approve_plan(session_id: str):
    session = _session(session_id)
    try:
        outcome = await session.approve()
    except NoPendingPlanError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return OutcomeResponse(
        session_id=session.id,
        outcome=outcome.to_dict(),
        messages=session.log.to_list(),
    )


@automate_router.post("/sessions/{session_id}/discard", response_model=SessionResponse)
async def discard_plan(session_id: str):
    session = _session(session_id)
    session.discard()
    return _session_response(session)


@automate_router.get("/sessions/{session_id}/messages")
async def session_messages(session_id: str):
    return {"messages": _session(session_id).log.to_list()}

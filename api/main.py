"""
main.py - FastAPI backend for the Tenant Guardian assistant

Endpoints:
- POST /api/auth/login, /api/auth/google, /api/auth/logout, GET /api/auth/session
- GET/PUT /api/profile
- POST /api/analyze          - listing fraud-risk assessment
- POST /api/verify-document  - reverse-image document check
- GET  /api/geocode          - map click to address (never fails)
- POST /api/chat             - streamed assistant reply (NDJSON)
- POST /api/chat/reply       - complete assistant turn
- GET  /api/translations/{language}

Model calls go through a ModelTransport; without a Gemini key the
canned MockTransport from mock_data is used.
"""

import base64
import binascii
import json
import logging
from functools import lru_cache
from typing import Dict

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from api.mock_data import MockTransport
from api.schemas import (
    AccountRequest, AssessmentResponse, ChatRequest, ChatTurnModel,
    DocumentCheckRequest, ErrorResponse, ListingRequest, LoginRequest,
    ProfileModel, ProfileResponse, SessionResponse
)
from tenant_guardian import config
from tenant_guardian.adapters import analyze_listing, resolve_coordinates, verify_document
from tenant_guardian.chat import reply_turn, stream_chat
from tenant_guardian.exceptions import AnalysisFailed, ChatStreamError
from tenant_guardian.model_client import GeminiTransport, ModelTransport
from tenant_guardian.report import tier_label
from tenant_guardian.risk_schemas import DocumentCheckResult, GeoDetails
from tenant_guardian.schemas import ChatTurn, Language, ListingInput
from tenant_guardian.state import AppState, JsonFileStore, UserProfile
from tenant_guardian.translations import TRANSLATIONS, translate


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title="Tenant Guardian API",
    description="Rental listing fraud-risk checks backed by Gemini",
    version="1.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# DEPENDENCIES
# =============================================================================

@lru_cache(maxsize=1)
def get_transport() -> ModelTransport:
    if config.DEMO_MODE:
        logger.warning("Demo mode: model replies are canned")
        return MockTransport()
    return GeminiTransport()


@lru_cache(maxsize=1)
def get_state() -> AppState:
    return AppState(JsonFileStore(config.STATE_PATH))


def require_auth(state: AppState = Depends(get_state)) -> AppState:
    if not state.is_authenticated:
        raise HTTPException(status_code=401, detail="Login required")
    return state


def _decode_base64(data: str, field: str) -> bytes:
    # Accept data URLs as produced by FileReader.readAsDataURL
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=422, detail=f"{field} is not valid base64")


@app.exception_handler(AnalysisFailed)
async def analysis_failed_handler(request: Request, exc: AnalysisFailed):
    return JSONResponse(
        status_code=502,
        content=ErrorResponse(error=exc.user_message, detail=exc.operation).model_dump(),
    )


# =============================================================================
# HEALTH & STRINGS
# =============================================================================

@app.get("/")
@app.get("/api")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Tenant Guardian API", "demo_mode": config.DEMO_MODE}


@app.get("/api/translations/{language}", response_model=Dict[str, str])
def get_translations(language: Language):
    return TRANSLATIONS[language]


# =============================================================================
# AUTH & PROFILE
# =============================================================================

@app.post("/api/auth/login", response_model=SessionResponse)
def login(req: LoginRequest, state: AppState = Depends(get_state)):
    if not state.login(req.email, req.password):
        raise HTTPException(status_code=401, detail=translate("login_invalid"))
    return SessionResponse(authenticated=True)


@app.post("/api/auth/google", response_model=ProfileResponse)
def login_with_google(req: AccountRequest, state: AppState = Depends(get_state)):
    """Mock Google sign-in; also used for sign-up."""
    profile = state.login_with_account(req.name, req.email)
    return _profile_response(profile)


@app.post("/api/auth/logout", response_model=SessionResponse)
def logout(state: AppState = Depends(get_state)):
    state.logout()
    return SessionResponse(authenticated=False)


@app.get("/api/auth/session", response_model=SessionResponse)
def session(state: AppState = Depends(get_state)):
    return SessionResponse(authenticated=state.is_authenticated)


def _profile_response(profile: UserProfile) -> ProfileResponse:
    return ProfileResponse(
        profile=ProfileModel.model_validate(profile.to_dict()),
        completion=profile.completion()
    )


@app.get("/api/profile", response_model=ProfileResponse)
def get_profile(state: AppState = Depends(require_auth)):
    return _profile_response(state.profile)


@app.put("/api/profile", response_model=ProfileResponse)
def save_profile(req: ProfileModel, state: AppState = Depends(require_auth)):
    profile = UserProfile(**req.model_dump())
    state.save_profile(profile)
    return _profile_response(profile)


# =============================================================================
# MODEL-BACKED CHECKS
# =============================================================================

@app.post(
    "/api/analyze",
    response_model=AssessmentResponse,
    responses={502: {"model": ErrorResponse}}
)
async def analyze(
    req: ListingRequest,
    transport: ModelTransport = Depends(get_transport),
    _: AppState = Depends(require_auth)
):
    """
    Run the five-check fraud analysis on a listing.

    The photo is optional; it is sent to the model only together with
    its media type.
    """
    photo = _decode_base64(req.photo_base64, "photo_base64") if req.photo_base64 else None
    listing = ListingInput(
        title=req.title,
        description=req.description,
        address=req.address,
        price=req.price,
        sqft=req.sqft,
        median_price=req.median_price,
        photo_data=photo,
        photo_mime_type=req.photo_mime_type,
        owner_name=req.owner_name,
        language=req.language
    )
    assessment = await analyze_listing(listing, transport)
    return AssessmentResponse(
        assessment=assessment,
        tier=assessment.tier,
        tier_label=tier_label(assessment.tier, req.language)
    )


@app.post(
    "/api/verify-document",
    response_model=DocumentCheckResult,
    responses={502: {"model": ErrorResponse}}
)
async def verify(
    req: DocumentCheckRequest,
    transport: ModelTransport = Depends(get_transport),
    _: AppState = Depends(require_auth)
):
    image = _decode_base64(req.image_base64, "image_base64")
    return await verify_document(image, req.mime_type, transport, req.language)


@app.get("/api/geocode", response_model=GeoDetails)
async def geocode(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    language: Language = Language.ENGLISH,
    transport: ModelTransport = Depends(get_transport),
    _: AppState = Depends(require_auth)
):
    return await resolve_coordinates(lat, lng, transport, language)


# =============================================================================
# CHAT
# =============================================================================

def _history(req: ChatRequest):
    return [ChatTurn(t.role, t.text, t.is_error) for t in req.history]


@app.post("/api/chat")
async def chat(
    req: ChatRequest,
    transport: ModelTransport = Depends(get_transport),
    _: AppState = Depends(require_auth)
):
    """
    Stream the assistant reply as NDJSON events:
    {"type": "chunk", "text": ...} per fragment, then one
    {"type": "done", "text": <full reply>} or {"type": "error", "text": <message>}.
    """
    stream = stream_chat(transport, req.message, _history(req), req.language)

    async def events():
        try:
            async for fragment in stream:
                yield json.dumps({"type": "chunk", "text": fragment}) + "\n"
        except ChatStreamError as exc:
            logger.error("Chat stream failed: %s", exc.__cause__ or exc)
            yield json.dumps({"type": "error", "text": translate("chat_error", req.language)}) + "\n"
            return
        finally:
            # Client went away mid-reply
            await stream.cancel()
        yield json.dumps({"type": "done", "text": stream.text}) + "\n"

    return StreamingResponse(events(), media_type="application/x-ndjson")


@app.post("/api/chat/reply", response_model=ChatTurnModel)
async def chat_reply(
    req: ChatRequest,
    transport: ModelTransport = Depends(get_transport),
    _: AppState = Depends(require_auth)
):
    turn = await reply_turn(transport, req.message, _history(req), req.language)
    return ChatTurnModel(role=turn.role, text=turn.text, is_error=turn.is_error)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

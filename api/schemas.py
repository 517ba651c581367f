"""
schemas.py - Pydantic models for API requests and responses

Model replies (RiskAssessment, DocumentCheckResult, GeoDetails) are
returned as-is with their camelCase field names; only the wrappers
around them are defined here.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

from tenant_guardian.risk_schemas import RiskAssessment, SeverityTier
from tenant_guardian.schemas import ChatRole, Language


class ListingRequest(BaseModel):
    """
    Listing form as submitted by the front end.
    The photo travels base64-encoded next to its media type.
    """
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)           # monthly rent
    sqft: float = Field(..., gt=0)
    median_price: Optional[float] = Field(None, gt=0)
    owner_name: Optional[str] = None
    photo_base64: Optional[str] = None
    photo_mime_type: Optional[str] = None
    language: Language = Language.ENGLISH


class AssessmentResponse(BaseModel):
    """RiskAssessment plus the tier the dashboard colours by."""
    assessment: RiskAssessment
    tier: SeverityTier
    tier_label: str


class DocumentCheckRequest(BaseModel):
    image_base64: str = Field(..., min_length=1)
    mime_type: str = Field(..., min_length=1)
    language: Language = Language.ENGLISH


class ChatTurnModel(BaseModel):
    role: ChatRole
    text: str
    is_error: bool = False


class ChatRequest(BaseModel):
    """
    Next user message plus the conversation so far.
    The client owns the history and appends each reply itself.
    """
    message: str = Field(..., min_length=1)
    history: List[ChatTurnModel] = []
    language: Language = Language.ENGLISH


class LoginRequest(BaseModel):
    email: str
    password: str


class AccountRequest(BaseModel):
    """Account picked in the mock Google sign-in dialog."""
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    authenticated: bool


class ProfileModel(BaseModel):
    """Profile form, with the camelCase keys the front end uses."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    occupation: str = ""
    employer: str = ""
    income: str = ""
    emergency_name: str = ""
    emergency_phone: str = ""
    bio: str = ""


class ProfileResponse(BaseModel):
    profile: ProfileModel
    completion: int           # 0-100, share of filled-in fields


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None

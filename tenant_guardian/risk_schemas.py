"""
risk_schemas.py - Response Models for Model-Generated Assessments

Design Decisions:
- Every field is produced by the hosted model; nothing is computed here
- Pydantic models so a reply is validated eagerly, all-or-nothing
- Field aliases carry the exact camelCase names the prompt demands
- Severity tier is derived from the verdict colour, never from the score
"""

from enum import Enum
from typing import List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VerdictColor(str, Enum):
    """Colour the model assigns to its verdict."""
    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"


class SeverityTier(str, Enum):
    """
    Severity tier shown on the dashboard.
    Maps 1:1 with VerdictColor.
    """
    HIGH = "high"
    CAUTION = "caution"
    SAFE = "safe"


class GeoStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    UNKNOWN = "UNKNOWN"


class PriceStatus(str, Enum):
    HIGH_RISK = "HIGH_RISK"
    MODERATE_RISK = "MODERATE_RISK"
    LOW_RISK = "LOW_RISK"


class TextStatus(str, Enum):
    DETECTED = "DETECTED"
    CLEAR = "CLEAR"


class OwnershipStatus(str, Enum):
    PLAUSIBLE = "PLAUSIBLE"
    SUSPICIOUS = "SUSPICIOUS"
    UNKNOWN = "UNKNOWN"


class _ModelReply(BaseModel):
    """Base for everything parsed out of a model reply."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# SUB-FINDINGS
# =============================================================================

class GeoLog(_ModelReply):
    """Does the address exist, and is it residential?"""
    status: GeoStatus
    details: str


class PriceLog(_ModelReply):
    """Rent compared against area and median price."""
    status: PriceStatus
    details: str


class TextLog(_ModelReply):
    """Copy-paste and high-pressure wording in the description."""
    status: TextStatus
    details: str
    keywords_found: List[str] = Field(alias="keywordsFound")


class PhotoLog(_ModelReply):
    """Photo authenticity; 10 is authentic, 1 is fake."""
    integrity_score: float = Field(alias="integrityScore", ge=1, le=10)
    details: str


class OwnershipLog(_ModelReply):
    """Whether the claimed landlord plausibly owns the property."""
    status: OwnershipStatus
    details: str


# =============================================================================
# LISTING-LEVEL ASSESSMENT
# =============================================================================

class RiskAssessment(_ModelReply):
    """
    Complete fraud-risk assessment for a listing.

    Attributes:
        risk_score: 0-100, higher is riskier
        verdict: Verdict label ("HIGH RISK", "CAUTION", "SAFE")
        verdict_color: Colour bound to the severity tier
        summary: One-paragraph summary in the requested language
        geo_log / price_log / text_log / photo_log / ownership_log:
            The five independent checks
        actionable_steps: Ordered steps the tenant should take
    """
    risk_score: float = Field(alias="riskScore", ge=0, le=100)
    verdict: str
    verdict_color: VerdictColor = Field(alias="verdictColor")
    summary: str
    geo_log: GeoLog = Field(alias="geoLog")
    price_log: PriceLog = Field(alias="priceLog")
    text_log: TextLog = Field(alias="textLog")
    photo_log: PhotoLog = Field(alias="photoLog")
    ownership_log: OwnershipLog = Field(alias="ownershipLog")
    actionable_steps: List[str] = Field(alias="actionableSteps", min_length=1)

    @property
    def tier(self) -> SeverityTier:
        return color_to_tier(self.verdict_color)


# =============================================================================
# DOCUMENT CHECK & GEOCODE
# =============================================================================

class DocumentCheckResult(_ModelReply):
    """
    Reverse-image verdict for an uploaded document or photo.

    verdict is one of "STOLEN/STOCK PHOTO", "DUPLICATE LISTING",
    "UNIQUE/ORIGINAL" by instruction, but kept as free text.
    """
    verdict: str
    details: str
    sources: List[str] = Field(default_factory=list)

    @field_validator("sources", mode="before")
    @classmethod
    def _null_sources(cls, value):
        return [] if value is None else value


class GeoDetails(_ModelReply):
    """Address and building/business name at a map point."""
    address: str
    owner_name: str = Field(default="", alias="ownerName")

    @field_validator("owner_name", mode="before")
    @classmethod
    def _null_owner(cls, value):
        return "" if value is None else value


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def color_to_tier(color: VerdictColor) -> SeverityTier:
    """Map verdict colour to severity tier."""
    mapping = {
        VerdictColor.RED: SeverityTier.HIGH,
        VerdictColor.YELLOW: SeverityTier.CAUTION,
        VerdictColor.GREEN: SeverityTier.SAFE
    }
    return mapping[color]

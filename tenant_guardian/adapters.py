"""
adapters.py - Request/Response Adapters for the Hosted Model

One primitive and three call sites:
- request_structured(): send prompt parts, receive a validated reply model
- analyze_listing():     listing -> RiskAssessment
- verify_document():     image   -> DocumentCheckResult
- resolve_coordinates(): lat/lng -> GeoDetails (never fails)

Failure policy:
- analyze_listing and verify_document collapse every cause into
  AnalysisFailed with one localized message
- resolve_coordinates substitutes the coordinates themselves as the address
- nothing is retried; the user re-triggers the action
"""

import logging
from typing import Callable, Optional, Sequence, TypeVar

from tenant_guardian import config
from tenant_guardian.exceptions import (
    AnalysisFailed, EmptyResponseError, GuardianError,
    MissingInputError, TransportError
)
from tenant_guardian.model_client import ModelTransport
from tenant_guardian.prompt_builder import (
    build_document_prompt, build_geocode_prompt, build_listing_prompt
)
from tenant_guardian.response_parser import (
    parse_document_check, parse_geo_details, parse_risk_assessment
)
from tenant_guardian.risk_schemas import DocumentCheckResult, GeoDetails, RiskAssessment
from tenant_guardian.schemas import Language, ListingInput, PromptPart, RetrievalTool
from tenant_guardian.translations import translate


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Retrieval tools per call site
ANALYSIS_TOOLS = (RetrievalTool.WEB_SEARCH, RetrievalTool.MAP_LOOKUP)
DOCUMENT_TOOLS = (RetrievalTool.WEB_SEARCH,)
GEOCODE_TOOLS = (RetrievalTool.WEB_SEARCH, RetrievalTool.MAP_LOOKUP)


# =============================================================================
# PRIMITIVE
# =============================================================================

async def request_structured(
    transport: ModelTransport,
    parts: Sequence[PromptPart],
    tools: Sequence[RetrievalTool],
    parser: Callable[[str], T],
    model: Optional[str] = None
) -> T:
    """
    Send prompt parts to the model and parse its reply.

    Args:
        transport: Model backend
        parts: Ordered prompt parts
        tools: Retrieval tools enabled for this call
        parser: Turns raw reply text into a typed result
        model: Model name (default: ANALYSIS_MODEL)

    Returns:
        The parsed result

    Raises:
        TransportError: the call failed
        EmptyResponseError: the model returned no text
        MalformedResponse: the reply did not parse
    """
    model = model or config.ANALYSIS_MODEL
    try:
        text = await transport.generate(model, parts, tools)
    except GuardianError:
        raise
    except Exception as exc:
        raise TransportError(f"Model request failed: {exc}") from exc

    if not text or not text.strip():
        raise EmptyResponseError("No response from AI")
    return parser(text)


# =============================================================================
# CALL SITES
# =============================================================================

async def analyze_listing(
    listing: ListingInput,
    transport: ModelTransport,
    model: Optional[str] = None,
    currency_symbol: Optional[str] = None
) -> RiskAssessment:
    """
    Run the fraud-risk analysis for a listing.

    Raises:
        AnalysisFailed: for any failure, with a message in the listing's language
    """
    parts = build_listing_prompt(listing, currency_symbol or config.CURRENCY_SYMBOL)
    try:
        assessment = await request_structured(
            transport, parts, ANALYSIS_TOOLS, parse_risk_assessment, model
        )
    except GuardianError as exc:
        logger.error("Listing analysis failed (%s): %s", type(exc).__name__, exc)
        raise AnalysisFailed(
            translate("analysis_error", listing.language), "analyze_listing"
        ) from exc

    logger.info(
        "Listing analyzed: score=%.0f color=%s",
        assessment.risk_score, assessment.verdict_color.value
    )
    return assessment


async def verify_document(
    image_data: Optional[bytes],
    mime_type: Optional[str],
    transport: ModelTransport,
    language: Language = Language.ENGLISH,
    model: Optional[str] = None
) -> DocumentCheckResult:
    """
    Reverse-image check of a lease, ID or property photo.

    Raises:
        AnalysisFailed: for any failure, including a missing image
    """
    try:
        if not image_data or not mime_type:
            raise MissingInputError("An image and its media type are required")
        parts = build_document_prompt(image_data, mime_type, language)
        return await request_structured(
            transport, parts, DOCUMENT_TOOLS, parse_document_check, model
        )
    except GuardianError as exc:
        logger.error("Document check failed (%s): %s", type(exc).__name__, exc)
        raise AnalysisFailed(
            translate("document_error", language), "verify_document"
        ) from exc


def fallback_geo_details(latitude: float, longitude: float) -> GeoDetails:
    """Degraded result used when the lookup fails: the coordinates themselves."""
    return GeoDetails(address=f"{latitude:.4f}, {longitude:.4f}", owner_name="")


async def resolve_coordinates(
    latitude: float,
    longitude: float,
    transport: ModelTransport,
    language: Language = Language.ENGLISH,
    model: Optional[str] = None
) -> GeoDetails:
    """
    Resolve a map click to an address and building/business name.

    Map interaction must never hard-fail, so every error is replaced by
    the fallback result.
    """
    parts = build_geocode_prompt(latitude, longitude, language)
    try:
        return await request_structured(
            transport, parts, GEOCODE_TOOLS, parse_geo_details, model
        )
    except Exception as exc:
        logger.warning(
            "Coordinate lookup failed for (%s, %s), using fallback: %s",
            latitude, longitude, exc
        )
        return fallback_geo_details(latitude, longitude)

"""
mock_data.py - Canned model replies for demo mode

MockTransport answers every model request with a fixed, well-formed
reply so the API and front end can be developed without a Gemini key.
The listing reply is picked by counting red-flag phrases in the prompt.
"""

import asyncio
import copy
import json
import re
from typing import AsyncIterator, Dict, Optional, Sequence

from tenant_guardian.schemas import ChatTurn, PromptPart, RetrievalTool, TextPart


# =============================================================================
# MOCK REPLIES
# =============================================================================

RED_FLAG_PHRASES = [
    "wire transfer",
    "western union",
    "owner abroad",
    "out of the country",
    "urgent",
    "advance payment",
    "deposit before viewing",
    "no viewing",
]

MOCK_ASSESSMENTS: Dict[str, dict] = {
    "high": {
        "riskScore": 88,
        "verdict": "HIGH RISK",
        "verdictColor": "RED",
        "summary": "RISK: High. FLAGS: pressure wording, payment before viewing. VERIFIED: none.",
        "geoLog": {"status": "UNKNOWN", "details": "Address could not be confirmed as residential."},
        "priceLog": {"status": "HIGH_RISK", "details": "Rent is far below comparable listings nearby."},
        "textLog": {
            "status": "DETECTED",
            "details": "Description pushes for payment before any viewing.",
            "keywordsFound": []
        },
        "photoLog": {"integrityScore": 3, "details": "Photo looks like a staged stock image."},
        "ownershipLog": {"status": "SUSPICIOUS", "details": "Claimed owner has no record at this address."},
        "actionableSteps": [
            "Do not send any money before an in-person viewing.",
            "Ask for the landlord's ID and a property ownership document.",
            "Report the listing to the platform it was posted on."
        ]
    },
    "medium": {
        "riskScore": 52,
        "verdict": "CAUTION",
        "verdictColor": "YELLOW",
        "summary": "RISK: Moderate. FLAGS: one pressure phrase. VERIFIED: address exists.",
        "geoLog": {"status": "PASS", "details": "Address exists and is residential."},
        "priceLog": {"status": "MODERATE_RISK", "details": "Rent is somewhat below the area median."},
        "textLog": {
            "status": "DETECTED",
            "details": "One high-pressure phrase found.",
            "keywordsFound": []
        },
        "photoLog": {"integrityScore": 6, "details": "Photo is plausible but could not be geolocated."},
        "ownershipLog": {"status": "UNKNOWN", "details": "No public ownership record found."},
        "actionableSteps": [
            "Visit the property before paying anything.",
            "Verify the landlord's identity against the rental agreement.",
            "Pay only through traceable channels."
        ]
    },
    "low": {
        "riskScore": 12,
        "verdict": "SAFE",
        "verdictColor": "GREEN",
        "summary": "RISK: Low. FLAGS: none. VERIFIED: address, price range, photo.",
        "geoLog": {"status": "PASS", "details": "Address exists and is residential."},
        "priceLog": {"status": "LOW_RISK", "details": "Rent is in line with the area."},
        "textLog": {"status": "CLEAR", "details": "No suspicious wording found.", "keywordsFound": []},
        "photoLog": {"integrityScore": 9, "details": "Photo matches the neighbourhood."},
        "ownershipLog": {"status": "PLAUSIBLE", "details": "Owner name matches public records."},
        "actionableSteps": [
            "Still view the property in person.",
            "Read the rental agreement fully before signing.",
            "Keep receipts for every payment."
        ]
    },
}

MOCK_DOCUMENT_CHECK = {
    "verdict": "UNIQUE/ORIGINAL",
    "details": "Demo mode: no matching copies of this image were searched for.",
    "sources": []
}

MOCK_CHAT_REPLY = (
    "In demo mode I can only give general advice: never pay a deposit before "
    "viewing a property in person, and verify the landlord's identity."
)

COORDINATES = re.compile(r"Latitude (-?\d+(?:\.\d+)?), Longitude (-?\d+(?:\.\d+)?)")


def _prompt_text(parts: Sequence[PromptPart]) -> str:
    return "\n".join(p.text for p in parts if isinstance(p, TextPart))


def pick_risk_profile(prompt_text: str) -> str:
    """Count red-flag phrases: two or more is high, one is medium."""
    text = prompt_text.lower()
    hits = [p for p in RED_FLAG_PHRASES if p in text]
    if len(hits) >= 2:
        return "high"
    if hits:
        return "medium"
    return "low"


def generate_mock_assessment(prompt_text: str) -> dict:
    """Canned RiskAssessment document for the listing in the prompt."""
    data_text = prompt_text.split("ANALYZE THIS LISTING", 1)[-1]
    profile = pick_risk_profile(data_text)
    assessment = copy.deepcopy(MOCK_ASSESSMENTS[profile])
    assessment["textLog"]["keywordsFound"] = [
        p for p in RED_FLAG_PHRASES if p in data_text.lower()
    ]
    return assessment


# =============================================================================
# TRANSPORT
# =============================================================================

class MockTransport:
    """ModelTransport returning canned replies."""

    async def generate(
        self,
        model: str,
        parts: Sequence[PromptPart],
        tools: Sequence[RetrievalTool]
    ) -> Optional[str]:
        text = _prompt_text(parts)

        if "You are Check.AI" in text:
            return json.dumps(MOCK_DOCUMENT_CHECK)

        match = COORDINATES.search(text)
        if match and "ANALYZE THIS LISTING" not in text:
            lat, lng = float(match.group(1)), float(match.group(2))
            return json.dumps({
                "address": f"Demo address near {lat:.4f}, {lng:.4f}",
                "ownerName": ""
            })

        # Wrapped the way the real model sometimes answers
        return "```json\n" + json.dumps(generate_mock_assessment(text), indent=2) + "\n```"

    async def stream_chat(
        self,
        model: str,
        message: str,
        history: Sequence[ChatTurn],
        system_instruction: str
    ) -> AsyncIterator[str]:
        for i, word in enumerate(MOCK_CHAT_REPLY.split(" ")):
            await asyncio.sleep(0)
            yield word if i == 0 else " " + word

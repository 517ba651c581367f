"""
report.py - Text Rendering of a RiskAssessment

The results dashboard, as plain text and as a compact summary dict.
Nothing here re-scores the listing; it only lays out what the model said.
"""

from typing import Any, Dict, List

from tenant_guardian.risk_schemas import (
    GeoStatus, OwnershipStatus, PriceStatus, RiskAssessment, SeverityTier, TextStatus
)
from tenant_guardian.schemas import Language
from tenant_guardian.translations import translate


TIER_LABEL_KEYS = {
    SeverityTier.HIGH: "tier_high",
    SeverityTier.CAUTION: "tier_caution",
    SeverityTier.SAFE: "tier_safe",
}


def tier_label(tier: SeverityTier, language: Language = Language.ENGLISH) -> str:
    return translate(TIER_LABEL_KEYS[tier], language)


def summarize_assessment(
    assessment: RiskAssessment,
    language: Language = Language.ENGLISH
) -> Dict[str, Any]:
    """
    Create a summary view of the assessment.

    Lists which of the five checks raised a concern, for quick review.
    """
    concerns: List[str] = []
    if assessment.geo_log.status == GeoStatus.FAIL:
        concerns.append("location")
    if assessment.price_log.status != PriceStatus.LOW_RISK:
        concerns.append("price")
    if assessment.text_log.status == TextStatus.DETECTED:
        concerns.append("text")
    if assessment.photo_log.integrity_score <= 5:
        concerns.append("photo")
    if assessment.ownership_log.status == OwnershipStatus.SUSPICIOUS:
        concerns.append("ownership")

    return {
        'risk_score': round(assessment.risk_score),
        'verdict': assessment.verdict,
        'tier': assessment.tier.value,
        'tier_label': tier_label(assessment.tier, language),
        'concerns': concerns,
        'keywords': list(assessment.text_log.keywords_found),
        'next_step': assessment.actionable_steps[0]
    }


def format_assessment_report(
    assessment: RiskAssessment,
    language: Language = Language.ENGLISH
) -> str:
    """
    Format assessment as human-readable report.
    """
    lines = [
        "=" * 60,
        f"VERDICT: {assessment.verdict} [{tier_label(assessment.tier, language)}]",
        "=" * 60,
        "",
        f"Risk Score: {assessment.risk_score:.0f}/100",
        f"Summary: {assessment.summary}",
        "",
        "Checks:",
        f"  - Location:  {assessment.geo_log.status.value}",
        f"      {assessment.geo_log.details}",
        f"  - Price:     {assessment.price_log.status.value}",
        f"      {assessment.price_log.details}",
        f"  - Text:      {assessment.text_log.status.value}",
        f"      {assessment.text_log.details}",
    ]

    if assessment.text_log.keywords_found:
        lines.append(f"      Keywords: {', '.join(assessment.text_log.keywords_found)}")

    lines.extend([
        f"  - Photo:     integrity {assessment.photo_log.integrity_score:g}/10",
        f"      {assessment.photo_log.details}",
        f"  - Ownership: {assessment.ownership_log.status.value}",
        f"      {assessment.ownership_log.details}",
        "",
        "What to do next:",
    ])
    for i, step in enumerate(assessment.actionable_steps, 1):
        lines.append(f"  {i}. {step}")

    return "\n".join(lines)

"""
prompt_builder.py - Render Instructions and Listing Data into Prompt Parts

Each builder returns an ordered list of content parts:
1. An instruction text part spelling out the JSON contract the reply must
   satisfy (literal field names and allowed enum values)
2. A data text part with every user-supplied field interpolated
3. An image part, only when image bytes and a media type are both present

Builders are pure: the same input always yields identical parts.
"""

from typing import List

from tenant_guardian.schemas import (
    Language, ListingInput, PromptPart, TextPart, ImagePart
)


# =============================================================================
# INSTRUCTION TEMPLATES
# =============================================================================

LISTING_INSTRUCTIONS = """
You are Tenant Guardian, a multimodal rental scam detector working on behalf of tenants.

Assess this rental listing for fraud risk with the five checks below. Use the Google Search and Google Maps tools to verify each one.

CHECKS:
1. ADDRESS:
   - Confirm the address exists on Google Maps.
   - Flag a residential/commercial mismatch (e.g. a "cozy apartment" that Maps shows as a warehouse or industrial plot).

2. PRICE:
   - Compare the monthly price against the area in sqft and the median price for that locality.
   - Scams are usually priced too good to be true (more than 30% below market). Also flag prices more than 30% above market.

3. PHOTO:
   - Check whether the photo matches the address (architecture, climate, season, geotag clues).
   - Look for stock photos, staged "perfect" images, or watermarks from other sites.

4. LANDLORD:
   - Search the claimed landlord/owner name together with the address.
   - Look for business records, ownership data, or scam complaints.
   - If the name is generic (e.g. "Private Owner") but the property belongs to a large company, flag it.

5. DESCRIPTION:
   - Detect text copied from legitimate listings (generic or stolen wording).
   - Detect high-pressure tactics ("Urgent", "Wire transfer only", "Owner abroad").

OUTPUT FORMAT:
Reply with one raw JSON object and nothing else. Do not wrap it in markdown code fences.

All text fields (summary, details, actionableSteps) MUST be written in {language}.

{{
  "riskScore": number (0-100, 100 = almost certainly a scam),
  "verdict": "HIGH RISK" | "CAUTION" | "SAFE",
  "verdictColor": "RED" | "YELLOW" | "GREEN",
  "summary": string (in {language}; format: "RISK: [level]. FLAGS: [main flags]. VERIFIED: [verified items]."),
  "geoLog": {{
    "status": "PASS" | "FAIL" | "UNKNOWN",
    "details": string (in {language})
  }},
  "priceLog": {{
    "status": "HIGH_RISK" | "MODERATE_RISK" | "LOW_RISK",
    "details": string (in {language})
  }},
  "textLog": {{
    "status": "DETECTED" | "CLEAR",
    "details": string (in {language}),
    "keywordsFound": string[]
  }},
  "photoLog": {{
    "integrityScore": number (1-10, 10 = authentic, 1 = fake),
    "details": string (in {language})
  }},
  "ownershipLog": {{
    "status": "PLAUSIBLE" | "SUSPICIOUS" | "UNKNOWN",
    "details": string (in {language})
  }},
  "actionableSteps": string[] (3-5 concrete steps for the tenant, in {language})
}}
"""

LISTING_DATA = """
ANALYZE THIS LISTING ({language}):
- Title: {title}
- Address: {address}
- Listed Price: {price}
- Median Area Price: {median_price}
- Sqft: {sqft}
- Landlord/Owner Name Claimed: {owner_name}
- Description: "{description}"
"""

# Median price estimation is left entirely to the model.
UNKNOWN_MEDIAN_PRICE = "Unknown (Estimate based on location)"
OWNER_NOT_PROVIDED = "Not provided"

DOCUMENT_INSTRUCTIONS = """
You are Check.AI, a document verification engine.

Analyze the attached image. Use Google Search to find out whether this exact image appears on the public internet (reverse image search).

Tasks:
1. Identify the document or image (lease agreement, ID card, house photo, stock photo, ...).
2. Check whether it exists on stock photo sites, other real estate listings, or public templates.
3. Give a verdict:
   - Found on stock photo sites: "STOLEN/STOCK PHOTO"
   - Found on other listings: "DUPLICATE LISTING"
   - Not found anywhere: "UNIQUE/ORIGINAL"

Reply with one raw JSON object (no markdown):
{{
  "verdict": string,
  "details": string (in {language}),
  "sources": string[] (URLs where the image was found, if any)
}}
"""

GEOCODE_INSTRUCTIONS = """
I have a location at Latitude {latitude}, Longitude {longitude}.

Use Google Maps and Google Search to:
1. Find the precise postal address of this point.
2. Identify the building name, apartment complex, or business at this exact spot
   (e.g. "Prestige Tech Park", "Sunshine Apartments", "McDonald's").
   For a private house, check whether it has a known house name.

Reply with one raw JSON object ONLY (no markdown):
{{
  "address": "Full postal address in {language}",
  "ownerName": "Name of the building/complex/business, or empty if unknown"
}}
"""

CHAT_INSTRUCTIONS = (
    "You are Tenant Guardian's AI assistant. You help users understand rental laws, "
    "spot red flags in listings, and stay safe while renting. Be helpful, concise and "
    "safety-oriented. The user has selected {language} as their preferred language. "
    "Always reply in {language}."
)


# =============================================================================
# BUILDERS
# =============================================================================

def _language_name(language: Language) -> str:
    return Language(language).value


def format_amount(value: float) -> str:
    """Render a number as entered: 32000.0 becomes "32000", 1850.5 stays."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_listing_prompt(
    listing: ListingInput,
    currency_symbol: str = "₹"
) -> List[PromptPart]:
    """
    Build the prompt parts for a listing risk analysis.

    Args:
        listing: The submitted listing
        currency_symbol: Prefix for price values

    Returns:
        [instructions, listing data] plus the photo when one was attached
    """
    language = _language_name(listing.language)

    if listing.median_price is not None:
        median_price = f"{currency_symbol}{format_amount(listing.median_price)}"
    else:
        median_price = UNKNOWN_MEDIAN_PRICE

    data = LISTING_DATA.format(
        language=language,
        title=listing.title,
        address=listing.address,
        price=f"{currency_symbol}{format_amount(listing.price)}",
        median_price=median_price,
        sqft=format_amount(listing.sqft),
        owner_name=listing.owner_name or OWNER_NOT_PROVIDED,
        description=listing.description
    )

    parts: List[PromptPart] = [
        TextPart(LISTING_INSTRUCTIONS.format(language=language)),
        TextPart(data),
    ]
    if listing.has_photo:
        parts.append(ImagePart(data=listing.photo_data, mime_type=listing.photo_mime_type))
    return parts


def build_document_prompt(
    image_data: bytes,
    mime_type: str,
    language: Language = Language.ENGLISH
) -> List[PromptPart]:
    """Build the prompt parts for a reverse-image document check."""
    return [
        TextPart(DOCUMENT_INSTRUCTIONS.format(language=_language_name(language))),
        ImagePart(data=image_data, mime_type=mime_type),
    ]


def build_geocode_prompt(
    latitude: float,
    longitude: float,
    language: Language = Language.ENGLISH
) -> List[PromptPart]:
    """Build the prompt for a coordinate-to-address lookup."""
    return [
        TextPart(GEOCODE_INSTRUCTIONS.format(
            latitude=latitude,
            longitude=longitude,
            language=_language_name(language)
        ))
    ]


def chat_system_instruction(language: Language = Language.ENGLISH) -> str:
    """System instruction for the chat model."""
    return CHAT_INSTRUCTIONS.format(language=_language_name(language))

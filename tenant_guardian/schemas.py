"""
schemas.py - Input Data Models for the Tenant Guardian Assistant

Design Decisions:
- Use dataclasses for request-side data; it is built from form state
  and never re-validated against an external contract
- All input models are immutable (frozen=True) once submitted
- Enums for constrained values (language, chat role)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union, Dict, Any


class Language(str, Enum):
    """
    Output languages offered in the UI.
    The value is the language name passed verbatim to the model.
    """
    ENGLISH = "English"
    HINDI = "Hindi"
    FRENCH = "French"
    SPANISH = "Spanish"


class ChatRole(str, Enum):
    """Author of a chat turn."""
    USER = "user"
    ASSISTANT = "assistant"


class RetrievalTool(str, Enum):
    """Retrieval capabilities the hosted model may be given."""
    WEB_SEARCH = "web_search"
    MAP_LOOKUP = "map_lookup"


# =============================================================================
# PROMPT PARTS
# =============================================================================

@dataclass(frozen=True)
class TextPart:
    """A plain text content part."""
    text: str


@dataclass(frozen=True)
class ImagePart:
    """An inline binary image content part."""
    data: bytes
    mime_type: str


PromptPart = Union[TextPart, ImagePart]


# =============================================================================
# LISTING INPUT
# =============================================================================

@dataclass(frozen=True)
class ListingInput:
    """
    A rental listing as submitted by the tenant.

    Attributes:
        title: Listing headline
        description: Free-text description copied from the listing
        address: Postal address claimed by the listing
        price: Monthly rent
        sqft: Area in square feet
        median_price: Median monthly rent for the area, if known
        photo_data: Raw photo bytes, if a photo was attached
        photo_mime_type: Media type of the photo (e.g. "image/jpeg")
        owner_name: Landlord/owner name claimed by the listing
        language: Language the assessment text must be written in
    """
    title: str
    description: str
    address: str
    price: float
    sqft: float
    median_price: Optional[float] = None
    photo_data: Optional[bytes] = None
    photo_mime_type: Optional[str] = None
    owner_name: Optional[str] = None
    language: Language = Language.ENGLISH

    @property
    def has_photo(self) -> bool:
        """A photo counts only when both bytes and media type are present."""
        return bool(self.photo_data) and bool(self.photo_mime_type)


# =============================================================================
# CHAT
# =============================================================================

@dataclass(frozen=True)
class ChatTurn:
    """
    One message in a chat conversation.

    Attributes:
        role: Who wrote the message
        text: Message text
        is_error: True for the synthetic turn produced when a reply failed
    """
    role: ChatRole
    text: str
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'role': self.role.value,
            'text': self.text,
            'is_error': self.is_error
        }

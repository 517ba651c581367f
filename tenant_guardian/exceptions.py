"""
exceptions.py - Failure Taxonomy for Model Requests

Four causes can end a request:
(a) TransportError      - the network call itself failed
(b) EmptyResponseError  - the model answered with no text
(c) MalformedResponse   - the text could not be parsed into the expected shape
(d) MissingInputError   - a required input (e.g. the image) was absent

Analysis and document checks collapse all four into AnalysisFailed, which
carries one user-facing message. The cause stays on __cause__ for logs.
"""

from typing import Optional


class GuardianError(Exception):
    """Base class for every failure raised by this package."""


class TransportError(GuardianError):
    """The request to the hosted model did not complete."""


class EmptyResponseError(GuardianError):
    """The model returned an empty reply."""


class MalformedResponse(GuardianError):
    """
    The model reply is not valid JSON of the expected shape.

    Attributes:
        raw_text: The reply exactly as received, for logging
    """

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class MissingInputError(GuardianError):
    """A required input was not supplied."""


class AnalysisFailed(GuardianError):
    """
    User-facing failure of an analysis or document check.

    Attributes:
        user_message: Localized message safe to show the end user
        operation: Which call failed ("analyze_listing", "verify_document")
    """

    def __init__(self, user_message: str, operation: str):
        super().__init__(user_message)
        self.user_message = user_message
        self.operation = operation


class ChatStreamError(GuardianError):
    """The chat reply stream failed part-way."""

"""
model_client.py - Transport to the Hosted Generative Model

ModelTransport is the seam between the adapters and the network:
- generate(): one prompt in, one text reply out
- stream_chat(): one message plus history in, text fragments out

GeminiTransport implements it on the google-genai SDK. Tests and demo
mode substitute their own transports with the same two methods.
"""

import logging
from typing import AsyncIterator, Optional, Protocol, Sequence

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from tenant_guardian import config
from tenant_guardian.exceptions import TransportError
from tenant_guardian.schemas import (
    ChatRole, ChatTurn, ImagePart, PromptPart, RetrievalTool, TextPart
)


logger = logging.getLogger(__name__)

# Failures that mean the request never produced a usable reply
TRANSPORT_FAILURES = (genai_errors.APIError, httpx.HTTPError)


class ModelTransport(Protocol):
    """What the adapters need from a model backend."""

    async def generate(
        self,
        model: str,
        parts: Sequence[PromptPart],
        tools: Sequence[RetrievalTool]
    ) -> Optional[str]:
        ...

    def stream_chat(
        self,
        model: str,
        message: str,
        history: Sequence[ChatTurn],
        system_instruction: str
    ) -> AsyncIterator[str]:
        ...


# =============================================================================
# GEMINI
# =============================================================================

def to_gemini_part(part: PromptPart) -> types.Part:
    """Convert a prompt part into an SDK content part."""
    if isinstance(part, ImagePart):
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
    if isinstance(part, TextPart):
        return types.Part.from_text(text=part.text)
    raise TypeError(f"Unsupported prompt part: {type(part).__name__}")


def to_gemini_tool(tool: RetrievalTool) -> types.Tool:
    """Convert a retrieval capability into an SDK tool."""
    if tool == RetrievalTool.WEB_SEARCH:
        return types.Tool(google_search=types.GoogleSearch())
    if tool == RetrievalTool.MAP_LOOKUP:
        return types.Tool(google_maps=types.GoogleMaps())
    raise ValueError(f"Unsupported retrieval tool: {tool}")


def to_gemini_history(history: Sequence[ChatTurn]) -> list:
    """Convert chat turns into SDK contents; the SDK calls the assistant 'model'."""
    contents = []
    for turn in history:
        role = "user" if turn.role == ChatRole.USER else "model"
        contents.append(types.Content(role=role, parts=[types.Part.from_text(text=turn.text)]))
    return contents


class GeminiTransport:
    """ModelTransport backed by the Gemini API."""

    def __init__(self, api_key: Optional[str] = None, client: Optional[genai.Client] = None):
        if client is None:
            key = api_key or config.GEMINI_API_KEY
            if not key:
                raise RuntimeError("GEMINI_API_KEY is not set.")
            client = genai.Client(api_key=key)
        self.client = client

    async def generate(
        self,
        model: str,
        parts: Sequence[PromptPart],
        tools: Sequence[RetrievalTool]
    ) -> Optional[str]:
        contents = [types.Content(role="user", parts=[to_gemini_part(p) for p in parts])]
        request_config = types.GenerateContentConfig(tools=[to_gemini_tool(t) for t in tools])

        logger.debug("generate_content model=%s parts=%d tools=%s", model, len(parts), list(tools))
        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=request_config
            )
        except TRANSPORT_FAILURES as exc:
            raise TransportError(f"Model request failed: {exc}") from exc
        return response.text

    async def stream_chat(
        self,
        model: str,
        message: str,
        history: Sequence[ChatTurn],
        system_instruction: str
    ) -> AsyncIterator[str]:
        chat = self.client.aio.chats.create(
            model=model,
            history=to_gemini_history(history),
            config=types.GenerateContentConfig(system_instruction=system_instruction)
        )
        try:
            stream = await chat.send_message_stream(message)
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except TRANSPORT_FAILURES as exc:
            raise TransportError(f"Chat stream failed: {exc}") from exc

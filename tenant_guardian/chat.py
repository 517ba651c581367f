"""
chat.py - Streaming Chat Adapter

The chat model replies incrementally. ChatStream wraps the transport's
fragment iterator as a pull-based, non-restartable sequence:

    PENDING -> STREAMING -> ENDED
                         -> ERRORED   (transport failed mid-stream)
                         -> CANCELLED (consumer called cancel())

Fragments are produced only while the consumer pulls, so a consumer
that stops early causes no further network activity. The adapter keeps
no conversation state: the caller owns the history and appends the
assembled reply itself.
"""

import asyncio
import logging
from enum import Enum
from typing import AsyncIterator, Iterable, List, Optional, Sequence

from tenant_guardian import config
from tenant_guardian.exceptions import ChatStreamError
from tenant_guardian.model_client import ModelTransport
from tenant_guardian.prompt_builder import chat_system_instruction
from tenant_guardian.schemas import ChatRole, ChatTurn, Language
from tenant_guardian.translations import translate


logger = logging.getLogger(__name__)


class StreamState(str, Enum):
    PENDING = "pending"
    STREAMING = "streaming"
    ENDED = "ended"
    ERRORED = "errored"
    CANCELLED = "cancelled"


FINISHED_STATES = (StreamState.ENDED, StreamState.ERRORED, StreamState.CANCELLED)


class ChatStream:
    """
    Lazy, finite sequence of reply fragments.

    Attributes:
        state: Current StreamState
        error: The exception that ended the stream, when ERRORED
    """

    def __init__(self, source: AsyncIterator[str]):
        self._source = source
        self.state = StreamState.PENDING
        self.error: Optional[BaseException] = None
        self._fragments: List[str] = []

    def __aiter__(self) -> "ChatStream":
        return self

    async def __anext__(self) -> str:
        if self.state in FINISHED_STATES:
            raise StopAsyncIteration

        self.state = StreamState.STREAMING
        while True:
            try:
                fragment = await self._source.__anext__()
            except StopAsyncIteration:
                self.state = StreamState.ENDED
                raise
            except asyncio.CancelledError:
                self.state = StreamState.CANCELLED
                raise
            except Exception as exc:
                self.state = StreamState.ERRORED
                self.error = exc
                raise ChatStreamError(f"Chat stream failed: {exc}") from exc

            # Empty chunks carry no text
            if fragment:
                self._fragments.append(fragment)
                return fragment

    async def cancel(self) -> None:
        """Stop the stream; no further fragments will be produced."""
        if self.state in FINISHED_STATES:
            return
        self.state = StreamState.CANCELLED
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()

    @property
    def text(self) -> str:
        """Everything received so far."""
        return assemble_reply(self._fragments)

    async def collect(self) -> str:
        """Consume the rest of the stream and return the full reply."""
        async for _ in self:
            pass
        return self.text


def assemble_reply(fragments: Iterable[str]) -> str:
    """Concatenate fragments into the full reply."""
    return "".join(fragments)


def history_for_model(history: Sequence[ChatTurn]) -> List[ChatTurn]:
    """Synthetic error turns were never said by the model; leave them out."""
    return [turn for turn in history if not turn.is_error]


# =============================================================================
# ENTRY POINTS
# =============================================================================

def stream_chat(
    transport: ModelTransport,
    message: str,
    history: Sequence[ChatTurn] = (),
    language: Language = Language.ENGLISH,
    model: Optional[str] = None
) -> ChatStream:
    """
    Start a streamed reply to `message`.

    Nothing is sent until the first fragment is pulled.
    """
    source = transport.stream_chat(
        model or config.CHAT_MODEL,
        message,
        history_for_model(history),
        chat_system_instruction(language)
    )
    return ChatStream(source)


async def reply_turn(
    transport: ModelTransport,
    message: str,
    history: Sequence[ChatTurn] = (),
    language: Language = Language.ENGLISH,
    model: Optional[str] = None
) -> ChatTurn:
    """
    Produce the complete assistant turn for `message`.

    A failure becomes a single assistant turn with is_error=True rather
    than an exception.
    """
    stream = stream_chat(transport, message, history, language, model)
    try:
        reply = await stream.collect()
    except ChatStreamError as exc:
        logger.error("Chat reply failed: %s", exc.__cause__ or exc)
        return ChatTurn(ChatRole.ASSISTANT, translate("chat_error", language), is_error=True)
    return ChatTurn(ChatRole.ASSISTANT, reply)

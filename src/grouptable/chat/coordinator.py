"""Streaming response coordination.

Hides how one user message turns into one assistant reply: the request is
built from prior history, streamed deltas are accumulated into the
placeholder, and failures are replaced by a classified, localized sentence.
"""

import asyncio
from collections.abc import Sequence
from typing import Any

from ..diagnostics import DebugCallback, console_debug_callback
from ..llm import GenerationRequest, HistoryEntry, LLMProvider
from ..restaurants import Restaurant
from .errors import ErrorCategory, classify
from .locales import cancelled_note
from .models import ChatMessage, ChatRole, MessageHandle
from .session import ChatSession


def to_backend_history(messages: Sequence[ChatMessage]) -> tuple[HistoryEntry, ...]:
    """Map chat messages to the backend's role vocabulary.

    Assistant turns become 'model'; user and system turns become 'user'.
    """
    return tuple(
        HistoryEntry(
            role="model" if message.role is ChatRole.ASSISTANT else "user",
            text=message.content,
        )
        for message in messages
    )


class StreamingResponseCoordinator:
    """Runs send operations against one session and one provider.

    At most one send is in flight per session; the session's loading flag is
    the lock. A send requested while another is running is dropped.

    Example:
        coordinator = StreamingResponseCoordinator(session, provider, restaurants)
        await coordinator.send_message("Split, 45 people")
        print(session.messages[-1].content)
    """

    def __init__(
        self,
        session: ChatSession,
        llm: LLMProvider,
        restaurants: Sequence[Restaurant] = (),
        debug_callback: DebugCallback | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            session: Session whose conversation receives the messages
            llm: Backend provider producing streamed replies
            restaurants: Dataset forwarded with every request
            debug_callback: Diagnostic sink (default: warnings and errors to stderr)
        """
        self._session = session
        self._llm = llm
        self._restaurants = tuple(restaurants)
        self._debug_callback = debug_callback or console_debug_callback()
        self._last_usage: dict[str, Any] | None = None

    @property
    def loading(self) -> bool:
        return self._session.state.loading

    @property
    def last_usage(self) -> dict[str, Any] | None:
        """Token usage reported for the most recent completed reply."""
        return self._last_usage

    def set_debug_callback(self, callback: DebugCallback) -> None:
        """Set the debug callback for diagnostic messages.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        self._debug_callback(level, component, message)

    async def send_message(self, raw_input: str | None = None) -> bool:
        """Send a user message and stream the reply into the conversation.

        Empty input and sends while another one is loading are silent no-ops.
        Backend failures never propagate: they end as one localized error
        message in place of the reply.

        Args:
            raw_input: Text to send (None sends the session's pending input)

        Returns:
            True if the message was sent, False if the call was a no-op
        """
        session = self._session
        text = (session.state.pending_input if raw_input is None else raw_input).strip()
        if not text or session.state.loading:
            return False

        user_handle = session.append_message(ChatMessage(role=ChatRole.USER, content=text))
        session.set_pending_input("")
        session.set_loading(True)
        placeholder = session.begin_streaming()
        try:
            await self._stream_reply(user_handle, placeholder, text)
        finally:
            session.end_streaming(placeholder)
            session.set_loading(False)
        return True

    async def _stream_reply(
        self,
        user_handle: MessageHandle,
        placeholder: MessageHandle,
        text: str,
    ) -> None:
        session = self._session
        language = session.state.selected_language
        accumulated = ""
        try:
            request = GenerationRequest(
                history=to_backend_history(session.conversation.before(user_handle)),
                latest_user_text=text,
                restaurants=self._restaurants,
                language=language,
            )
            self._debug("info", "LLM", f"Sending message ({len(text)} chars, {len(request.history)} prior turns)")

            stream = await self._llm.generate_response_stream(request)
            async for chunk in stream:
                accumulated += chunk.text
                session.replace_streaming_content(placeholder, accumulated)
            self._last_usage = stream.usage

            if not accumulated:
                self._debug("warning", "LLM", "Stream finished without any text")
                session.replace_streaming_content(
                    placeholder, session.localize_error(ErrorCategory.GENERIC)
                )
            else:
                self._debug("info", "LLM", f"Response complete ({len(accumulated)} chars)")

        except asyncio.CancelledError:
            # Abandon in place: keep what already arrived
            self._debug("warning", "LLM", f"Response cancelled after {len(accumulated)} chars")
            if not accumulated:
                session.replace_streaming_content(placeholder, cancelled_note(language))
            raise

        except Exception as e:
            self._debug("error", "LLM", f"Error getting response from backend: {e!r}")
            category = classify(e)
            self._debug("debug", "LLM", f"Classified failure as {category.value}")
            session.replace_streaming_content(placeholder, session.localize_error(category))

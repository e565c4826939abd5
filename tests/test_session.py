"""Unit tests for the chat session state machine."""
import pytest
from pydantic import ValidationError

from grouptable.chat import (
    ChatMessage,
    ChatRole,
    ChatSession,
    Conversation,
    EventKind,
    InactiveMessageError,
    MessageHandle,
    SessionPhase,
    StreamingInProgressError,
)
from grouptable.chat.errors import ErrorCategory
from grouptable.chat.locales import INITIAL_PROMPTS, WELCOME_MESSAGE


class TestConversation:
    """Tests for the immutable conversation value."""

    def test_append_returns_new_value(self):
        """Test that appending leaves the original untouched."""
        empty = Conversation()
        updated, handle = empty.append(ChatMessage(role=ChatRole.USER, content="hi"))

        assert len(empty) == 0
        assert len(updated) == 1
        assert handle == MessageHandle(index=0)
        assert updated.get(handle).content == "hi"

    def test_replace_content(self):
        """Test replacing one message's content."""
        conversation, handle = Conversation().append(ChatMessage(role=ChatRole.ASSISTANT))
        replaced = conversation.replace_content(handle, "Hello")

        assert conversation.get(handle).content == ""
        assert replaced.get(handle).content == "Hello"
        assert replaced.get(handle).role is ChatRole.ASSISTANT

    def test_unknown_handle(self):
        """Test that a handle past the end is rejected."""
        with pytest.raises(IndexError):
            Conversation().get(MessageHandle(index=3))

    def test_messages_are_frozen(self):
        """Test that messages cannot be mutated in place."""
        message = ChatMessage(role=ChatRole.USER, content="hi")
        with pytest.raises(ValidationError):
            message.content = "changed"


class TestChatSession:
    """Tests for ChatSession."""

    def test_initial_state(self):
        """Test that a new session waits for a language choice."""
        session = ChatSession()

        assert session.state.phase is SessionPhase.LANGUAGE_SELECT
        assert session.state.selected_language == "Hrvatski"
        assert session.state.loading is False
        assert len(session.messages) == 1
        assert session.messages[0].role is ChatRole.ASSISTANT
        assert session.messages[0].content == WELCOME_MESSAGE

    def test_select_language(self):
        """Test the transition to chatting."""
        session = ChatSession()
        assert session.select_language("English") is True

        assert session.state.phase is SessionPhase.CHATTING
        assert session.state.selected_language == "English"
        assert len(session.messages) == 3
        assert session.messages[1] == ChatMessage(
            role=ChatRole.USER, content="Jezik postavljen na: English"
        )
        assert session.messages[2] == ChatMessage(
            role=ChatRole.ASSISTANT, content=INITIAL_PROMPTS["English"]
        )
        assert session.localize_error(ErrorCategory.GENERIC).startswith("I am sorry")

    def test_unknown_language_falls_back(self):
        """Test that an unknown language never fails."""
        session = ChatSession()
        assert session.select_language("Esperanto") is True

        assert session.state.selected_language == "Esperanto"
        assert session.messages[-1].content == INITIAL_PROMPTS["Hrvatski"]

    def test_repeated_selection_is_ignored(self, recorder):
        """Test that a second language choice changes nothing."""
        session = ChatSession(debug_callback=recorder)
        session.select_language("German")
        before = session.conversation

        assert session.select_language("Italian") is False
        assert session.conversation == before
        assert session.state.selected_language == "German"
        assert "warning" in recorder.levels()

    def test_streaming_placeholder(self):
        """Test the placeholder lifecycle."""
        session = ChatSession()
        handle = session.begin_streaming()

        assert session.streaming_handle == handle
        assert session.conversation.get(handle) == ChatMessage(role=ChatRole.ASSISTANT, content="")

        session.replace_streaming_content(handle, "Hel")
        session.replace_streaming_content(handle, "Hello")
        assert session.conversation.get(handle).content == "Hello"

        session.end_streaming(handle)
        assert session.streaming_handle is None
        with pytest.raises(InactiveMessageError):
            session.replace_streaming_content(handle, "late")

    def test_second_placeholder_rejected(self):
        """Test that only one placeholder streams at a time."""
        session = ChatSession()
        session.begin_streaming()
        with pytest.raises(StreamingInProgressError):
            session.begin_streaming()

    def test_finished_messages_cannot_change(self):
        """Test that a handle of a finished message is rejected."""
        session = ChatSession()
        handle = session.append_message(ChatMessage(role=ChatRole.USER, content="hi"))
        with pytest.raises(InactiveMessageError):
            session.replace_streaming_content(handle, "changed")


class TestSessionListeners:
    """Tests for notify-after-write listeners."""

    def test_events_after_write(self):
        """Test that listeners observe the state already written."""
        session = ChatSession()
        seen = []

        def listener(event):
            seen.append((event.kind, len(session.messages), session.state.phase))

        session.subscribe(listener)
        session.select_language("English")

        assert seen == [
            (EventKind.STATE_CHANGED, 1, SessionPhase.CHATTING),
            (EventKind.MESSAGE_APPENDED, 2, SessionPhase.CHATTING),
            (EventKind.MESSAGE_APPENDED, 3, SessionPhase.CHATTING),
        ]

    def test_unchanged_state_is_not_announced(self):
        """Test that writing an equal state sends no event."""
        session = ChatSession()
        seen = []
        session.subscribe(seen.append)

        session.set_loading(False)
        assert seen == []

    def test_unsubscribe(self):
        """Test removing a listener."""
        session = ChatSession()
        seen = []
        unsubscribe = session.subscribe(seen.append)
        unsubscribe()

        session.set_pending_input("typing")
        assert seen == []
        assert session.state.pending_input == "typing"

    def test_failing_listener_does_not_abort_write(self, recorder):
        """Test that a broken observer is reported, not propagated."""
        session = ChatSession(debug_callback=recorder)

        def broken(event):
            raise RuntimeError("boom")

        session.subscribe(broken)
        session.set_loading(True)

        assert session.state.loading is True
        assert recorder.entries[-1][0] == "error"

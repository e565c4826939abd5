"""CSS for the reservation TUI.

One column, top to bottom: language buttons (until a language is chosen),
the conversation, the optional log panel, then the status line and input.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Language choice, removed from the layout once chatting */
LanguagePicker {
    height: auto;
    padding: 1 2;
    align-horizontal: center;
    background: $surface;
    border-bottom: hkey $primary 40%;
}

.language-button {
    min-width: 14;
    margin: 0 1;

    &:hover {
        background: $accent 30%;
    }
}

/* Conversation */
#chat-history {
    height: 1fr;
    padding: 0 1;
    background: $surface;
    border: round $accent 50%;
    border-title-color: $accent;
    border-title-style: bold;
    scrollbar-gutter: stable;
}

ClickableMessage {
    height: auto;
}

.chat-message {
    height: auto;
    width: 100%;
    padding: 0 2 1 2;
    margin-bottom: 1;
}

.user-message {
    border-left: outer $success;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: outer $accent;
    background: $accent 6%;

    & .message-header {
        color: $accent;
        text-style: bold italic;
    }
}

.message-header, .message-content {
    height: auto;
}

/* Log panel, toggled with Ctrl+D */
#debug-panel {
    height: 10;
    padding: 0 1;
    background: $surface;
    border: round $warning 50%;
    border-title-color: $warning;
}

/* Status and input */
#bottom-bar {
    height: auto;
    padding: 0 1;
    border-top: tall $primary 30%;
}

#status {
    height: 1;
    padding: 0 2;
    background: $boost;
    color: $text-muted;
}

ChatInputBar {
    height: 5;
    border: round $accent 40%;

    &:focus-within {
        border: round $accent;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    background: transparent;
}

#send-btn {
    width: 12;
    height: 100%;
    margin-left: 1;
}
"""

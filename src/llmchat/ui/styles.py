"""CSS styles for the chat shell.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#empty-hint {
    color: $text-muted;
}

#thinking {
    color: $warning;
    text-style: italic;
}

MessageView {
    height: auto;
    margin-bottom: 1;

    .message-role {
        text-style: bold;
    }

    &.-user .message-role {
        color: $primary;
    }

    &.-assistant .message-role {
        color: $success;
    }

    &.-system .message-role {
        color: $secondary;
    }
}

/* ============================================
   Message Input
   ============================================ */
#message-input {
    height: 3;
    border: round $primary 60%;
    background: $panel;

    &:focus {
        border: round $primary;
    }
}

/* ============================================
   Status Bar
   ============================================ */
#status-bar {
    height: 4;
    padding: 0 1;
    border: round $border;
    background: $surface;
    color: $text-muted;
}

/* ============================================
   Settings Screen
   ============================================ */
#settings-form {
    padding: 1 2;
    background: $panel;
}

#settings-title {
    text-style: bold;
    color: $success;
    margin-bottom: 1;
}

.field-label {
    text-style: bold;
    margin-top: 1;
}

#settings-buttons {
    height: 3;
    margin-top: 1;

    Button {
        margin-right: 2;
    }
}

#settings-hint {
    color: $text-muted;
    margin-top: 1;
}

/* ============================================
   Save Dialog
   ============================================ */
SaveTitleScreen {
    align: center middle;
    background: $background 70%;
}

#save-dialog {
    width: 60;
    height: auto;
    border: tall $accent;
    background: $surface;
    padding: 1 2;
}

#save-title {
    width: 100%;
    text-align: center;
    text-style: bold;
    color: $accent;
    padding: 0 0 1 0;
    border-bottom: solid $border;
    margin-bottom: 1;
}

#save-buttons {
    width: 100%;
    height: 3;
    align: center middle;
    margin-top: 1;

    Button {
        margin: 0 1;
        min-width: 10;
    }
}
"""

"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
The assistant panel floats on an overlay layer docked to the right edge,
above whatever page is showing.
"""

APP_CSS = """
Screen {
    layers: base overlay;
    background: $background;
}

/* ============================================
   Host page
   ============================================ */
#page {
    layer: base;
    height: 1fr;
    padding: 1 2;
    color: $foreground;
}

/* ============================================
   Assistant panel
   ============================================ */
AssistantPanel {
    layer: overlay;
    dock: right;
    width: 52;
    height: 100%;
    margin: 1 1 1 0;
    background: $surface;
    border: round $primary;
    display: none;

    &.-opening {
        opacity: 60%;
    }
}

#assistant-header {
    height: 3;
    background: $primary;
    color: $background;
    padding: 0 1;
    align: left middle;
}

#assistant-title {
    width: 1fr;
    text-style: bold;
    content-align: left middle;
    height: 3;
}

#assistant-close {
    min-width: 5;
    width: 5;
}

#chat-history {
    height: 1fr;
    background: $panel;
    padding: 0 1;
    scrollbar-gutter: stable;
}

#thinking {
    height: 1;
    padding: 0 2;
    color: $text-muted;
    text-style: italic;
    display: none;

    &.-busy {
        display: block;
    }
}

#assistant-disclaimer {
    height: 1;
    color: $text-muted;
    text-align: center;
}

/* ============================================
   Input bar
   ============================================ */
ChatInputBar {
    height: auto;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
    height: 5;
    border: round $border;

    &:focus {
        border: round $primary;
    }
}

#send-btn {
    min-width: 8;
    margin-left: 1;
}

/* ============================================
   Chat messages
   ============================================ */
.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-right: thick $primary;
    background: $primary 10%;

    & .message-header {
        color: $primary;
        text-align: right;
    }
}

.assistant-message {
    border-left: thick $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
    }
}

.message-header {
    text-style: bold;
    height: 1;
}

.message-content {
    height: auto;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    layer: base;
    dock: bottom;
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}
"""

"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""


class LogLevel:
    """Trace levels. A message is shown when its level is at or above the
    panel threshold, so DEBUG shows everything and ERROR only failures.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _BY_NAME = {"debug": DEBUG, "info": INFO, "warning": WARNING, "error": ERROR}

    @classmethod
    def name(cls, level: int) -> str:
        for key, value in cls._BY_NAME.items():
            if value == level:
                return key.upper()
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Parse a level name; anything unrecognized means DEBUG."""
        return cls._BY_NAME.get(level_str.strip().lower(), cls.DEBUG)


# Assistant panel transition
OPEN_TRANSITION_DELAY = 0.2  # Seconds spent in the opening state

# Chat display configuration
MESSAGE_TIMESTAMP_FORMAT = "%I:%M %p"
ASSISTANT_TITLE = "Health Assistant"
ASSISTANT_DISCLAIMER = "Powered by AI - Nutrition information is general advice only"
INPUT_PLACEHOLDER = "Ask about nutrition, calories, meal planning..."
THINKING_TEXT = "Thinking..."

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Notification timeouts (seconds)
NOTIFY_TIMEOUT_SHORT = 2

"""UI configuration constants.

Centralizes magic numbers and display strings for the UI module.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Log panel levels. Lower value = more verbose."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """Convert a level name to a LogLevel. Returns DEBUG if unknown."""
        try:
            return cls[level_str.upper()]
        except KeyError:
            return cls.DEBUG


# Header subtitle per dispatch path
STATUS_CONNECTED = "🟢 Connected to OpenRouter"
STATUS_BUILTIN = "🔵 Using built-in responses"

# Message header timestamp (hours and minutes only)
MESSAGE_TIMESTAMP_FORMAT = "%H:%M"

# Log panel
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Typing indicator animation
TYPING_FRAMES = ("●○○", "○●○", "○○●")
TYPING_FRAME_INTERVAL = 0.2  # Seconds between frames

# Input history
INPUT_HISTORY_MAX_SIZE = 100

INPUT_PLACEHOLDER = "Type your message..."
CREDENTIAL_PLACEHOLDER = "sk-or-v1-..."
OPENROUTER_KEYS_URL = "https://openrouter.ai/keys"

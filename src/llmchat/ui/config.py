"""UI configuration constants.

Centralizes labels, timeouts and limits used by the chat shell.
"""

APP_TITLE = "LLM Console Chat"

# Labels shown above each message in the chat history
ROLE_LABELS = {
    "user": "You",
    "assistant": "Assistant",
    "system": "System",
}

EMPTY_CHAT_HINT = "Start a conversation by typing a message below."
THINKING_TEXT = "Assistant is thinking..."
INPUT_PLACEHOLDER = "Type your message (Ctrl+C to exit)"

# Seconds a save status notification stays visible
SAVE_STATUS_TIMEOUT = 3
ERROR_TIMEOUT = 6

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100

# Placeholder hint for a blank API key field
API_KEY_FROM_ENV = "Using environment variable"

"""
Prompts and Messages
Centralizes the assistant system prompt and the fixed user-facing messages.
"""

# =============================================================================
# Chat System Prompt
# =============================================================================
CHAT_SYSTEM_PROMPT = (
    "You are an assistant that helps users schedule appointments and answer "
    "real estate automation questions. Be friendly and concise."
)

# =============================================================================
# Booking Messages
# =============================================================================
BOOKING_MESSAGES = {
    "request_sent": "Booking request sent. You will receive confirmation shortly.",
}

# =============================================================================
# Error Messages (returned to the caller verbatim)
# =============================================================================
ERROR_MESSAGES = {
    "missing_openai_key": "Server missing OPENAI_API_KEY",
    "missing_webhook_url": "Server missing ZAPIER_WEBHOOK_URL",
    "webhook_error": "Zapier webhook error: {text}",
    "unknown_action": "Unknown action",
}

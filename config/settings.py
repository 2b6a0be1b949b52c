"""
Configuration Settings
Centralizes all configuration values for the scheduling assistant function.
Environment variables override defaults.
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Local development: pick up a .env file without overriding real env vars
load_dotenv()

# =============================================================================
# OpenAI Configuration
# =============================================================================
OPENAI_CONFIG = {
    # Fixed model; not overridable from the environment
    "chat_model": "gpt-4o-mini",
    "max_output_tokens": 400,

    # No retry logic: a failed call is surfaced to the caller as-is
    "max_retries": 0,
}

# =============================================================================
# Booking Webhook Configuration
# =============================================================================
WEBHOOK_CONFIG = {
    "headers": {"Content-Type": "application/json"},

    # Fields forwarded to the webhook, in order
    "booking_fields": ("name", "email", "when", "context"),
}

# =============================================================================
# Supported Actions
# =============================================================================
ACTIONS = {
    "book": "book",
    "chat": "chat",
}

# =============================================================================
# API Configuration
# =============================================================================
API_CONFIG = {
    # CORS headers
    "cors_headers": {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": "POST,OPTIONS"
    },
}

# =============================================================================
# Logging Configuration
# =============================================================================
LOGGING_CONFIG = {
    "default_level": os.getenv("LOG_LEVEL", "INFO").upper(),

    # Local development format
    "local_format": "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
    "local_date_format": "%Y-%m-%d %H:%M:%S",

    # Presence of any of these means we run on a serverless platform
    "serverless_env_markers": ("AWS_LAMBDA_FUNCTION_NAME", "NETLIFY"),
}


# =============================================================================
# Secrets (read per request, the platform may inject them late)
# =============================================================================
def get_openai_api_key() -> Optional[str]:
    return os.getenv("OPENAI_API_KEY") or None


def get_webhook_url() -> Optional[str]:
    return os.getenv("ZAPIER_WEBHOOK_URL") or None

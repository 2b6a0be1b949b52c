"""
OpenAI Service
Handles the call to the OpenAI Responses API for chat replies.
"""

from typing import Optional

from openai import OpenAI, APIStatusError

from config.settings import OPENAI_CONFIG
from config.prompts import CHAT_SYSTEM_PROMPT
from src.utils.errors import ConfigurationError, UpstreamServiceError
from src.utils.logger import get_logger

# Initialize logger
logger = get_logger(__name__)


class OpenAIService:
    """Service class for OpenAI API operations."""

    def __init__(self, api_key: str):
        """
        Initialize the OpenAI client.
        Args:
            api_key: OpenAI API key, read from the environment by the caller
        """
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is required")

        self.api_key = api_key
        self.client = OpenAI(api_key=api_key, max_retries=OPENAI_CONFIG["max_retries"])
        self.model = OPENAI_CONFIG["chat_model"]

        logger.info("OpenAI service initialized", model=self.model)

    def generate_reply(self, message: str) -> Optional[str]:
        """
        Send the system prompt and the user's message as a two-turn input.
        Args:
            message: The user's message (may be empty)
        Returns:
            The reply text, or None if the response carries no text
        Raises:
            UpstreamServiceError: OpenAI returned an error object
        """
        logger.info(
            "Generating OpenAI reply",
            model=self.model,
            has_message=bool(message),
            message_type=type(message).__name__
        )

        try:
            response = self.client.responses.create(
                model=self.model,
                input=self._build_input(message),
                max_output_tokens=OPENAI_CONFIG["max_output_tokens"]
            )
        except APIStatusError as e:
            error_message = _error_message(e.body) or e.message
            logger.error("OpenAI error", status_code=e.status_code, error=error_message)
            raise UpstreamServiceError(error_message) from e

        payload = response.model_dump()

        if payload.get('error'):
            error_message = _error_message(payload['error'])
            logger.error("OpenAI error", error=error_message)
            raise UpstreamServiceError(error_message)

        reply = extract_reply(payload)

        logger.info(
            "OpenAI reply generated",
            has_reply=reply is not None
        )

        return reply

    def _build_input(self, message: str) -> list:
        return [
            {"role": "system", "content": CHAT_SYSTEM_PROMPT},
            {"role": "user", "content": message}
        ]


def extract_reply(payload: dict) -> Optional[str]:
    """
    Pull the reply text out of a Responses API payload.

    Tries the first content item of the first output item, then the first
    content entry typed ``output_text``. Empty strings count as missing.
    """
    output = payload.get('output') or []
    first_item = output[0] if output else None
    if not isinstance(first_item, dict):
        return None

    content = first_item.get('content') or []

    if content and isinstance(content[0], dict) and content[0].get('text'):
        return content[0]['text']

    for entry in content:
        if isinstance(entry, dict) and entry.get('type') == 'output_text':
            return entry.get('text') or None

    return None


def _error_message(error) -> Optional[str]:
    if isinstance(error, dict):
        return error.get('message')
    return None


# Cached per API key so warm containers reuse the HTTP client
_openai_service = None


def get_openai_service(api_key: str) -> OpenAIService:
    """Get or create the OpenAI service for this API key."""
    global _openai_service
    if _openai_service is None or _openai_service.api_key != api_key:
        logger.debug("Creating new OpenAI service instance")
        _openai_service = OpenAIService(api_key)
    return _openai_service

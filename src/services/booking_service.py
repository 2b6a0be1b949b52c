"""
Booking Service
Forwards booking requests to the automation webhook.
"""

from typing import Any, Optional

import requests

from config.settings import WEBHOOK_CONFIG
from config.prompts import ERROR_MESSAGES
from src.utils.errors import ConfigurationError, WebhookError
from src.utils.logger import get_logger

# Initialize logger
logger = get_logger(__name__)


class BookingService:
    """Service class for the booking webhook."""

    def __init__(self, webhook_url: str):
        """
        Initialize the booking service.
        Args:
            webhook_url: Webhook endpoint, read from the environment by the caller
        """
        if not webhook_url:
            raise ConfigurationError(ERROR_MESSAGES["missing_webhook_url"])

        self.webhook_url = webhook_url

    def send_booking(
        self,
        name: Any = None,
        email: Any = None,
        when: Any = None,
        context: Any = None
    ) -> dict:
        """
        POST the booking fields to the webhook.
        Values are forwarded untouched; missing ones are sent as null.
        Args:
            name: Customer name
            email: Customer email
            when: Free-form description of the requested time
            context: Opaque caller context
        Returns:
            Dictionary with 'zap' (parsed webhook payload or None)
            and 'share_url' (payload's shareUrl or None)
        Raises:
            WebhookError: The webhook answered with a non-2xx status
        """
        logger.info(
            "Sending booking to webhook",
            has_name=bool(name),
            has_email=bool(email),
            has_when=bool(when)
        )

        response = requests.post(
            self.webhook_url,
            headers=WEBHOOK_CONFIG["headers"],
            json={"name": name, "email": email, "when": when, "context": context}
        )

        if not 200 <= response.status_code < 300:
            logger.error(
                "Webhook request failed",
                status_code=response.status_code,
                response_text=response.text[:500]
            )
            raise WebhookError(
                ERROR_MESSAGES["webhook_error"].format(text=response.text),
                response_status=response.status_code
            )

        zap_data = _parse_json(response)

        # Scalar falsy payloads (false, 0, "") carry nothing; empty objects and lists are kept
        if isinstance(zap_data, (bool, int, float, str)) and not zap_data:
            zap_data = None

        share_url = zap_data.get('shareUrl') if isinstance(zap_data, dict) else None

        logger.info(
            "Booking accepted by webhook",
            status_code=response.status_code,
            has_payload=zap_data is not None,
            has_share_url=bool(share_url)
        )

        return {
            'zap': zap_data,
            'share_url': share_url or None
        }


def _parse_json(response: requests.Response) -> Optional[Any]:
    """Parse the webhook body as JSON, None if it is not JSON."""
    try:
        return response.json()
    except ValueError:
        logger.debug("Webhook response is not JSON", content_length=len(response.content))
        return None

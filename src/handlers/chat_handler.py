"""
Chat Handler
Main serverless handler for the assistant widget.
Routes a JSON request on its 'action' field to the booking webhook or to OpenAI,
and shapes the result into the JSON envelope returned to the caller.
"""

import base64
import json
from typing import Any

from config.settings import ACTIONS, API_CONFIG, get_openai_api_key, get_webhook_url
from config.prompts import BOOKING_MESSAGES, ERROR_MESSAGES
from src.utils.errors import ReceptionistError
from src.utils.logger import get_logger
from src.services.booking_service import BookingService
from src.services.openai_service import get_openai_service

# Initialize logger
logger = get_logger(__name__)


def lambda_handler(event: dict, context: Any) -> dict:
    """
    Main entry point for assistant requests.
    Never raises: every failure becomes a JSON error response.
    Args:
        event: Platform event containing the request body
        context: Platform context object
    Returns:
        Response dictionary with statusCode, headers and a JSON body
    """
    try:
        body = _parse_request(event)

        action = body.get('action')
        logger.set_context(
            action=action,
            request_id=getattr(context, 'aws_request_id', None)
        )
        logger.info("Assistant handler invoked", body_keys=list(body.keys()))

        api_key = get_openai_api_key()
        if not api_key:
            logger.error("OPENAI_API_KEY environment variable not set")
            return _error_response(500, ERROR_MESSAGES["missing_openai_key"])

        if action == ACTIONS["book"]:
            return handle_book(body)

        if action == ACTIONS["chat"]:
            return handle_chat(body, api_key)

        return _error_response(400, ERROR_MESSAGES["unknown_action"])

    except ReceptionistError as e:
        return _error_response(e.status_code, e.message)

    except Exception as e:
        logger.error("Unexpected error in assistant handler", error=str(e), exc_info=True)
        return _error_response(500, str(e))

    finally:
        logger.clear_context()


def handle_book(body: dict) -> dict:
    """
    Forward the booking fields to the webhook.
    Args:
        body: Parsed request body
    Returns:
        Response dictionary
    """
    webhook_url = get_webhook_url()
    if not webhook_url:
        logger.error("ZAPIER_WEBHOOK_URL environment variable not set")
        return _error_response(500, ERROR_MESSAGES["missing_webhook_url"])

    booking_service = BookingService(webhook_url)
    result = booking_service.send_booking(
        name=body.get('name'),
        email=body.get('email'),
        when=body.get('when'),
        context=body.get('context')
    )

    return _success_response({
        'success': True,
        'message': BOOKING_MESSAGES["request_sent"],
        'zap': result['zap'],
        'shareUrl': result['share_url']
    })


def handle_chat(body: dict, api_key: str) -> dict:
    """
    Ask OpenAI for a reply to the user's message.
    The conversation 'context' sent by the widget is accepted but not
    forwarded; each reply is generated from the single message.
    Args:
        body: Parsed request body
        api_key: OpenAI API key
    Returns:
        Response dictionary
    """
    message = body.get('message') or ''

    openai_service = get_openai_service(api_key)
    reply = openai_service.generate_reply(message)

    return _success_response({'reply': reply})


def _parse_request(event: dict) -> dict:
    """
    Parse the request body from the platform event.
    Args:
        event: Platform event
    Returns:
        Parsed request dictionary ({} when the body is empty or not an object)
    Raises:
        ValueError: The body is not valid JSON
    """
    body = event.get('body')

    # Direct invocation may pass the body already decoded
    if isinstance(body, dict):
        return body

    if body and event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')

    parsed = json.loads(body or '{}')

    if not isinstance(parsed, dict):
        logger.warning("Request body is not a JSON object", body_type=type(parsed).__name__)
        return {}

    return parsed


def _json_headers() -> dict:
    headers = {'Content-Type': 'application/json'}
    headers.update(API_CONFIG["cors_headers"])
    return headers


def _success_response(data: dict) -> dict:
    """
    Build a successful response.
    Args:
        data: Response data dictionary
    Returns:
        Platform response format
    """
    return {
        'statusCode': 200,
        'headers': _json_headers(),
        'body': json.dumps(data)
    }


def _error_response(status_code: int, error_message: str) -> dict:
    """
    Build an error response.
    Args:
        status_code: HTTP status code
        error_message: Error message
    Returns:
        Platform response format
    """
    logger.warning(
        "Returning error response",
        status_code=status_code,
        error_detail=error_message
    )

    return {
        'statusCode': status_code,
        'headers': _json_headers(),
        'body': json.dumps({'error': error_message})
    }

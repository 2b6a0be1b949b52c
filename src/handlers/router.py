"""
Request Router
Platform entry point. Answers CORS preflight and hands every other
request to the chat handler.
"""

from typing import Any

from config.settings import API_CONFIG
from src.handlers.chat_handler import lambda_handler
from src.utils.logger import get_logger

logger = get_logger(__name__)


def route_request(event: dict, context: Any) -> dict:
    """
    Main entry point that routes to the appropriate handler.

    Args:
        event: Platform event (API Gateway or Netlify shape)
        context: Platform context

    Returns:
        Platform response
    """
    method = _request_method(event)

    logger.info("Routing request", method=method)

    if method == 'OPTIONS':
        return {
            'statusCode': 204,
            'headers': dict(API_CONFIG["cors_headers"]),
            'body': ''
        }

    return lambda_handler(event, context)


def _request_method(event: dict) -> str:
    """
    HTTP method of the event, '' when it cannot be read.
    Malformed events are left for the chat handler to answer with a JSON error.
    """
    if not isinstance(event, dict):
        return ''

    # REST-style events carry httpMethod, HTTP API v2 nests it under requestContext
    method = event.get('httpMethod')
    if not method:
        request_context = event.get('requestContext')
        http = request_context.get('http') if isinstance(request_context, dict) else None
        method = http.get('method') if isinstance(http, dict) else None

    return method.upper() if isinstance(method, str) else ''


"""
Shared pytest fixtures.
Outbound HTTP is always mocked; no test talks to OpenAI or the webhook.
"""

import json
from unittest.mock import Mock

import pytest

import src.services.openai_service as openai_service_module
from src.utils.logger import get_logger

WEBHOOK_URL = "https://hooks.zapier.com/hooks/catch/123/abc/"


@pytest.fixture(autouse=True)
def reset_openai_singleton():
    openai_service_module._openai_service = None
    yield
    openai_service_module._openai_service = None


@pytest.fixture(autouse=True)
def clear_log_context():
    yield
    get_logger(__name__).clear_context()


@pytest.fixture
def configured_env(monkeypatch):
    """Both secrets present."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("ZAPIER_WEBHOOK_URL", WEBHOOK_URL)


@pytest.fixture
def mock_openai(monkeypatch):
    """
    Replace the OpenAI SDK client class.
    Returns the client mock; set client.responses.create's result per test.
    """
    client = Mock()
    client_class = Mock(return_value=client)
    monkeypatch.setattr(openai_service_module, "OpenAI", client_class)
    client.client_class = client_class
    return client


def responses_payload(payload: dict) -> Mock:
    """Stand-in for an SDK Response object."""
    return Mock(model_dump=Mock(return_value=payload))


def webhook_response(status_code: int = 200, payload=None, text: str = None) -> Mock:
    """Stand-in for a requests.Response from the webhook."""
    response = Mock()
    response.status_code = status_code
    if payload is not None:
        response.text = json.dumps(payload)
        response.json = Mock(return_value=payload)
    else:
        response.text = text or ""
        response.json = Mock(side_effect=ValueError("No JSON object could be decoded"))
    response.content = response.text.encode("utf-8")
    return response


def make_event(body, **extra) -> dict:
    """Build a platform event with a JSON string body."""
    event = {'body': body if isinstance(body, str) else json.dumps(body)}
    event.update(extra)
    return event

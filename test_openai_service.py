"""
Tests for the OpenAI service: reply extraction and upstream error mapping.
"""

import httpx
import openai
import pytest

from conftest import responses_payload
from src.services.openai_service import OpenAIService, extract_reply, get_openai_service
from src.utils.errors import ConfigurationError, UpstreamServiceError


def _status_error(status_code: int, body) -> openai.APIStatusError:
    request = httpx.Request('POST', 'https://api.openai.com/v1/responses')
    response = httpx.Response(status_code, request=request)
    return openai.APIStatusError(f"Error code: {status_code}", response=response, body=body)


class TestExtractReply:

    def test_first_content_text(self):
        payload = {'output': [{'content': [{'type': 'output_text', 'text': 'hi!'}]}]}
        assert extract_reply(payload) == 'hi!'

    def test_falls_back_to_output_text_entry(self):
        payload = {'output': [{'content': [
            {'type': 'reasoning'},
            {'type': 'output_text', 'text': 'found it'}
        ]}]}
        assert extract_reply(payload) == 'found it'

    def test_empty_first_text_falls_back(self):
        payload = {'output': [{'content': [
            {'type': 'refusal', 'text': ''},
            {'type': 'output_text', 'text': 'second'}
        ]}]}
        assert extract_reply(payload) == 'second'

    @pytest.mark.parametrize('payload', [
        {},
        {'output': None},
        {'output': []},
        {'output': [{}]},
        {'output': [{'content': []}]},
        {'output': [{'content': [{'type': 'refusal', 'refusal': 'no'}]}]},
        {'output': [{'content': [{'type': 'output_text', 'text': ''}]}]},
    ])
    def test_missing_text_is_none(self, payload):
        assert extract_reply(payload) is None


class TestOpenAIService:

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            OpenAIService('')

    def test_http_error_body_message_is_surfaced(self, mock_openai):
        mock_openai.responses.create.side_effect = _status_error(
            401, {'message': 'bad key', 'type': 'invalid_request_error'}
        )

        with pytest.raises(UpstreamServiceError) as exc_info:
            OpenAIService('sk-test').generate_reply('hello')

        assert exc_info.value.message == 'bad key'
        assert exc_info.value.status_code == 502

    def test_http_error_without_body_uses_sdk_message(self, mock_openai):
        mock_openai.responses.create.side_effect = _status_error(503, None)

        with pytest.raises(UpstreamServiceError) as exc_info:
            OpenAIService('sk-test').generate_reply('hello')

        assert exc_info.value.message == 'Error code: 503'

    def test_error_field_on_response(self, mock_openai, caplog):
        mock_openai.responses.create.return_value = responses_payload({
            'error': {'code': 'server_error', 'message': 'model overloaded'},
            'output': []
        })

        with pytest.raises(UpstreamServiceError, match='model overloaded'):
            OpenAIService('sk-test').generate_reply('hello')

        assert any(record.getMessage() == 'OpenAI error' for record in caplog.records)

    def test_connection_errors_propagate(self, mock_openai):
        request = httpx.Request('POST', 'https://api.openai.com/v1/responses')
        mock_openai.responses.create.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(openai.APIConnectionError):
            OpenAIService('sk-test').generate_reply('hello')

    def test_null_error_field_is_ignored(self, mock_openai):
        mock_openai.responses.create.return_value = responses_payload({
            'error': None,
            'output': [{'content': [{'type': 'output_text', 'text': 'ok'}]}]
        })

        assert OpenAIService('sk-test').generate_reply('hello') == 'ok'


def test_service_is_reused_for_same_key(mock_openai):
    first = get_openai_service('sk-one')
    assert get_openai_service('sk-one') is first
    assert get_openai_service('sk-two') is not first


def test_non_string_message_is_forwarded(mock_openai):
    mock_openai.responses.create.return_value = responses_payload({'output': []})

    assert OpenAIService('sk-test').generate_reply(42) is None

    kwargs = mock_openai.responses.create.call_args.kwargs
    assert kwargs['input'][1] == {'role': 'user', 'content': 42}


def test_model_ignores_environment_override(monkeypatch, mock_openai):
    monkeypatch.setenv('OPENAI_MODEL', 'gpt-4.1')
    mock_openai.responses.create.return_value = responses_payload({'output': []})

    OpenAIService('sk-test').generate_reply('hello')

    assert mock_openai.responses.create.call_args.kwargs['model'] == 'gpt-4o-mini'

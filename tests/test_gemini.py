"""
Tests for the Gemini translation engine client.

HTTP calls are intercepted by patching ``requests.post`` and backoff
sleeps by patching ``time.sleep``.
"""

import json
from unittest import mock

import pytest
import requests

from blogcms.services.errors import EngineError
from blogcms.services.gemini import (
    GeminiTranslator,
    build_prompt,
    parse_translation_response,
)


def _response(status_code=200, text=None, title='Hello', body='<p>World</p>'):
    if text is None:
        inner = json.dumps({'translated_title': title, 'translated_body': body})
        text = json.dumps({'candidates': [{'content': {'parts': [{'text': inner}]}}]})
    return mock.Mock(status_code=status_code, text=text)


def _envelope(inner_text):
    return json.dumps({'candidates': [{'content': {'parts': [{'text': inner_text}]}}]})


@pytest.fixture
def post():
    with mock.patch('blogcms.services.gemini.requests.post') as patched:
        yield patched


@pytest.fixture
def sleep():
    with mock.patch('blogcms.services.gemini.time.sleep') as patched:
        yield patched


@pytest.fixture
def translator():
    return GeminiTranslator(api_base='https://gemini.test', timeout=5, backoff_seconds=1)


def _translate(translator):
    return translator.translate('こんにちは', '<p>世界</p>', 'ja', 'en', 'gemini-1.5-flash', 'secret-key')


class TestPrompt:
    
    def test_prompt_embeds_payload(self):
        prompt = build_prompt('Title', '<p>Body</p>', 'ja', 'en')
        instructions, payload = prompt.split('\n', 1)
        
        assert 'translated_title' in instructions
        assert 'Preserve HTML tags' in instructions
        assert json.loads(payload) == {
            'source_locale': 'ja',
            'target_locale': 'en',
            'title': 'Title',
            'body': '<p>Body</p>',
        }


class TestParseResponse:
    
    def test_plain_json(self):
        raw = _envelope('{"translated_title": " Hi ", "translated_body": " <p>x</p> "}')
        assert parse_translation_response(raw) == ('Hi', '<p>x</p>')
    
    def test_fenced_json(self):
        raw = _envelope('```json\n{"translated_title": "Hi", "translated_body": "<p>x</p>"}\n```')
        assert parse_translation_response(raw) == ('Hi', '<p>x</p>')
    
    def test_bare_fence(self):
        raw = _envelope('```{"translated_title": "Hi", "translated_body": "b"}```')
        assert parse_translation_response(raw) == ('Hi', 'b')
    
    @pytest.mark.parametrize('raw', [
        'not json',
        json.dumps({'candidates': []}),
        json.dumps({'candidates': [{'content': {'parts': []}}]}),
        json.dumps({}),
        _envelope('not json either'),
        _envelope('["a", "b"]'),
        _envelope('{"translated_title": "  ", "translated_body": "b"}'),
        _envelope('{"translated_title": "t"}'),
        _envelope('{"translated_title": 123, "translated_body": true}'),
        _envelope('{"translated_title": {"a": 1}, "translated_body": "b"}'),
        _envelope('{"translated_title": "t", "translated_body": ["b"]}'),
        _envelope('{"translated_title": null, "translated_body": "b"}'),
    ])
    def test_malformed_is_parse_error(self, raw):
        with pytest.raises(EngineError) as exc:
            parse_translation_response(raw)
        assert exc.value.kind == EngineError.PARSE


class TestTranslate:
    
    def test_success_single_request(self, translator, post, sleep):
        post.return_value = _response()
        
        assert _translate(translator) == ('Hello', '<p>World</p>')
        assert post.call_count == 1
        sleep.assert_not_called()
        
        args, kwargs = post.call_args
        assert args[0] == 'https://gemini.test/v1beta/models/gemini-1.5-flash:generateContent'
        assert kwargs['params'] == {'key': 'secret-key'}
        assert kwargs['timeout'] == 5
        assert kwargs['json']['generationConfig'] == {
            'responseMimeType': 'application/json',
            'temperature': 0.2,
        }
        content = kwargs['json']['contents'][0]
        assert content['role'] == 'user'
        assert '"target_locale": "en"' in content['parts'][0]['text']
    
    def test_retry_exhaustion_on_http_error(self, translator, post, sleep):
        post.side_effect = [
            _response(status_code=500, text='first'),
            _response(status_code=502, text='second'),
            _response(status_code=503, text='third'),
        ]
        
        with pytest.raises(EngineError) as exc:
            _translate(translator)
        
        assert post.call_count == 3
        assert exc.value.kind == EngineError.HTTP
        assert exc.value.status == 503
        assert exc.value.body == 'third'
        # Linear backoff, nothing after the final attempt
        assert [c.args[0] for c in sleep.call_args_list] == [1, 2]
    
    def test_recovers_after_transport_error(self, translator, post, sleep):
        post.side_effect = [requests.ConnectionError('connection reset'), _response(title='Hi')]
        
        assert _translate(translator) == ('Hi', '<p>World</p>')
        assert post.call_count == 2
        sleep.assert_called_once_with(1)
    
    def test_parse_failure_is_retried(self, translator, post, sleep):
        post.side_effect = [
            _response(title=''),
            _response(text='{"candidates": []}'),
            _response(title='Third time'),
        ]
        
        assert _translate(translator) == ('Third time', '<p>World</p>')
        assert post.call_count == 3
    
    def test_transport_errors_exhausted(self, translator, post, sleep):
        post.side_effect = requests.Timeout('read timed out')
        
        with pytest.raises(EngineError) as exc:
            _translate(translator)
        
        assert post.call_count == 3
        assert exc.value.kind == EngineError.TRANSPORT
        assert 'read timed out' in exc.value.detail
    
    def test_from_config(self):
        translator = GeminiTranslator.from_config({
            'GEMINI_API_BASE': 'https://proxy.test/',
            'GEMINI_TIMEOUT': 12,
            'TRANSLATION_BACKOFF_SECONDS': 0.5,
        })
        assert translator.endpoint('m') == 'https://proxy.test/v1beta/models/m:generateContent'
        assert translator.timeout == 12
        assert translator.backoff_seconds == 0.5

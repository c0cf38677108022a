"""Gemini translation engine client.

One ``translate`` call sends up to ``MAX_ATTEMPTS`` ``generateContent``
requests. Transport errors, non-2xx responses and unusable response
bodies are all retried, sleeping ``attempt * backoff_seconds`` between
attempts. There is no fallback: if every attempt fails, the error from the
last attempt is raised.
"""

import json
import logging
import time
from typing import Protocol

import requests

from blogcms.services.errors import EngineError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = 'https://generativelanguage.googleapis.com'
MAX_ATTEMPTS = 3

PROMPT_INSTRUCTIONS = (
    "You are a translation engine for blog content. "
    "Translate title and HTML body faithfully from source_locale to target_locale. "
    "Preserve HTML tags, links, and code blocks in body. "
    "Return only JSON with keys translated_title and translated_body."
)


class TranslationEngine(Protocol):
    """Anything that can translate a post title and HTML body."""

    def translate(self, title: str, body: str, source_locale: str, target_locale: str,
                  model: str, api_key: str) -> tuple[str, str]:
        ...


def build_prompt(title: str, body: str, source_locale: str, target_locale: str) -> str:
    payload = {
        'source_locale': source_locale,
        'target_locale': target_locale,
        'title': title,
        'body': body,
    }
    return PROMPT_INSTRUCTIONS + "\n" + json.dumps(payload, ensure_ascii=False)


def build_request_body(prompt: str) -> dict:
    return {
        'contents': [
            {
                'role': 'user',
                'parts': [{'text': prompt}],
            }
        ],
        'generationConfig': {
            'responseMimeType': 'application/json',
            'temperature': 0.2,
        },
    }


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith('```json'):
        text = text[len('```json'):]
    elif text.startswith('```'):
        text = text[len('```'):]
    if text.endswith('```'):
        text = text[:-len('```')]
    return text.strip()


def parse_translation_response(raw: str) -> tuple[str, str]:
    """Extract ``(translated_title, translated_body)`` from a response body.

    Raises:
        EngineError: kind ``parse`` for any malformed or empty payload.
    """
    try:
        envelope = json.loads(raw)
    except ValueError as e:
        raise EngineError(EngineError.PARSE, f"invalid response JSON: {e}")

    try:
        text = envelope['candidates'][0]['content']['parts'][0]['text']
    except (KeyError, IndexError, TypeError):
        raise EngineError(EngineError.PARSE, "empty gemini candidates")
    if not isinstance(text, str):
        raise EngineError(EngineError.PARSE, "candidate text is not a string")

    try:
        payload = json.loads(_strip_code_fence(text))
    except ValueError as e:
        raise EngineError(EngineError.PARSE, f"invalid translation JSON: {e}")
    if not isinstance(payload, dict):
        raise EngineError(EngineError.PARSE, "translation payload is not an object")

    title = payload.get('translated_title', '')
    body = payload.get('translated_body', '')
    if not isinstance(title, str) or not isinstance(body, str):
        raise EngineError(EngineError.PARSE, "translated title/body must be strings")
    title, body = title.strip(), body.strip()
    if not title or not body:
        raise EngineError(EngineError.PARSE, "gemini translation returned empty title/body")
    return title, body


class GeminiTranslator:
    """Translation engine backed by the Gemini ``generateContent`` API."""

    def __init__(self, api_base=DEFAULT_API_BASE, timeout=60, backoff_seconds=1.0,
                 max_attempts=MAX_ATTEMPTS):
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout
        self.backoff_seconds = backoff_seconds
        self.max_attempts = max_attempts

    @classmethod
    def from_config(cls, config):
        """Build a client from a Flask config mapping."""
        return cls(
            api_base=config.get('GEMINI_API_BASE', DEFAULT_API_BASE),
            timeout=config.get('GEMINI_TIMEOUT', 60),
            backoff_seconds=config.get('TRANSLATION_BACKOFF_SECONDS', 1.0),
        )

    def endpoint(self, model: str) -> str:
        return f"{self.api_base}/v1beta/models/{model}:generateContent"

    def translate(self, title, body, source_locale, target_locale, model, api_key):
        prompt = build_prompt(title, body, source_locale, target_locale)
        request_body = build_request_body(prompt)

        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._attempt(request_body, model, api_key)
            except EngineError as e:
                last_error = e
                logger.warning(
                    f"Gemini attempt {attempt}/{self.max_attempts} failed "
                    f"({source_locale} -> {target_locale}): {e}"
                )
            if attempt < self.max_attempts:
                time.sleep(attempt * self.backoff_seconds)

        raise last_error

    def _attempt(self, request_body, model, api_key):
        try:
            response = requests.post(
                self.endpoint(model),
                params={'key': api_key},
                json=request_body,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EngineError(EngineError.TRANSPORT, str(e))

        if not 200 <= response.status_code < 300:
            raise EngineError(
                EngineError.HTTP,
                f"unexpected status {response.status_code}",
                status=response.status_code,
                body=response.text,
            )

        return parse_translation_response(response.text)

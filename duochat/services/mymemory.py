"""MyMemory translation API client.

API docs: https://mymemory.translated.net/doc/spec.php
"""

import logging
import requests

from duochat.constants import is_supported_language
from duochat.errors import TranslationAPIError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.mymemory.translated.net/get'
DEFAULT_TIMEOUT = 10  # seconds


class MyMemoryClient:
    """Translate text through MyMemory.

    The HTTP session is injected so tests can hand in a mock and the app can
    share one connection pool between requests.
    """

    def __init__(self, session=None, api_url=DEFAULT_API_URL, timeout=DEFAULT_TIMEOUT, email=None):
        self.session = session or requests.Session()
        self.api_url = api_url
        self.timeout = timeout
        # Registered e-mail raises the anonymous daily quota
        self.email = email

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        """
        Translate ``text`` from ``source_language`` to ``target_language``.

        Returns:
            The translated text, stripped of surrounding whitespace

        Raises:
            TranslationAPIError: with one of the codes INVALID_INPUT,
                RATE_LIMIT, SERVICE_UNAVAILABLE, NETWORK_ERROR, INVALID_RESPONSE
        """
        if not isinstance(text, str) or not text.strip():
            raise TranslationAPIError('Text to translate is required', 'INVALID_INPUT', 400)
        if not is_supported_language(source_language):
            raise TranslationAPIError('Invalid source language', 'INVALID_INPUT', 400)
        if not is_supported_language(target_language):
            raise TranslationAPIError('Invalid target language', 'INVALID_INPUT', 400)

        params = {
            'q': text,
            'langpair': f'{source_language}|{target_language}',
        }
        if self.email:
            params['de'] = self.email

        try:
            response = self.session.get(
                self.api_url,
                params=params,
                headers={'Accept': 'application/json'},
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.warning(f"[MYMEMORY] Timeout after {self.timeout}s ({source_language}->{target_language})")
            raise TranslationAPIError(
                'Translation request timed out. Please try again.', 'NETWORK_ERROR', 503
            )
        except requests.ConnectionError as e:
            logger.warning(f"[MYMEMORY] Connection error: {e}")
            raise TranslationAPIError(
                'Network error. Please check your connection.', 'NETWORK_ERROR', 503
            )
        except requests.RequestException as e:
            logger.warning(f"[MYMEMORY] Request failed: {e}")
            raise TranslationAPIError(f'Translation failed: {e}', 'SERVICE_UNAVAILABLE', 500)

        if not response.ok:
            raise self._http_error(response.status_code)

        try:
            data = response.json()
        except ValueError:
            raise TranslationAPIError(
                'Failed to parse translation API response', 'INVALID_RESPONSE', 500
            )

        if not isinstance(data, dict):
            raise TranslationAPIError(
                'Invalid response format from translation API', 'INVALID_RESPONSE', 500
            )

        if data.get('quotaFinished') is True:
            logger.warning("[MYMEMORY] Daily quota exhausted")
            raise TranslationAPIError(
                'Translation rate limit exceeded. Please try again later.', 'RATE_LIMIT', 429
            )

        response_data = data.get('responseData')
        translated = response_data.get('translatedText') if isinstance(response_data, dict) else None
        if not isinstance(translated, str):
            raise TranslationAPIError(
                'Translation API did not return translated text', 'INVALID_RESPONSE', 500
            )

        translated = translated.strip()
        if not translated:
            raise TranslationAPIError('Translation API returned empty text', 'INVALID_RESPONSE', 500)

        return translated

    @staticmethod
    def _http_error(status):
        logger.warning(f"[MYMEMORY] HTTP {status}")
        if status in (403, 429):
            return TranslationAPIError(
                'Translation rate limit exceeded. Please try again later.', 'RATE_LIMIT', 429
            )
        if status == 400:
            return TranslationAPIError(
                'Invalid translation request. Please check language codes.', 'INVALID_INPUT', 400
            )
        if status >= 500:
            return TranslationAPIError(
                'Translation service is temporarily unavailable.', 'SERVICE_UNAVAILABLE', 503
            )
        return TranslationAPIError(
            f'Translation API returned error: {status}', 'SERVICE_UNAVAILABLE', 503
        )

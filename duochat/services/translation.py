"""Translation request pipeline.

validate -> fetch message -> detect source -> reject same language ->
cache lookup -> provider call on miss -> cache store -> result
"""

import logging
from dataclasses import dataclass, asdict

from flask import current_app

from duochat.constants import AUTO_DETECT
from duochat.errors import CacheError, NotFoundError, ValidationError
from duochat.models import Message
from duochat.services.language_detection import detect_language
from duochat.services.translation_cache import TranslationCache
from duochat.utils.error_log import log_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationResult:
    message_id: str
    source_language: str
    target_language: str
    translated_text: str
    original_text: str
    cached: bool

    def to_dict(self):
        data = asdict(self)
        return {
            'messageId': data['message_id'],
            'sourceLanguage': data['source_language'],
            'targetLanguage': data['target_language'],
            'translatedText': data['translated_text'],
            'originalText': data['original_text'],
            'cached': data['cached'],
        }


def get_translation_provider():
    """The provider client configured on the current app."""
    return current_app.extensions['duochat']['translation_provider']


class TranslationService:
    """Translate chat messages with a per-language-pair cache.

    Args:
        session: SQLAlchemy session used for the message read and cache
        provider: object with ``translate(text, source, target) -> str`` that
            raises TranslationAPIError on failure
        detector: callable returning a language code for a text
    """

    ENDPOINT = 'POST /api/translations'

    def __init__(self, session, provider, detector=detect_language, cache=None):
        self.session = session
        self.provider = provider
        self.detector = detector
        self.cache = cache or TranslationCache(session)

    def translate(self, request, user_role=None):
        """
        Run one TranslationRequest through the pipeline.

        Raises:
            NotFoundError: message does not exist (MESSAGE_NOT_FOUND)
            ValidationError: nothing to translate, or source == target
            TranslationAPIError: provider failure, passed through unchanged
        """
        message = self.session.get(Message, request.message_id)
        if message is None:
            raise NotFoundError('Message not found', 'MESSAGE_NOT_FOUND')

        if not message.has_text:
            raise ValidationError('Message has no text to translate')

        original_text = message.text

        source_language = request.source_language
        if source_language == AUTO_DETECT:
            source_language = self.detector(original_text)

        if source_language == request.target_language:
            raise ValidationError('Source and target languages cannot be the same')

        context = {
            'endpoint': self.ENDPOINT,
            'messageId': message.id,
            'user': user_role,
        }

        cached = None
        try:
            cached = self.cache.lookup(message.id, source_language, request.target_language)
        except CacheError as e:
            # A broken cache only costs us a provider call
            log_error(logger, e, {**context, 'operation': 'cache_lookup'})

        if cached is not None:
            logger.info(f"[TRANSLATION] Cache hit {message.id} {source_language}->{request.target_language}")
            return TranslationResult(
                message_id=message.id,
                source_language=cached.source_language,
                target_language=cached.target_language,
                translated_text=cached.translated_text,
                original_text=original_text,
                cached=True,
            )

        # TranslationAPIError propagates to the route untouched and is never cached
        translated_text = self.provider.translate(original_text, source_language, request.target_language)

        try:
            self.cache.store(message.id, source_language, request.target_language, translated_text)
        except CacheError as e:
            log_error(logger, e, {**context, 'operation': 'cache_storage'})

        logger.info(f"[TRANSLATION] Translated {message.id} {source_language}->{request.target_language}")
        return TranslationResult(
            message_id=message.id,
            source_language=source_language,
            target_language=request.target_language,
            translated_text=translated_text,
            original_text=original_text,
            cached=False,
        )

"""Request parsing for the JSON endpoints.

Each ``parse_*`` function takes the raw request body and either returns a
typed request object or raises ``ValidationError`` with a field-level
``details`` map. Services only ever see the parsed objects.
"""

from dataclasses import dataclass
from typing import Optional

from duochat.constants import SUPPORTED_LANGUAGES, AUTO_DETECT, is_supported_language
from duochat.errors import ValidationError

_LANGUAGE_LIST = ', '.join(SUPPORTED_LANGUAGES)


@dataclass(frozen=True)
class TranslationRequest:
    message_id: str
    target_language: str
    source_language: str = AUTO_DETECT


@dataclass(frozen=True)
class PreferenceRequest:
    message_id: str
    show_original: bool
    target_language: Optional[str] = None


def _require_object(data):
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def _is_non_empty_string(value):
    return isinstance(value, str) and len(value.strip()) > 0


def parse_translation_request(data):
    """Validate a POST /api/translations body."""
    data = _require_object(data)
    errors = {}

    message_id = data.get('messageId')
    if not _is_non_empty_string(message_id):
        errors['messageId'] = 'Message ID is required'

    target_language = data.get('targetLanguage')
    if not is_supported_language(target_language):
        errors['targetLanguage'] = f'Target language must be one of: {_LANGUAGE_LIST}'

    # Missing, null and empty all mean auto-detect
    source_language = data.get('sourceLanguage') or AUTO_DETECT
    if source_language != AUTO_DETECT and not is_supported_language(source_language):
        errors['sourceLanguage'] = f'Source language must be one of: {_LANGUAGE_LIST}, {AUTO_DETECT}'

    if errors:
        raise ValidationError('Validation failed', details=errors)

    return TranslationRequest(
        message_id=message_id.strip(),
        target_language=target_language,
        source_language=source_language,
    )


def parse_preference_request(data):
    """Validate a POST /api/translations/preferences body."""
    data = _require_object(data)

    message_id = data.get('messageId')
    if not _is_non_empty_string(message_id):
        raise ValidationError('Message ID is required', details={'messageId': 'Message ID is required'})

    show_original = data.get('showOriginal')
    if not isinstance(show_original, bool):
        raise ValidationError(
            'showOriginal must be a boolean',
            details={'showOriginal': 'showOriginal must be a boolean'}
        )

    target_language = data.get('targetLanguage') or None
    if target_language is not None and not is_supported_language(target_language):
        message = f'Target language must be one of: {_LANGUAGE_LIST}'
        raise ValidationError(message, details={'targetLanguage': message})

    return PreferenceRequest(
        message_id=message_id.strip(),
        show_original=show_original,
        target_language=target_language,
    )

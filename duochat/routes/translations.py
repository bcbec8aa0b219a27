"""Translation routes: translate a message, list cached translations, save display preference."""

import logging
from flask import Blueprint, request, jsonify

from duochat import db
from duochat.constants import SUPPORTED_LANGUAGES, is_supported_language
from duochat.errors import ApiError, CacheError, TranslationAPIError
from duochat.schemas import parse_translation_request, parse_preference_request
from duochat.services.preferences import PreferenceStore
from duochat.services.translation import TranslationService, get_translation_provider
from duochat.services.translation_cache import TranslationCache
from duochat.utils import token_required, log_error

logger = logging.getLogger(__name__)

translations_bp = Blueprint('translations', __name__)


def _message_id(data):
    """Best-effort message id for log context, whatever the body looks like."""
    return data.get('messageId') if isinstance(data, dict) else None


@translations_bp.route('', methods=['POST'])
@token_required
def translate_message(current_role):
    """
    Translate a message, serving from the cache when possible.

    Request body:
    {
        "messageId": "<uuid>",
        "targetLanguage": "en" | "zh-CN" | "zh-TW",
        "sourceLanguage": "auto" (default) | "en" | "zh-CN" | "zh-TW"
    }
    """
    data = request.get_json(silent=True)
    try:
        translation_request = parse_translation_request(data)
        service = TranslationService(db.session, get_translation_provider())
        result = service.translate(translation_request, user_role=current_role)
        return jsonify({
            'success': True,
            'translation': result.to_dict()
        }), 200
    except TranslationAPIError as e:
        log_error(logger, e, {
            'endpoint': 'POST /api/translations',
            'messageId': _message_id(data),
            'operation': 'api_call',
            'user': current_role,
        })
        return jsonify(e.to_dict()), e.status_code
    except ApiError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        log_error(logger, e, {
            'endpoint': 'POST /api/translations',
            'messageId': _message_id(data),
            'user': current_role,
        })
        return jsonify({
            'success': False,
            'error': 'Translation failed. Please try again.',
            'code': 'TRANSLATION_FAILED'
        }), 500


@translations_bp.route('/<message_id>', methods=['GET'])
@token_required
def get_translations(current_role, message_id):
    """List cached translations of a message, newest first.

    Query params:
        - targetLanguage: only translations into this language
    """
    target_language = request.args.get('targetLanguage')
    if target_language and not is_supported_language(target_language):
        return jsonify({
            'success': False,
            'error': f"Target language must be one of: {', '.join(SUPPORTED_LANGUAGES)}",
            'code': 'INVALID_REQUEST'
        }), 400

    try:
        translations = TranslationCache(db.session).for_message(message_id, target_language)
        return jsonify({
            'translations': [t.to_dict() for t in translations]
        }), 200
    except CacheError as e:
        log_error(logger, e, {
            'endpoint': 'GET /api/translations/:messageId',
            'messageId': message_id,
            'user': current_role,
        })
        return jsonify({
            'success': False,
            'error': 'Failed to retrieve translations',
            'code': 'DATABASE_ERROR'
        }), 500


@translations_bp.route('/preferences', methods=['POST'])
@token_required
def save_preference(current_role):
    """
    Save whether the caller sees the original or translated text of a message.

    Request body:
    {
        "messageId": "<uuid>",
        "showOriginal": true | false,
        "targetLanguage": "en" | "zh-CN" | "zh-TW" | null
    }
    """
    data = request.get_json(silent=True)
    try:
        preference_request = parse_preference_request(data)
        preference = PreferenceStore(db.session).set_preference(current_role, preference_request)
        return jsonify({
            'success': True,
            'preference': preference.to_dict()
        }), 200
    except ApiError as e:
        if e.status_code >= 500:
            log_error(logger, e, {
                'endpoint': 'POST /api/translations/preferences',
                'messageId': _message_id(data),
                'user': current_role,
            })
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        log_error(logger, e, {
            'endpoint': 'POST /api/translations/preferences',
            'user': current_role,
        })
        return jsonify({
            'success': False,
            'error': 'Failed to save translation preference. Please try again.',
            'code': 'PREFERENCE_SAVE_FAILED'
        }), 500

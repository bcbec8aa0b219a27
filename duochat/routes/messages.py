"""Message routes: listing, sending, unsending and reactions."""

import logging
from datetime import datetime
from flask import Blueprint, request, jsonify

from duochat import db
from duochat.errors import ApiError
from duochat.services.messages import MessageService, DEFAULT_PAGE_SIZE
from duochat.services.reactions import is_single_emoji, toggle_reaction
from duochat.utils import token_required

logger = logging.getLogger(__name__)

messages_bp = Blueprint('messages', __name__)


def _parse_before(value):
    """Parse the ``before`` cursor (ISO 8601, trailing Z allowed) to naive UTC."""
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed


@messages_bp.route('', methods=['GET'])
@token_required
def get_messages(current_role):
    """Newest-first page of messages with translations and the caller's preferences.

    Query params:
        - limit: page size (default 50)
        - before: ISO timestamp cursor, only older messages are returned
    """
    try:
        try:
            limit = int(request.args.get('limit', DEFAULT_PAGE_SIZE))
        except ValueError:
            limit = 0
        if limit <= 0:
            return jsonify({'error': 'Invalid limit parameter'}), 400

        before = request.args.get('before')
        if before:
            try:
                before = _parse_before(before)
            except ValueError:
                return jsonify({'error': 'Invalid before parameter'}), 400
        else:
            before = None

        messages = MessageService(db.session).list_messages(
            limit=limit, before=before, viewer=current_role
        )
        return jsonify({'messages': messages}), 200
    except Exception as e:
        logger.error(f"[MESSAGES] Error fetching messages: {e}")
        return jsonify({'error': 'Failed to fetch messages'}), 500


@messages_bp.route('', methods=['POST'])
@token_required
def send_message(current_role):
    """Send a text message.

    Request body: {"text": "...", "reply_to_id": "<message id>" (optional)}
    """
    try:
        data = request.get_json(silent=True) or {}
        message = MessageService(db.session).create_text_message(
            current_role,
            data.get('text'),
            reply_to_id=data.get('reply_to_id') or None
        )
        return jsonify({'message': message.to_dict()}), 201
    except ApiError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        logger.error(f"[MESSAGES] Error creating message: {e}")
        return jsonify({'error': 'Failed to create message'}), 500


@messages_bp.route('/<message_id>', methods=['DELETE'])
@token_required
def unsend_message(current_role, message_id):
    """Unsend (soft-delete) one of the caller's own messages."""
    try:
        MessageService(db.session).unsend_message(message_id, current_role)
        return jsonify({'success': True}), 200
    except ApiError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        logger.error(f"[MESSAGES] Error unsending message {message_id}: {e}")
        return jsonify({'error': 'Failed to unsend message'}), 500


@messages_bp.route('/<message_id>/reactions', methods=['POST'])
@token_required
def add_reaction(current_role, message_id):
    """Toggle an emoji reaction. Returns the reaction, or null when removed.

    Request body: {"emoji": "👍"}
    """
    try:
        data = request.get_json(silent=True) or {}
        emoji = data.get('emoji')

        if not is_single_emoji(emoji):
            return jsonify({'error': 'Invalid emoji'}), 400

        reaction = toggle_reaction(db.session, message_id, current_role, emoji)
        return jsonify({'reaction': reaction.to_dict() if reaction else None}), 200
    except ApiError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        db.session.rollback()
        logger.error(f"[MESSAGES] Error adding reaction to {message_id}: {e}")
        return jsonify({'error': 'Failed to add reaction'}), 500

"""Message creation, unsend, and paginated listing with translation data."""

import logging
from sqlalchemy.orm import selectinload

from duochat.errors import ForbiddenError, NotFoundError, ValidationError
from duochat.models import Message, MessageType, TranslationPreference
from duochat.services.preferences import PreferenceStore
from duochat.services.translation_cache import TranslationCache

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


def enrich_messages(messages, translations_by_message, preferences_by_message=None, viewer=None):
    """
    Merge a page of messages with their translations and the viewer's preferences.

    Args:
        messages: Message rows in the caller's pagination order
        translations_by_message: {message_id: [Translation, ...]}
        preferences_by_message: {message_id: TranslationPreference} for ``viewer``
        viewer: 'A', 'B' or None

    Returns:
        list of message dicts in the same order as ``messages``. Each has a
        ``translations`` list; when ``viewer`` is given each also has a
        ``translation_preference`` dict, defaulting to show the original.
    """
    preferences_by_message = preferences_by_message or {}
    enriched = []
    for message in messages:
        item = message.to_dict()
        item['translations'] = [
            translation.to_dict() for translation in translations_by_message.get(message.id, [])
        ]
        if viewer is not None:
            preference = preferences_by_message.get(message.id)
            item['translation_preference'] = (
                preference.display_dict() if preference
                else dict(TranslationPreference.DEFAULT_DISPLAY)
            )
        enriched.append(item)
    return enriched


class MessageService:
    """Message operations on an injected SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def list_messages(self, limit=DEFAULT_PAGE_SIZE, before=None, viewer=None):
        """
        Newest-first page of messages, enriched for ``viewer``.

        Args:
            limit: page size, capped at MAX_PAGE_SIZE
            before: only messages created strictly before this datetime
            viewer: role whose translation preferences are attached
        """
        query = self.session.query(Message).options(
            selectinload(Message.reactions),
            selectinload(Message.reply_to)
        )
        if before is not None:
            query = query.filter(Message.created_at < before)

        messages = query.order_by(Message.created_at.desc()).limit(min(limit, MAX_PAGE_SIZE)).all()
        message_ids = [message.id for message in messages]

        # Two batch queries for the whole page, never one per message
        translations = TranslationCache(self.session).for_messages(message_ids)
        preferences = None
        if viewer is not None:
            preferences = PreferenceStore(self.session).for_messages(viewer, message_ids)

        return enrich_messages(messages, translations, preferences, viewer=viewer)

    def create_text_message(self, sender, text, reply_to_id=None):
        if not isinstance(text, str) or not text.strip():
            raise ValidationError('Message text cannot be empty', details={'text': 'Message text cannot be empty'})
        text = text.strip()
        if len(text) > MAX_MESSAGE_LENGTH:
            raise ValidationError(
                f'Message too long (max {MAX_MESSAGE_LENGTH} characters)',
                details={'text': f'Message too long (max {MAX_MESSAGE_LENGTH} characters)'}
            )

        if reply_to_id is not None and (not isinstance(reply_to_id, str) or not reply_to_id.strip()):
            raise ValidationError(
                'Invalid reply target',
                details={'reply_to_id': 'Reply target must be a message ID'}
            )

        if reply_to_id is not None and self.session.get(Message, reply_to_id) is None:
            raise NotFoundError('Reply target not found', 'MESSAGE_NOT_FOUND')

        message = Message(
            sender=sender,
            type=MessageType.TEXT,
            text=text,
            reply_to_id=reply_to_id
        )
        self.session.add(message)
        self.session.commit()
        logger.info(f"[MESSAGES] {sender} sent {message.id}")
        return message

    def unsend_message(self, message_id, requesting_role):
        """Soft-delete a message. Only its sender may do this."""
        message = self.session.get(Message, message_id)
        if message is None:
            raise NotFoundError('Message not found', 'MESSAGE_NOT_FOUND')

        if message.sender != requesting_role:
            raise ForbiddenError("Cannot unsend another user's message")

        message.soft_delete()
        self.session.commit()
        logger.info(f"[MESSAGES] {requesting_role} unsent {message_id}")
        return message

"""Translation cache backed by the ``translations`` table.

Key = (message_id, source_language, target_language). Entries are created
once on a cache miss and never updated.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError

from duochat.constants import is_supported_language
from duochat.errors import CacheError
from duochat.models import Translation
from duochat.utils.db import insert_ignore_conflict

logger = logging.getLogger(__name__)


def _check_key(message_id, source_language, target_language):
    if not isinstance(message_id, str) or not message_id.strip():
        raise CacheError('Message ID is required', 'INVALID_INPUT')
    if not is_supported_language(source_language):
        raise CacheError('Invalid source language', 'INVALID_INPUT')
    if not is_supported_language(target_language):
        raise CacheError('Invalid target language', 'INVALID_INPUT')


class TranslationCache:
    """Lookup and storage of cached translations on an injected session."""

    def __init__(self, session):
        self.session = session

    def lookup(self, message_id, source_language, target_language):
        """Return the cached Translation for the key, or None on a miss."""
        _check_key(message_id, source_language, target_language)
        try:
            return self.session.query(Translation).filter_by(
                message_id=message_id,
                source_language=source_language,
                target_language=target_language
            ).one_or_none()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise CacheError(f'Failed to lookup cached translation: {e}', 'DATABASE_ERROR')

    def store(self, message_id, source_language, target_language, translated_text):
        """
        Cache a translation and return the stored row.

        Two requests racing on the same key both insert; the second insert is
        dropped by the unique constraint and both callers get the first row.
        """
        _check_key(message_id, source_language, target_language)
        if not isinstance(translated_text, str) or not translated_text.strip():
            raise CacheError('Translated text is required', 'INVALID_INPUT')

        try:
            result = insert_ignore_conflict(
                self.session,
                Translation,
                Translation.CACHE_KEY,
                {
                    'message_id': message_id,
                    'source_language': source_language,
                    'target_language': target_language,
                    'translated_text': translated_text,
                }
            )
            self.session.commit()
            if result.rowcount == 0:
                logger.info(
                    f"[CACHE] {message_id} {source_language}->{target_language} "
                    "already cached by a concurrent request"
                )
            return self.lookup(message_id, source_language, target_language)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise CacheError(f'Failed to store translation in cache: {e}', 'DATABASE_ERROR')

    def for_message(self, message_id, target_language=None):
        """All cached translations of a message, newest first."""
        query = self.session.query(Translation).filter_by(message_id=message_id)
        if target_language:
            query = query.filter_by(target_language=target_language)
        try:
            return query.order_by(Translation.created_at.desc()).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise CacheError(f'Failed to retrieve translations: {e}', 'DATABASE_ERROR')

    def for_messages(self, message_ids):
        """Batch-load translations for a page of messages, grouped by message id."""
        grouped = {message_id: [] for message_id in message_ids}
        if not message_ids:
            return grouped
        rows = self.session.query(Translation).filter(
            Translation.message_id.in_(message_ids)
        ).order_by(Translation.created_at.asc()).all()
        for row in rows:
            grouped[row.message_id].append(row)
        return grouped

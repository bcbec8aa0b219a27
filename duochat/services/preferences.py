"""Per-viewer translation display preferences."""

import logging
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError

from duochat.errors import PersistenceError
from duochat.models import TranslationPreference
from duochat.utils.db import upsert

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Upsert and batch-read TranslationPreference rows.

    A preference can be saved before any translation of the message exists;
    the two are independent.
    """

    def __init__(self, session):
        self.session = session

    def set_preference(self, user_role, request):
        """
        Save ``request`` (a PreferenceRequest) for ``user_role``.

        Inserts on the first toggle, afterwards overwrites show_original and
        target_language and refreshes updated_at.

        Raises:
            PersistenceError: PREFERENCE_SAVE_FAILED if the write fails
        """
        now = datetime.utcnow()
        try:
            upsert(
                self.session,
                TranslationPreference,
                TranslationPreference.PREFERENCE_KEY,
                {
                    'user_role': user_role,
                    'message_id': request.message_id,
                    'show_original': request.show_original,
                    'target_language': request.target_language,
                    'created_at': now,
                    'updated_at': now,
                },
                update_fields=('show_original', 'target_language', 'updated_at')
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"[PREFERENCES] Save failed for {user_role}/{request.message_id}: {e}")
            raise PersistenceError('Failed to save translation preference', 'PREFERENCE_SAVE_FAILED')

        # The upsert bypasses the ORM, so drop any stale identity-map copy
        self.session.expire_all()
        return self.get(user_role, request.message_id)

    def get(self, user_role, message_id):
        return self.session.query(TranslationPreference).filter_by(
            user_role=user_role,
            message_id=message_id
        ).one_or_none()

    def for_messages(self, user_role, message_ids):
        """One query for all of a viewer's preferences on a page of messages."""
        if not message_ids:
            return {}
        rows = self.session.query(TranslationPreference).filter(
            TranslationPreference.user_role == user_role,
            TranslationPreference.message_id.in_(message_ids)
        ).all()
        return {row.message_id: row for row in rows}

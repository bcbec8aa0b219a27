"""Translation cache and per-viewer translation display preferences."""

from datetime import datetime
from duochat import db
from duochat.models.message import new_id, utc_isoformat


class Translation(db.Model):
    """Cached translation of one message for one language pair.

    Rows are written once on a cache miss and never updated. They live as
    long as the message they belong to.
    """
    __tablename__ = 'translations'

    # Cache key, also the unique constraint below
    CACHE_KEY = ('message_id', 'source_language', 'target_language')

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    message_id = db.Column(
        db.String(36),
        db.ForeignKey('messages.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    source_language = db.Column(db.String(10), nullable=False)
    target_language = db.Column(db.String(10), nullable=False)
    translated_text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    message = db.relationship(
        'Message',
        backref=db.backref('translations', cascade='all, delete-orphan', passive_deletes=True)
    )

    __table_args__ = (
        db.UniqueConstraint(*CACHE_KEY, name='uq_translations_message_language_pair'),
        db.Index('ix_translations_languages', 'source_language', 'target_language'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'message_id': self.message_id,
            'source_language': self.source_language,
            'target_language': self.target_language,
            'translated_text': self.translated_text,
            'created_at': utc_isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Translation {self.message_id} {self.source_language}->{self.target_language}>'


class TranslationPreference(db.Model):
    """Whether a viewer sees the original or translated text of a message."""
    __tablename__ = 'translation_preferences'

    # One preference per viewer per message; used as the upsert conflict target
    PREFERENCE_KEY = ('user_role', 'message_id')

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_role = db.Column(db.String(1), nullable=False)
    message_id = db.Column(
        db.String(36),
        db.ForeignKey('messages.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    show_original = db.Column(db.Boolean, default=True, nullable=False)
    target_language = db.Column(db.String(10), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    message = db.relationship(
        'Message',
        backref=db.backref('translation_preferences', cascade='all, delete-orphan', passive_deletes=True)
    )

    __table_args__ = (
        db.UniqueConstraint(*PREFERENCE_KEY, name='uq_translation_preferences_role_message'),
        db.CheckConstraint("user_role IN ('A', 'B')", name='ck_translation_preferences_user_role'),
    )

    # Shown for messages the viewer never toggled
    DEFAULT_DISPLAY = {'show_original': True, 'target_language': None}

    def display_dict(self):
        """Fields attached to a message as ``translation_preference``."""
        return {
            'show_original': self.show_original,
            'target_language': self.target_language,
        }

    def to_dict(self):
        return {
            'messageId': self.message_id,
            'showOriginal': self.show_original,
            'targetLanguage': self.target_language,
            'updatedAt': utc_isoformat(self.updated_at)
        }

    def __repr__(self):
        return f'<TranslationPreference {self.user_role} {self.message_id} original={self.show_original}>'

"""Message and Reaction models for the two-person chat."""

from datetime import datetime
from uuid import uuid4
from duochat import db


def utc_isoformat(dt):
    """Convert datetime to ISO format with Z suffix to indicate UTC."""
    if dt is None:
        return None
    return dt.isoformat() + 'Z'


def new_id():
    return str(uuid4())


class MessageType:
    TEXT = 'text'
    IMAGE = 'image'
    VOICE = 'voice'

    ALL = (TEXT, IMAGE, VOICE)


class Message(db.Model):
    """A chat message sent by identity A or B.

    Messages are never removed: unsending flips ``deleted`` and clears the
    text so replies and reactions keep pointing at a real row.
    """

    __tablename__ = 'messages'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    sender = db.Column(db.String(1), nullable=False)
    type = db.Column(db.String(10), nullable=False, default=MessageType.TEXT)
    text = db.Column(db.Text, nullable=True)  # Only for text messages that are not deleted
    reply_to_id = db.Column(
        db.String(36),
        db.ForeignKey('messages.id', ondelete='SET NULL'),
        nullable=True,
        index=True
    )
    deleted = db.Column(db.Boolean, default=False, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    reply_to = db.relationship('Message', remote_side=[id])
    reactions = db.relationship(
        'Reaction',
        backref='message',
        cascade='all, delete-orphan',
        passive_deletes=True,
        order_by='Reaction.created_at'
    )

    __table_args__ = (
        db.CheckConstraint("sender IN ('A', 'B')", name='ck_messages_sender'),
        db.CheckConstraint("type IN ('text', 'image', 'voice')", name='ck_messages_type'),
    )

    @property
    def has_text(self):
        """True when there is something a translator could work on."""
        return (
            self.type == MessageType.TEXT
            and not self.deleted
            and bool(self.text and self.text.strip())
        )

    def soft_delete(self):
        """Unsend the message: keep the row, drop the content."""
        self.deleted = True
        self.text = None

    def reply_preview(self):
        """Small dict describing this message when it is quoted by a reply."""
        return {
            'id': self.id,
            'sender': self.sender,
            'type': self.type,
            'text': self.text,
            'deleted': self.deleted,
            'created_at': utc_isoformat(self.created_at)
        }

    def to_dict(self):
        """Convert message to dictionary."""
        return {
            'id': self.id,
            'sender': self.sender,
            'type': self.type,
            'text': self.text,
            'reply_to_id': self.reply_to_id,
            'reply_to_message': self.reply_to.reply_preview() if self.reply_to else None,
            'deleted': self.deleted,
            'reactions': [reaction.to_dict() for reaction in self.reactions],
            'created_at': utc_isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Message {self.id} from {self.sender} ({self.type})>'


class Reaction(db.Model):
    """Emoji reaction. One row per (message, identity, emoji)."""

    __tablename__ = 'reactions'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    message_id = db.Column(
        db.String(36),
        db.ForeignKey('messages.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    user_role = db.Column(db.String(1), nullable=False)
    emoji = db.Column(db.String(32), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('message_id', 'user_role', 'emoji', name='uq_reactions_message_role_emoji'),
        db.CheckConstraint("user_role IN ('A', 'B')", name='ck_reactions_user_role'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'message_id': self.message_id,
            'user_role': self.user_role,
            'emoji': self.emoji,
            'created_at': utc_isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Reaction {self.emoji} by {self.user_role} on {self.message_id}>'

"""Emoji reactions with toggle semantics."""

import re

from duochat.errors import NotFoundError
from duochat.models import Message, Reaction

# One pictographic code point, optionally with a variation selector or skin
# tone, optionally joined to more of the same with ZWJ. Flags are two
# regional indicators, keycaps are [0-9#*] + FE0F + 20E3.
_PICTOGRAPH = (
    r'[\U0001F300-\U0001FAFF\u2600-\u27BF\u2B00-\u2BFF\u2190-\u21FF\u2300-\u23FF'
    r'\u2900-\u297F\u3030\u303D\u3297\u3299\u00A9\u00AE\u203C\u2049\u2122\u2139]'
    r'[\uFE0F\U0001F3FB-\U0001F3FF]?'
)
EMOJI_PATTERN = re.compile(
    rf'^(?:{_PICTOGRAPH}(?:\u200D{_PICTOGRAPH})*'
    r'|[\U0001F1E6-\U0001F1FF]{2}'
    r'|[0-9#*]\uFE0F?\u20E3)$'
)


def is_single_emoji(value):
    """True if ``value`` is exactly one emoji (including ZWJ sequences and flags)."""
    return isinstance(value, str) and EMOJI_PATTERN.match(value) is not None


def toggle_reaction(session, message_id, user_role, emoji):
    """
    Add the reaction, or remove it if the same role already left that emoji.

    Returns:
        the new Reaction, or None when the reaction was toggled off
    """
    if session.get(Message, message_id) is None:
        raise NotFoundError('Message not found', 'MESSAGE_NOT_FOUND')

    existing = session.query(Reaction).filter_by(
        message_id=message_id,
        user_role=user_role,
        emoji=emoji
    ).first()

    if existing:
        session.delete(existing)
        session.commit()
        return None

    reaction = Reaction(message_id=message_id, user_role=user_role, emoji=emoji)
    session.add(reaction)
    session.commit()
    return reaction

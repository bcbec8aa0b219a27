"""Database models for the chat application."""

from .message import Message, MessageType, Reaction
from .translation import Translation, TranslationPreference
from .workout import Workout

__all__ = [
    'Message',
    'MessageType',
    'Reaction',
    'Translation',
    'TranslationPreference',
    'Workout',
]

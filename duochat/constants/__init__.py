"""Shared constants for the application."""

from duochat.constants.languages import (
    SUPPORTED_LANGUAGES,
    AUTO_DETECT,
    is_supported_language,
)

ROLES = ('A', 'B')

__all__ = [
    'SUPPORTED_LANGUAGES',
    'AUTO_DETECT',
    'ROLES',
    'is_supported_language',
]

"""Shared utilities for the chat backend.

This package contains reusable utilities that are shared across
multiple route files to reduce code duplication.
"""

from duochat.utils.auth import (
    token_required,
    generate_token,
    verify_token,
    resolve_role,
)
from duochat.utils.error_log import log_error

__all__ = [
    'token_required',
    'generate_token',
    'verify_token',
    'resolve_role',
    'log_error',
]

"""Shared authentication utilities.

The chat has exactly two identities, A and B. Each logs in with its own
password and receives a JWT carrying ``{"role": "A"}`` or ``{"role": "B"}``.
The token travels in an HttpOnly ``token`` cookie, or in an
``Authorization: Bearer`` header for non-browser clients.
"""

from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, jsonify, current_app
from werkzeug.security import check_password_hash
import jwt

from duochat.constants import ROLES

TOKEN_COOKIE = 'token'
TOKEN_LIFETIME = timedelta(days=7)


def _get_secret_key():
    """Get JWT secret from Flask app config (single source of truth)."""
    return current_app.config['JWT_SECRET']


def generate_token(role, secret=None):
    """Sign a 7-day token for ``role``."""
    now = datetime.now(timezone.utc)
    payload = {
        'role': role,
        'iat': now,
        'exp': now + TOKEN_LIFETIME,
    }
    return jwt.encode(payload, secret or _get_secret_key(), algorithm='HS256')


def verify_token(token, secret=None):
    """Return the decoded payload, or None if the token is invalid or expired."""
    try:
        payload = jwt.decode(token, secret or _get_secret_key(), algorithms=['HS256'])
    except jwt.InvalidTokenError:
        return None
    if payload.get('role') not in ROLES:
        return None
    return payload


def resolve_role(password):
    """Match a password against both identities. Returns 'A', 'B' or None."""
    for role in ROLES:
        password_hash = current_app.config.get(f'PASSWORD_{role}_HASH')
        if password_hash and check_password_hash(password_hash, password):
            return role
    return None


def _token_from_request():
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[len('Bearer '):]
    return None


def token_required(f):
    """
    Decorator to require a valid session token.

    Passes the caller's role ('A' or 'B') as the first argument.

    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route(current_role):
            return jsonify({'role': current_role})
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _token_from_request()
        if not token:
            return jsonify({'error': 'Authentication required'}), 401

        payload = verify_token(token)
        if not payload:
            return jsonify({'error': 'Invalid or expired token'}), 401

        return f(payload['role'], *args, **kwargs)
    return decorated

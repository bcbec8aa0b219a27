"""Login, logout and session introspection for identities A and B."""

import logging
from flask import Blueprint, request, jsonify, current_app

from duochat import limiter
from duochat.utils import token_required, generate_token, resolve_role
from duochat.utils.auth import TOKEN_COOKIE, TOKEN_LIFETIME

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def _cookie_options():
    secure = current_app.config.get('COOKIE_SECURE', False)
    return {
        'httponly': True,
        'secure': secure,
        # Cross-site frontend in production needs SameSite=None (which requires Secure)
        'samesite': 'None' if secure else 'Strict',
    }


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Exchange a password for a session cookie.

    Request body: {"password": "..."}
    Response: {"role": "A"} or {"role": "B"}
    """
    try:
        data = request.get_json(silent=True) or {}
        password = data.get('password')

        if not password or not isinstance(password, str):
            return jsonify({'error': 'Password is required'}), 400

        if not current_app.config.get('PASSWORD_A_HASH') or not current_app.config.get('PASSWORD_B_HASH'):
            logger.error("[AUTH] PASSWORD_A_HASH / PASSWORD_B_HASH not configured")
            return jsonify({'error': 'Server configuration error'}), 500

        role = resolve_role(password)
        if not role:
            return jsonify({'error': 'Invalid password'}), 401

        token = generate_token(role)
        response = jsonify({'role': role})
        response.set_cookie(
            TOKEN_COOKIE,
            token,
            max_age=int(TOKEN_LIFETIME.total_seconds()),
            **_cookie_options()
        )
        logger.info(f"[AUTH] Identity {role} logged in")
        return response, 200
    except Exception as e:
        logger.error(f"[AUTH] Login error: {e}")
        return jsonify({'error': 'Internal server error'}), 500


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the session cookie."""
    response = jsonify({'success': True})
    response.delete_cookie(TOKEN_COOKIE, **_cookie_options())
    return response, 200


@auth_bp.route('/me', methods=['GET'])
@token_required
def me(current_role):
    return jsonify({'role': current_role}), 200

"""
Tests for authentication endpoints and token helpers.
"""

from datetime import datetime, timedelta, timezone

import jwt
from faker import Faker

from duochat.utils import generate_token, verify_token

fake = Faker()


class TestLogin:
    """Tests for POST /api/auth/login"""

    def test_login_as_a(self, client, db_session, passwords):
        response = client.post('/api/auth/login', json={'password': passwords['A']})

        assert response.status_code == 200
        assert response.json == {'role': 'A'}
        cookie = response.headers.get('Set-Cookie')
        assert cookie.startswith('token=')
        assert 'HttpOnly' in cookie

    def test_login_as_b(self, client, db_session, passwords):
        response = client.post('/api/auth/login', json={'password': passwords['B']})

        assert response.status_code == 200
        assert response.json['role'] == 'B'

    def test_login_wrong_password(self, client, db_session):
        response = client.post('/api/auth/login', json={'password': fake.password()})

        assert response.status_code == 401
        assert response.json['error'] == 'Invalid password'

    def test_login_missing_password(self, client, db_session):
        response = client.post('/api/auth/login', json={})

        assert response.status_code == 400
        assert response.json['error'] == 'Password is required'

    def test_login_without_configured_hashes(self, app, client, db_session, passwords):
        saved = app.config['PASSWORD_B_HASH']
        app.config['PASSWORD_B_HASH'] = None
        try:
            response = client.post('/api/auth/login', json={'password': passwords['A']})
        finally:
            app.config['PASSWORD_B_HASH'] = saved

        assert response.status_code == 500


class TestSession:
    """Tests for the token cookie and GET /api/auth/me"""

    def test_cookie_authenticates_follow_up_requests(self, client, db_session, passwords):
        client.post('/api/auth/login', json={'password': passwords['B']})

        response = client.get('/api/auth/me')

        assert response.status_code == 200
        assert response.json['role'] == 'B'

    def test_bearer_header_authenticates(self, client, headers_a):
        response = client.get('/api/auth/me', headers=headers_a)

        assert response.status_code == 200
        assert response.json['role'] == 'A'

    def test_me_unauthenticated(self, client, db_session):
        response = client.get('/api/auth/me')

        assert response.status_code == 401
        assert response.json['error'] == 'Authentication required'

    def test_me_with_garbage_token(self, client, db_session):
        response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not.a.token'})

        assert response.status_code == 401
        assert response.json['error'] == 'Invalid or expired token'

    def test_logout_clears_cookie(self, client, db_session, passwords):
        client.post('/api/auth/login', json={'password': passwords['A']})

        response = client.post('/api/auth/logout')
        assert response.status_code == 200
        assert response.json['success'] is True

        assert client.get('/api/auth/me').status_code == 401


class TestTokens:
    """Tests for generate_token / verify_token"""

    def test_round_trip_carries_role(self, app):
        with app.app_context():
            payload = verify_token(generate_token('A'))

        assert payload['role'] == 'A'

    def test_unknown_role_rejected(self, app):
        with app.app_context():
            assert verify_token(generate_token('C')) is None

    def test_wrong_secret_rejected(self, app):
        token = generate_token('A', secret='some-other-secret')

        with app.app_context():
            assert verify_token(token) is None

    def test_expired_token_rejected(self, app):
        past = datetime.now(timezone.utc) - timedelta(days=8)
        token = jwt.encode(
            {'role': 'A', 'iat': past, 'exp': past + timedelta(days=7)},
            app.config['JWT_SECRET'],
            algorithm='HS256'
        )

        with app.app_context():
            assert verify_token(token) is None


def test_health_check(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.json.get('status') == 'ok'

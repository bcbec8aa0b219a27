"""
Pytest configuration and fixtures for testing the chat API.
"""

import os
import sys
from datetime import datetime, timedelta

import pytest
from faker import Faker
from werkzeug.security import generate_password_hash

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from duochat import create_app, db
from duochat.models import Message, MessageType
from duochat.utils import generate_token

fake = Faker()

PASSWORD_A = 'alpha-password-123'
PASSWORD_B = 'bravo-password-456'


class FakeTranslator:
    """Stands in for the MyMemory client and records every call."""

    def __init__(self):
        self.calls = []
        self.error = None

    def translate(self, text, source_language, target_language):
        self.calls.append((text, source_language, target_language))
        if self.error is not None:
            raise self.error
        return f'[{target_language}] {text}'

    def reset(self):
        self.calls = []
        self.error = None


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'
    os.environ['JWT_SECRET'] = 'test-secret-key-for-testing'
    os.environ['PASSWORD_A_HASH'] = generate_password_hash(PASSWORD_A)
    os.environ['PASSWORD_B_HASH'] = generate_password_hash(PASSWORD_B)

    app = create_app('testing', translation_provider=FakeTranslator())

    rules = [rule.rule for rule in app.url_map.iter_rules()]
    api_routes = [r for r in rules if r.startswith('/api/')]
    print(f"\n[TEST SETUP] Registered API routes: {sorted(api_routes)}")

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def translator(app):
    """The fake translation provider, cleared for each test."""
    provider = app.extensions['duochat']['translation_provider']
    provider.reset()
    yield provider
    provider.reset()


def _auth_headers(app, role):
    with app.app_context():
        token = generate_token(role)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def headers_a(app):
    """Authentication headers for identity A."""
    return _auth_headers(app, 'A')


@pytest.fixture
def headers_b(app):
    """Authentication headers for identity B."""
    return _auth_headers(app, 'B')


@pytest.fixture
def make_message(db_session):
    """Factory that inserts a message directly.

    Messages made in one test get strictly increasing ``created_at`` so
    ordering assertions do not depend on clock resolution.
    """
    base = datetime.utcnow() - timedelta(hours=1)
    counter = {'n': 0}

    def _make(sender='A', text=None, **overrides):
        counter['n'] += 1
        fields = {
            'sender': sender,
            'type': MessageType.TEXT,
            'text': text if text is not None else fake.sentence(nb_words=6),
            'created_at': base + timedelta(seconds=counter['n']),
        }
        fields.update(overrides)
        message = Message(**fields)
        db_session.add(message)
        db_session.commit()
        return message

    return _make


@pytest.fixture
def passwords():
    """Plain-text login passwords for both identities."""
    return {'A': PASSWORD_A, 'B': PASSWORD_B}

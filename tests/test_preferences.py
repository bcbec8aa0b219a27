"""
Tests for translation display preferences.
"""

from datetime import datetime, timedelta

from faker import Faker

from duochat.models import TranslationPreference
from duochat.schemas import PreferenceRequest
from duochat.services import preferences
from duochat.services.preferences import PreferenceStore

fake = Faker()


class _FixedClock:
    """Replaces the datetime class in the preferences module."""

    def __init__(self, now):
        self.now = now

    def utcnow(self):
        return self.now


def _save(client, headers, message_id, show_original, target_language=None):
    return client.post('/api/translations/preferences', json={
        'messageId': message_id,
        'showOriginal': show_original,
        'targetLanguage': target_language,
    }, headers=headers)


class TestSavePreference:
    """Tests for POST /api/translations/preferences"""

    def test_save_preference(self, client, headers_a, make_message):
        message = make_message(sender='B')

        response = _save(client, headers_a, message.id, False, 'en')

        assert response.status_code == 200
        assert response.json['success'] is True
        preference = response.json['preference']
        assert preference['messageId'] == message.id
        assert preference['showOriginal'] is False
        assert preference['targetLanguage'] == 'en'
        assert preference['updatedAt'].endswith('Z')

    def test_second_save_overwrites_single_row(self, client, headers_a, make_message, db_session):
        message = make_message(sender='B')

        _save(client, headers_a, message.id, False, 'en')
        response = _save(client, headers_a, message.id, True)

        assert response.status_code == 200
        assert response.json['preference']['showOriginal'] is True
        assert response.json['preference']['targetLanguage'] is None
        rows = db_session.query(TranslationPreference).filter_by(message_id=message.id).all()
        assert len(rows) == 1
        assert rows[0].show_original is True

    def test_each_identity_has_its_own_preference(self, client, headers_a, headers_b, make_message, db_session):
        message = make_message()

        _save(client, headers_a, message.id, False, 'zh-CN')
        _save(client, headers_b, message.id, True)

        rows = {
            row.user_role: row
            for row in db_session.query(TranslationPreference).filter_by(message_id=message.id)
        }
        assert rows['A'].show_original is False
        assert rows['B'].show_original is True

    def test_saved_before_any_translation_exists(self, client, headers_a, make_message, translator):
        message = make_message()

        response = _save(client, headers_a, message.id, False, 'zh-TW')

        assert response.status_code == 200
        assert translator.calls == []

    def test_show_original_must_be_boolean(self, client, headers_a, make_message):
        message = make_message()

        response = _save(client, headers_a, message.id, 'no')

        assert response.status_code == 400
        assert response.json['error'] == 'showOriginal must be a boolean'
        assert response.json['code'] == 'INVALID_REQUEST'

    def test_message_id_required(self, client, headers_a, db_session):
        response = client.post('/api/translations/preferences', json={'showOriginal': True}, headers=headers_a)

        assert response.status_code == 400
        assert response.json['error'] == 'Message ID is required'

    def test_unsupported_target_language(self, client, headers_a, make_message):
        message = make_message()

        response = _save(client, headers_a, message.id, False, 'ja')

        assert response.status_code == 400
        assert response.json['error'] == 'Target language must be one of: en, zh-CN, zh-TW'

    def test_requires_authentication(self, client, make_message):
        message = make_message()

        response = client.post('/api/translations/preferences', json={
            'messageId': message.id,
            'showOriginal': False,
        })

        assert response.status_code == 401


class TestPreferencesInMessageList:
    """Preferences attached to GET /api/messages"""

    def test_viewer_sees_own_preference(self, client, headers_a, headers_b, make_message):
        first = make_message(sender='B', text='First')
        second = make_message(sender='B', text='Second')

        _save(client, headers_a, first.id, False, 'zh-CN')

        messages = client.get('/api/messages', headers=headers_a).json['messages']
        by_id = {m['id']: m for m in messages}
        assert by_id[first.id]['translation_preference'] == {
            'show_original': False,
            'target_language': 'zh-CN',
        }
        assert by_id[second.id]['translation_preference'] == {
            'show_original': True,
            'target_language': None,
        }

        # B never toggled anything
        messages = client.get('/api/messages', headers=headers_b).json['messages']
        for message in messages:
            assert message['translation_preference'] == {'show_original': True, 'target_language': None}


class TestPreferenceStore:
    """Tests for PreferenceStore"""

    def test_for_messages_only_returns_viewer_rows(self, make_message, db_session):
        first = make_message()
        second = make_message()
        store = PreferenceStore(db_session)

        store.set_preference('A', PreferenceRequest(message_id=first.id, show_original=False))
        store.set_preference('B', PreferenceRequest(message_id=second.id, show_original=False))

        found = store.for_messages('A', [first.id, second.id])

        assert list(found) == [first.id]

    def test_for_messages_empty_page(self, db_session):
        assert PreferenceStore(db_session).for_messages('A', []) == {}

    def test_same_payload_twice_keeps_one_row_with_latest_timestamp(self, make_message, db_session, monkeypatch):
        message = make_message()
        store = PreferenceStore(db_session)
        request = PreferenceRequest(message_id=message.id, show_original=False, target_language='en')
        first_time = datetime(2026, 1, 1, 9, 0, 0)
        second_time = first_time + timedelta(minutes=5)

        monkeypatch.setattr(preferences, 'datetime', _FixedClock(first_time))
        created = store.set_preference('A', request)
        created_id = created.id

        monkeypatch.setattr(preferences, 'datetime', _FixedClock(second_time))
        updated = store.set_preference('A', request)

        rows = db_session.query(TranslationPreference).filter_by(user_role='A', message_id=message.id).all()
        assert len(rows) == 1
        assert updated.id == created_id
        assert updated.updated_at == second_time
        assert updated.updated_at > first_time
        assert updated.created_at == first_time
        assert updated.show_original is False
        assert updated.target_language == 'en'

"""
Tests for message endpoints, enrichment and reactions.
"""

from datetime import timedelta

import pytest
from faker import Faker

from duochat.models import Message, Reaction, Translation, TranslationPreference
from duochat.services.messages import enrich_messages, MAX_MESSAGE_LENGTH
from duochat.services.reactions import is_single_emoji

fake = Faker()


class TestListMessages:
    """Tests for GET /api/messages"""

    def test_list_empty(self, client, headers_a, db_session):
        response = client.get('/api/messages', headers=headers_a)

        assert response.status_code == 200
        assert response.json['messages'] == []

    def test_newest_first_with_translations(self, client, headers_a, make_message, translator):
        older = make_message(sender='A', text='Older')
        newer = make_message(sender='B', text='Newer')
        client.post('/api/translations', json={'messageId': older.id, 'targetLanguage': 'zh-CN'}, headers=headers_a)

        messages = client.get('/api/messages', headers=headers_a).json['messages']

        assert [m['id'] for m in messages] == [newer.id, older.id]
        assert messages[0]['translations'] == []
        assert len(messages[1]['translations']) == 1
        assert messages[1]['translations'][0]['translated_text'] == '[zh-CN] Older'

    def test_limit_and_before_cursor(self, client, headers_a, make_message):
        created = [make_message() for _ in range(5)]

        page = client.get('/api/messages?limit=2', headers=headers_a).json['messages']
        assert [m['id'] for m in page] == [created[4].id, created[3].id]

        cursor = page[-1]['created_at']
        page = client.get(f'/api/messages?limit=2&before={cursor}', headers=headers_a).json['messages']
        assert [m['id'] for m in page] == [created[2].id, created[1].id]

    @pytest.mark.parametrize('query', ['limit=0', 'limit=abc', 'before=yesterday'])
    def test_invalid_query_params(self, client, headers_a, db_session, query):
        response = client.get(f'/api/messages?{query}', headers=headers_a)

        assert response.status_code == 400

    def test_requires_authentication(self, client, db_session):
        assert client.get('/api/messages').status_code == 401


class TestSendMessage:
    """Tests for POST /api/messages"""

    def test_send_text(self, client, headers_a, db_session):
        text = fake.sentence()

        response = client.post('/api/messages', json={'text': f'  {text}  '}, headers=headers_a)

        assert response.status_code == 201
        message = response.json['message']
        assert message['sender'] == 'A'
        assert message['type'] == 'text'
        assert message['text'] == text
        assert message['deleted'] is False
        assert message['reactions'] == []

    def test_reply_includes_quoted_message(self, client, headers_b, make_message):
        original = make_message(sender='A', text='Pizza tonight?')

        response = client.post('/api/messages', json={'text': 'Yes!', 'reply_to_id': original.id}, headers=headers_b)

        assert response.status_code == 201
        reply = response.json['message']
        assert reply['reply_to_id'] == original.id
        assert reply['reply_to_message']['text'] == 'Pizza tonight?'

    def test_reply_to_missing_message(self, client, headers_a, db_session):
        response = client.post('/api/messages', json={'text': 'hi', 'reply_to_id': fake.uuid4()}, headers=headers_a)

        assert response.status_code == 404

    @pytest.mark.parametrize('reply_to_id', [{'x': 1}, 5, ['abc'], True, '   '])
    def test_malformed_reply_target_rejected(self, client, headers_a, db_session, reply_to_id):
        response = client.post('/api/messages', json={'text': 'hi', 'reply_to_id': reply_to_id}, headers=headers_a)

        assert response.status_code == 400
        assert response.json['error'] == 'Invalid reply target'
        assert 'reply_to_id' in response.json['details']

    @pytest.mark.parametrize('text', ['', '   ', None])
    def test_empty_text_rejected(self, client, headers_a, db_session, text):
        response = client.post('/api/messages', json={'text': text}, headers=headers_a)

        assert response.status_code == 400

    def test_too_long_rejected(self, client, headers_a, db_session):
        response = client.post('/api/messages', json={'text': 'x' * (MAX_MESSAGE_LENGTH + 1)}, headers=headers_a)

        assert response.status_code == 400


class TestUnsendMessage:
    """Tests for DELETE /api/messages/<id>"""

    def test_unsend_own_message(self, client, headers_a, make_message, db_session):
        message = make_message(sender='A')
        message_id = message.id

        response = client.delete(f'/api/messages/{message_id}', headers=headers_a)

        assert response.status_code == 200
        db_session.expire_all()
        stored = db_session.get(Message, message_id)
        assert stored.deleted is True
        assert stored.text is None

    def test_cannot_unsend_other_identity_message(self, client, headers_b, make_message):
        message = make_message(sender='A')

        response = client.delete(f'/api/messages/{message.id}', headers=headers_b)

        assert response.status_code == 403
        assert response.json['error'] == "Cannot unsend another user's message"

    def test_unsend_missing_message(self, client, headers_a, db_session):
        response = client.delete(f'/api/messages/{fake.uuid4()}', headers=headers_a)

        assert response.status_code == 404


class TestReactions:
    """Tests for POST /api/messages/<id>/reactions"""

    def test_toggle_on_and_off(self, client, headers_b, make_message, db_session):
        message = make_message(sender='A')
        url = f'/api/messages/{message.id}/reactions'

        added = client.post(url, json={'emoji': '👍'}, headers=headers_b)
        assert added.status_code == 200
        assert added.json['reaction']['emoji'] == '👍'
        assert added.json['reaction']['user_role'] == 'B'

        removed = client.post(url, json={'emoji': '👍'}, headers=headers_b)
        assert removed.status_code == 200
        assert removed.json['reaction'] is None
        assert db_session.query(Reaction).count() == 0

    def test_both_identities_can_react(self, client, headers_a, headers_b, make_message, db_session):
        message = make_message()
        url = f'/api/messages/{message.id}/reactions'

        client.post(url, json={'emoji': '🎉'}, headers=headers_a)
        client.post(url, json={'emoji': '🎉'}, headers=headers_b)

        assert db_session.query(Reaction).filter_by(message_id=message.id).count() == 2

    @pytest.mark.parametrize('emoji', ['', 'ok', '👍👍', None])
    def test_invalid_emoji(self, client, headers_a, make_message, emoji):
        message = make_message()

        response = client.post(f'/api/messages/{message.id}/reactions', json={'emoji': emoji}, headers=headers_a)

        assert response.status_code == 400
        assert response.json['error'] == 'Invalid emoji'

    def test_reaction_on_missing_message(self, client, headers_a, db_session):
        response = client.post(f'/api/messages/{fake.uuid4()}/reactions', json={'emoji': '🔥'}, headers=headers_a)

        assert response.status_code == 404

    @pytest.mark.parametrize('emoji', ['👍', '🔥', '🇨🇳', '👍🏽'])
    def test_is_single_emoji(self, emoji):
        assert is_single_emoji(emoji)


class TestEnrichMessages:
    """Tests for enrich_messages, independent of the database"""

    def _message(self, message_id, created_at):
        return Message(id=message_id, sender='A', type='text', text=fake.word(),
                       deleted=False, created_at=created_at)

    def test_preserves_order_and_attaches_translations(self):
        now = fake.date_time()
        messages = [self._message('m2', now), self._message('m1', now - timedelta(minutes=1))]
        translation = Translation(id='t1', message_id='m1', source_language='en',
                                  target_language='zh-CN', translated_text='你好', created_at=now)

        enriched = enrich_messages(messages, {'m1': [translation]})

        assert [m['id'] for m in enriched] == ['m2', 'm1']
        assert enriched[0]['translations'] == []
        assert enriched[1]['translations'][0]['translated_text'] == '你好'
        assert 'translation_preference' not in enriched[0]

    def test_viewer_gets_defaults_for_untouched_messages(self):
        now = fake.date_time()
        messages = [self._message('m1', now), self._message('m2', now)]
        preference = TranslationPreference(user_role='A', message_id='m2', show_original=False,
                                           target_language='en')

        enriched = enrich_messages(messages, {}, {'m2': preference}, viewer='A')

        assert enriched[0]['translation_preference'] == {'show_original': True, 'target_language': None}
        assert enriched[1]['translation_preference'] == {'show_original': False, 'target_language': 'en'}

    def test_default_preference_is_not_shared(self):
        now = fake.date_time()
        enriched = enrich_messages([self._message('m1', now)], {}, viewer='B')

        enriched[0]['translation_preference']['show_original'] = False

        assert TranslationPreference.DEFAULT_DISPLAY['show_original'] is True

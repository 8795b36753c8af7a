"""
Test suite for the assistant chat.
"""

from models import ChatReply, ChatWidget


class TestChatPage:
    """Chat page."""

    def test_requires_auth(self, client):
        assert client.get('/chat/').status_code == 302

    def test_renders_greeting_and_suggestions(self, logged_in_client):
        response = logged_in_client.get('/chat/')
        assert response.status_code == 200
        assert 'Olá, João Silva!'.encode() in response.data
        assert b'Qual meu saldo atual?' in response.data


class TestChatSend:
    """Chat JSON endpoint."""

    def test_send_returns_reply(self, logged_in_client, ai):
        ai.send_chat_message.return_value = ChatReply(
            text='Seu saldo é positivo 🎉',
            widget=ChatWidget(type='stat', title='Saldo', value='R$ 4.283,60',
                              description='Receitas menos despesas', color='emerald'),
        )

        response = logged_in_client.post('/chat/send', json={'message': 'Qual meu saldo?'})

        assert response.status_code == 200
        data = response.get_json()
        assert data['text'] == 'Seu saldo é positivo 🎉'
        assert data['widget']['value'] == 'R$ 4.283,60'
        message, transactions = ai.send_chat_message.call_args[0]
        assert message == 'Qual meu saldo?'
        assert len(transactions) == 5

    def test_send_without_widget(self, logged_in_client, ai):
        ai.send_chat_message.return_value = ChatReply(text='Oi!')

        data = logged_in_client.post('/chat/send', json={'message': 'oi'}).get_json()

        assert data == {'text': 'Oi!', 'widget': None}

    def test_empty_message_rejected(self, logged_in_client, ai):
        response = logged_in_client.post('/chat/send', json={'message': '   '})
        assert response.status_code == 400
        ai.send_chat_message.assert_not_called()

    def test_missing_body_rejected(self, logged_in_client, ai):
        response = logged_in_client.post('/chat/send', data='not json')
        assert response.status_code == 400

    def test_too_long_message_rejected(self, logged_in_client, ai):
        response = logged_in_client.post('/chat/send', json={'message': 'a' * 1001})
        assert response.status_code == 400

    def test_send_requires_auth(self, client_no_csrf):
        response = client_no_csrf.post('/chat/send', json={'message': 'oi'})
        assert response.status_code == 302

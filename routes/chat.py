from flask import Blueprint, render_template, request, current_app, jsonify
from auth_utils import get_storage, login_required

chat_bp = Blueprint('chat', __name__, url_prefix='/chat')

MAX_MESSAGE_LENGTH = 1000

SUGGESTIONS = [
    "Quanto gastei em Alimentação este mês?",
    "Quanto recebi este mês?",
    "Por que meu gasto aumentou?",
    "Qual meu saldo atual?",
]

@chat_bp.route('/')
@login_required
def index():
    return render_template('chat.html', suggestions=SUGGESTIONS)


@chat_bp.route('/send', methods=['POST'])
@login_required
def send():
    payload = request.get_json(silent=True) or {}
    message = str(payload.get('message', '')).strip()

    if not message:
        return jsonify({'error': 'Mensagem vazia.'}), 400
    if len(message) > MAX_MESSAGE_LENGTH:
        return jsonify({'error': 'Mensagem muito longa.'}), 400

    transactions = get_storage().get_transactions()
    reply = current_app.ai_service.send_chat_message(message, transactions)
    return jsonify(reply.model_dump(mode='json'))

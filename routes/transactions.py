from datetime import date
from flask import Blueprint, render_template, request, redirect, url_for, current_app, flash, jsonify
from auth_utils import get_storage, login_required
from form_utils import parse_amount
from analytics import summarize
from models import EXPENSE_CATEGORIES, INCOME_CATEGORIES, Transaction
from storage_service import new_id

transactions_bp = Blueprint('transactions', __name__, url_prefix='')

MAX_DESCRIPTION_LENGTH = 200

@transactions_bp.route('/')
@login_required
def index():
    transactions = get_storage().get_transactions()
    query = request.args.get('q', '').strip().lower()

    shown = list(reversed(transactions))
    if query:
        shown = [t for t in shown if query in t.description.lower() or query in t.category.lower()]

    return render_template(
        'transactions.html',
        transactions=shown,
        query=query,
        totals=summarize(transactions),
        expense_categories=EXPENSE_CATEGORIES,
        income_categories=INCOME_CATEGORIES
    )


@transactions_bp.route('/transactions/add', methods=['POST'])
@login_required
def add_transaction():
    description = request.form.get('description', '').strip()
    amount = parse_amount(request.form.get('amount'))
    tx_type = request.form.get('type', 'expense')
    categories = INCOME_CATEGORIES if tx_type == 'income' else EXPENSE_CATEGORIES
    category = request.form.get('category') or categories[0]

    if tx_type not in ('income', 'expense'):
        flash("Tipo de transação inválido.", "error")
        return redirect(url_for('transactions.index'))
    if not description or len(description) > MAX_DESCRIPTION_LENGTH:
        flash("Informe uma descrição.", "error")
        return redirect(url_for('transactions.index'))
    if amount is None:
        flash("Informe um valor positivo.", "error")
        return redirect(url_for('transactions.index'))
    if category not in categories:
        flash("Categoria inválida.", "error")
        return redirect(url_for('transactions.index'))

    get_storage().add_transaction(Transaction(
        id=new_id(),
        description=description,
        amount=amount,
        category=category,
        date=date.today().isoformat(),
        type=tx_type,
        is_ai_generated=False
    ))
    return redirect(url_for('transactions.index'))


@transactions_bp.route('/transactions/ai', methods=['POST'])
@login_required
def add_from_text():
    text = request.form.get('text', '').strip()
    if not text:
        return redirect(url_for('transactions.index'))

    ai = current_app.ai_service
    parsed = ai.parse_transaction_natural_language(text)
    if parsed is None:
        flash("Não consegui entender essa transação. Tente descrever de outra forma.", "error")
        return redirect(url_for('transactions.index'))

    amount = parse_amount(parsed.amount)
    categories = INCOME_CATEGORIES if parsed.type == 'income' else EXPENSE_CATEGORIES
    if amount is None:
        flash("Informe um valor positivo.", "error")
        return redirect(url_for('transactions.index'))
    if parsed.category not in categories:
        flash("Categoria inválida.", "error")
        return redirect(url_for('transactions.index'))

    get_storage().add_transaction(Transaction(
        id=new_id(),
        description=parsed.description[:MAX_DESCRIPTION_LENGTH],
        amount=amount,
        category=parsed.category,
        date=parsed.date or date.today().isoformat(),
        type=parsed.type,
        is_ai_generated=True
    ))

    verb = 'Gastei' if parsed.type == 'expense' else 'Recebi'
    flash(ai.get_financial_advice(f"{verb} {parsed.amount} em {parsed.category}"), "advice")
    return redirect(url_for('transactions.index'))


@transactions_bp.route('/transactions/advice')
@login_required
def advice():
    advice_text = current_app.ai_service.get_financial_advice("Usuário está na tela de transações.")
    return jsonify({'advice': advice_text})

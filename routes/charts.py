from flask import Blueprint, render_template, current_app, jsonify
from auth_utils import get_storage, login_required
from analytics import category_breakdown, monthly_totals, summarize

charts_bp = Blueprint('charts', __name__, url_prefix='/charts')

@charts_bp.route('/')
@login_required
def index():
    transactions = get_storage().get_transactions()

    category_data = category_breakdown(transactions)
    monthly_data = monthly_totals(transactions)

    return render_template(
        'charts.html',
        totals=summarize(transactions),
        pie_labels=[c.name for c in category_data],
        pie_values=[c.value for c in category_data],
        pie_colors=[c.color for c in category_data],
        bar_labels=[m.name for m in monthly_data],
        bar_income=[m.income for m in monthly_data],
        bar_expense=[m.expense for m in monthly_data]
    )


@charts_bp.route('/forecast', methods=['POST'])
@login_required
def forecast():
    transactions = get_storage().get_transactions()
    result = current_app.ai_service.generate_financial_forecast(transactions)
    if result is None:
        return jsonify({'error': 'Não foi possível gerar a previsão agora.'}), 502
    return jsonify(result.model_dump(mode='json'))

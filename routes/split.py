from flask import Blueprint, render_template
from auth_utils import get_storage, login_required

split_bp = Blueprint('split', __name__, url_prefix='/split')

@split_bp.route('/')
@login_required
def index():
    groups = get_storage().get_split_groups()
    total_owed_to_you = sum(g.total_owed_to_you for g in groups)
    total_you_owe = sum(g.total_you_owe for g in groups)
    return render_template(
        'split.html',
        groups=groups,
        total_owed_to_you=total_owed_to_you,
        total_you_owe=total_you_owe,
        net_balance=total_owed_to_you - total_you_owe
    )

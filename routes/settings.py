from flask import Blueprint, render_template, redirect, url_for, flash
from auth_utils import get_storage, login_required

settings_bp = Blueprint('settings', __name__, url_prefix='/settings')

@settings_bp.route('/')
@login_required
def index():
    return render_template('settings.html')

@settings_bp.route('/reset', methods=['POST'])
@login_required
def reset():
    get_storage().clear_all()
    flash("Todos os dados foram apagados.", "success")
    return redirect(url_for('auth.login'))

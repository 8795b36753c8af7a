from flask import Blueprint, render_template, request, redirect, url_for, flash
from auth_utils import get_storage
from form_utils import is_valid_email, normalize_cpf

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

MIN_PASSWORD_LENGTH = 8
MAX_NAME_LENGTH = 100

@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    if request.method == 'POST':
        name = request.form.get('name', '').strip()
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')
        cpf = request.form.get('cpf', '').strip()
        birth_date = request.form.get('birth_date', '').strip()

        if not name or not email or not password or not cpf or not birth_date:
            flash("Por favor, preencha todos os campos.", "error")
            return redirect(url_for('auth.signup'))
        if len(name) > MAX_NAME_LENGTH:
            flash("Nome muito longo.", "error")
            return redirect(url_for('auth.signup'))
        if not is_valid_email(email):
            flash("Informe um e-mail válido.", "error")
            return redirect(url_for('auth.signup'))
        if len(password) < MIN_PASSWORD_LENGTH:
            flash(f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres.", "error")
            return redirect(url_for('auth.signup'))
        cpf_digits = normalize_cpf(cpf)
        if cpf_digits is None:
            flash("CPF deve conter 11 dígitos.", "error")
            return redirect(url_for('auth.signup'))

        result = get_storage().register_user(name, email, password, cpf_digits, birth_date)
        if not result.success:
            flash(result.message, "error")
            return redirect(url_for('auth.signup'))

        flash(result.message, "success")
        return redirect(url_for('transactions.index'))

    return render_template('auth/signup.html')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash("Por favor, informe e-mail e senha.", "error")
            return redirect(url_for('auth.login'))

        result = get_storage().login_user(email, password)
        if not result.success:
            flash(result.message, "error")
            return redirect(url_for('auth.login'))

        return redirect(url_for('transactions.index'))

    if get_storage().get_current_user():
        return redirect(url_for('transactions.index'))
    return render_template('auth/login.html')


@auth_bp.route('/recover', methods=['GET', 'POST'])
def recover():
    if request.method == 'POST':
        identifier = request.form.get('identifier', '').strip()
        if not identifier:
            flash("Por favor, informe seu e-mail ou telefone.", "error")
            return redirect(url_for('auth.recover'))

        result = get_storage().recover_password(identifier)
        flash(result.message, "success" if result.success else "error")
        return redirect(url_for('auth.recover'))

    return render_template('auth/recover.html')


@auth_bp.route('/logout')
def logout():
    get_storage().logout_user()
    return redirect(url_for('auth.login'))

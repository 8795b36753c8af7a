from flask import Blueprint, render_template, request, redirect, url_for, flash
from auth_utils import get_storage, login_required
from form_utils import format_brl, parse_amount
from models import GOAL_ICONS, Goal
from storage_service import ChallengeNotFound, GoalNotFound, new_id

gamification_bp = Blueprint('gamification', __name__, url_prefix='/gamification')

MAX_TITLE_LENGTH = 100

@gamification_bp.route('/')
@login_required
def index():
    storage = get_storage()
    return render_template(
        'gamification.html',
        goals=storage.get_goals(),
        challenges=storage.get_challenges(),
        goal_icons=GOAL_ICONS
    )


@gamification_bp.route('/goals/add', methods=['POST'])
@login_required
def add_goal():
    title = request.form.get('title', '').strip()
    target = parse_amount(request.form.get('target_amount'))
    deadline = request.form.get('deadline', '').strip() or 'Indefinido'
    icon = request.form.get('icon', 'star')

    if not title or len(title) > MAX_TITLE_LENGTH:
        flash("Informe um título para a meta.", "error")
        return redirect(url_for('gamification.index'))
    if target is None:
        flash("Informe um valor alvo positivo.", "error")
        return redirect(url_for('gamification.index'))
    if icon not in GOAL_ICONS:
        icon = 'star'

    get_storage().add_goal(Goal(
        id=new_id(),
        title=title,
        target_amount=target,
        current_amount=0,
        deadline=deadline,
        icon=icon
    ))
    flash(f"Meta {title} criada!", "success")
    return redirect(url_for('gamification.index'))


@gamification_bp.route('/goals/<goal_id>/deposit', methods=['POST'])
@login_required
def deposit(goal_id):
    amount = parse_amount(request.form.get('amount'))
    if amount is None:
        flash("Informe um valor positivo.", "error")
        return redirect(url_for('gamification.index'))

    try:
        goal, reached = get_storage().deposit_to_goal(goal_id, amount)
    except GoalNotFound:
        return "Goal not found", 404

    if reached:
        flash(f"Você atingiu a meta {goal.title} 🎉", "success")
    else:
        flash(f"{format_brl(amount)} adicionados para {goal.title} 🚀", "success")
    return redirect(url_for('gamification.index'))


@gamification_bp.route('/challenges/<challenge_id>/progress', methods=['POST'])
@login_required
def update_progress(challenge_id):
    try:
        progress = int(request.form.get('progress', ''))
    except ValueError:
        flash("Progresso inválido.", "error")
        return redirect(url_for('gamification.index'))

    try:
        challenge = get_storage().set_challenge_progress(challenge_id, progress)
    except ChallengeNotFound:
        return "Challenge not found", 404

    if challenge.is_completed:
        flash(f"Desafio {challenge.title} concluído! {challenge.reward}", "success")
    return redirect(url_for('gamification.index'))

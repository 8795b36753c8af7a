"""
Durable state for one device: users, transactions, goals, challenges,
split groups and the active session.

Every collection is a single JSON blob in the key-value store. Reads seed
missing collections with demo data; writes replace the whole blob.
"""

import json
import logging
import re
import uuid
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from models import Challenge, Goal, SplitGroup, Transaction, User

logger = logging.getLogger(__name__)

KEYS = {
    'TRANSACTIONS': 'cashhub_transactions',
    'GOALS': 'cashhub_goals',
    'CHALLENGES': 'cashhub_challenges_v3',
    'SPLIT_GROUPS': 'cashhub_split_groups',
    'USERS': 'cashhub_users_db',
    'CURRENT_USER': 'cashhub_current_session',
}

SEED_DATA = {
    'transactions': [
        {'id': '1', 'description': 'Salário Mensal', 'amount': 4500.00, 'category': 'Salário', 'date': '2023-10-05', 'type': 'income', 'is_ai_generated': False},
        {'id': '2', 'description': 'Supermercado Mensal', 'amount': 850.50, 'category': 'Alimentação', 'date': '2023-10-15', 'type': 'expense', 'is_ai_generated': False},
        {'id': '3', 'description': 'Uber para Aeroporto', 'amount': 45.90, 'category': 'Transporte', 'date': '2023-10-18', 'type': 'expense', 'is_ai_generated': False},
        {'id': '4', 'description': 'Freelance Design', 'amount': 800.00, 'category': 'Freelance', 'date': '2023-10-19', 'type': 'income', 'is_ai_generated': False},
        {'id': '5', 'description': 'Cinema com amigos', 'amount': 120.00, 'category': 'Lazer', 'date': '2023-10-20', 'type': 'expense', 'is_ai_generated': False},
    ],
    'goals': [
        {'id': '1', 'title': 'iPhone 15', 'target_amount': 5000, 'current_amount': 3250, 'deadline': '25/12/2024', 'icon': 'phone', 'color': 'bg-indigo-500'},
        {'id': '2', 'title': 'Viagem Europa', 'target_amount': 15000, 'current_amount': 2100, 'deadline': '10/07/2025', 'icon': 'plane', 'color': 'bg-sky-500'},
        {'id': '3', 'title': 'Reserva de Emergência', 'target_amount': 10000, 'current_amount': 8500, 'deadline': 'Indefinido', 'icon': 'shield', 'color': 'bg-emerald-500'},
    ],
    'challenges': [
        {'id': '1', 'title': 'Delivery Detox', 'description': 'Gaste R$100 a menos em delivery esta semana', 'progress': 80, 'target': 'R$ 100 economizados', 'is_completed': False, 'reward': '+50 pts'},
        {'id': '2', 'title': 'Mestre da Poupança', 'description': 'Economize 5% a mais que a semana passada', 'progress': 100, 'target': '5%', 'is_completed': True, 'reward': '+100 pts'},
        {'id': '3', 'title': 'Sem Café na Rua', 'description': 'Evite pequenas compras de café por 3 dias', 'progress': 100, 'target': '3 dias', 'is_completed': True, 'reward': '+30 pts'},
    ],
    'split_groups': [
        {'id': '1', 'name': 'Viagem Florianópolis', 'total_owed_to_you': 450.00, 'total_you_owe': 0, 'members': ['Alice', 'Bob', 'Você']},
        {'id': '2', 'name': 'Churrasco Domingo', 'total_owed_to_you': 0, 'total_you_owe': 120.50, 'members': ['Carlos', 'Diana', 'Edu', 'Você']},
        {'id': '3', 'name': 'Apartamento 302', 'total_owed_to_you': 1200.00, 'total_you_owe': 50.00, 'members': ['Felipe', 'Você']},
    ],
}

MIN_PHONE_LENGTH = 9


class StorageError(Exception):
    """A stored blob could not be decoded."""


class GoalNotFound(LookupError):
    pass


class ChallengeNotFound(LookupError):
    pass


@dataclass
class AuthResult:
    success: bool
    message: str
    user: Optional[User] = None


def new_id():
    return uuid.uuid4().hex


class StorageService:
    """Entity collections and session slot for a single namespace."""

    def __init__(self, store, namespace):
        self.store = store
        self.namespace = namespace

    # -- blob helpers --------------------------------------------------

    def _load(self, key, seed):
        stored = self.store.get_item(self.namespace, key)
        if not stored:
            self.store.set_item(self.namespace, key, json.dumps(seed, ensure_ascii=False))
            return seed
        try:
            return json.loads(stored)
        except ValueError as exc:
            raise StorageError(f"Corrupted value under '{key}'") from exc

    def _read(self, key, model, seed):
        raw = self._load(key, seed)
        try:
            return [model.model_validate(item) for item in raw]
        except (ValidationError, TypeError) as exc:
            raise StorageError(f"Invalid records under '{key}'") from exc

    def _write(self, key, items):
        payload = [item.model_dump(mode='json') for item in items]
        self.store.set_item(self.namespace, key, json.dumps(payload, ensure_ascii=False))
        return items

    def _set_session(self, user):
        self.store.set_item(
            self.namespace, KEYS['CURRENT_USER'],
            json.dumps(user.model_dump(mode='json'), ensure_ascii=False)
        )

    # -- users and session ---------------------------------------------

    def get_users(self) -> List[User]:
        return self._read(KEYS['USERS'], User, [])

    def register_user(self, name, email, password, cpf, birth_date) -> AuthResult:
        users = self.get_users()

        if any(u.email == email for u in users):
            return AuthResult(False, 'Este e-mail já está cadastrado.')

        if any(u.cpf == cpf for u in users):
            return AuthResult(False, 'Este CPF já está cadastrado.')

        user = User(
            id=new_id(),
            name=name,
            email=email,
            password=generate_password_hash(password),
            cpf=cpf,
            birth_date=birth_date,
        )
        self._write(KEYS['USERS'], users + [user])

        # new accounts start logged in
        self._set_session(user)
        logger.info("Registered user %s in namespace %s", user.id, self.namespace)

        return AuthResult(True, 'Conta criada com sucesso!', user)

    def login_user(self, email, password) -> AuthResult:
        user = next(
            (u for u in self.get_users() if u.email == email and check_password_hash(u.password, password)),
            None
        )
        if user:
            self._set_session(user)
            logger.info("User %s logged in", user.id)
            return AuthResult(True, 'Login realizado com sucesso!', user)

        return AuthResult(False, 'E-mail ou senha incorretos.')

    def recover_password(self, identifier) -> AuthResult:
        """Simulated recovery; no email or SMS is actually sent."""
        if any(u.email == identifier for u in self.get_users()):
            return AuthResult(True, f'Um link de recuperação foi enviado para {identifier}.')

        looks_like_phone = bool(re.sub(r'\D', '', identifier))
        if looks_like_phone and len(identifier) >= MIN_PHONE_LENGTH:
            return AuthResult(True, f'Um SMS de recuperação foi enviado para {identifier}.')

        return AuthResult(False, 'Usuário não encontrado.')

    def logout_user(self):
        self.store.remove_item(self.namespace, KEYS['CURRENT_USER'])
        logger.info("Session cleared in namespace %s", self.namespace)

    def get_current_user(self) -> Optional[User]:
        stored = self.store.get_item(self.namespace, KEYS['CURRENT_USER'])
        if not stored:
            return None
        try:
            return User.model_validate_json(stored)
        except ValidationError as exc:
            raise StorageError("Corrupted session") from exc

    # -- transactions ------------------------------------------------------

    def get_transactions(self) -> List[Transaction]:
        return self._read(KEYS['TRANSACTIONS'], Transaction, SEED_DATA['transactions'])

    def add_transaction(self, transaction: Transaction) -> List[Transaction]:
        return self._write(KEYS['TRANSACTIONS'], self.get_transactions() + [transaction])

    # -- goals -------------------------------------------------------------

    def get_goals(self) -> List[Goal]:
        return self._read(KEYS['GOALS'], Goal, SEED_DATA['goals'])

    def add_goal(self, goal: Goal) -> List[Goal]:
        return self._write(KEYS['GOALS'], self.get_goals() + [goal])

    def update_goal(self, updated: Goal) -> List[Goal]:
        goals = [updated if g.id == updated.id else g for g in self.get_goals()]
        return self._write(KEYS['GOALS'], goals)

    def deposit_to_goal(self, goal_id, amount):
        """
        Add ``amount`` to a goal, capped at its target.

        Returns the updated goal and whether this deposit is the one that
        made it reach the target.
        """
        if amount <= 0:
            raise ValueError("Deposit must be positive")

        goal = next((g for g in self.get_goals() if g.id == goal_id), None)
        if goal is None:
            raise GoalNotFound(goal_id)

        new_amount = min(goal.current_amount + amount, goal.target_amount)
        updated = goal.model_copy(update={'current_amount': new_amount})
        self.update_goal(updated)

        reached = new_amount == goal.target_amount and goal.current_amount != goal.target_amount
        return updated, reached

    # -- challenges --------------------------------------------------------

    def get_challenges(self) -> List[Challenge]:
        return self._read(KEYS['CHALLENGES'], Challenge, SEED_DATA['challenges'])

    def update_challenge(self, updated: Challenge) -> List[Challenge]:
        challenges = [updated if c.id == updated.id else c for c in self.get_challenges()]
        return self._write(KEYS['CHALLENGES'], challenges)

    def set_challenge_progress(self, challenge_id, progress) -> Challenge:
        challenge = next((c for c in self.get_challenges() if c.id == challenge_id), None)
        if challenge is None:
            raise ChallengeNotFound(challenge_id)

        progress = max(min(int(progress), 100), 0)
        updated = challenge.model_copy(update={'progress': progress, 'is_completed': progress == 100})
        self.update_challenge(updated)
        return updated

    # -- split groups ------------------------------------------------------

    def get_split_groups(self) -> List[SplitGroup]:
        return self._read(KEYS['SPLIT_GROUPS'], SplitGroup, SEED_DATA['split_groups'])

    # -- reset -------------------------------------------------------------

    def clear_all(self):
        self.store.clear(self.namespace)
        logger.info("Cleared all data in namespace %s", self.namespace)

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

TransactionType = Literal['income', 'expense']
GoalIcon = Literal['phone', 'plane', 'shield', 'car', 'home', 'star']

EXPENSE_CATEGORIES = ['Alimentação', 'Transporte', 'Moradia', 'Lazer', 'Saúde', 'Outros']
INCOME_CATEGORIES = ['Salário', 'Freelance', 'Investimentos', 'Presente', 'Outros']
GOAL_ICONS = ['phone', 'plane', 'shield', 'car', 'home', 'star']


class User(BaseModel):
    id: str
    name: str
    email: str
    password: str  # werkzeug hash, never the raw password
    cpf: str
    birth_date: str


class Transaction(BaseModel):
    id: str
    description: str
    amount: float
    category: str
    date: str
    type: TransactionType
    is_ai_generated: bool = False


class Goal(BaseModel):
    id: str
    title: str
    target_amount: float
    current_amount: float = 0
    deadline: str = 'Indefinido'
    icon: GoalIcon = 'star'
    color: str = 'bg-indigo-500'

    @property
    def percent(self):
        if self.target_amount <= 0:
            return 100
        return min(round(self.current_amount / self.target_amount * 100), 100)

    @property
    def is_complete(self):
        return self.percent == 100


class Challenge(BaseModel):
    id: str
    title: str
    description: str
    progress: int = Field(0, ge=0, le=100)
    target: str
    is_completed: bool = False
    reward: str


class SplitGroup(BaseModel):
    id: str
    name: str
    total_owed_to_you: float = 0
    total_you_owe: float = 0
    members: List[str] = []

    @property
    def is_settled(self):
        return self.total_owed_to_you == 0 and self.total_you_owe == 0


# Structured outputs requested from the language model

class ParsedTransaction(BaseModel):
    amount: float = Field(description="O valor numérico")
    description: str = Field(description="Descrição curta")
    category: str = Field(description="Categoria da transação")
    date: Optional[str] = Field(None, description="Data no formato YYYY-MM-DD")
    type: TransactionType


class ForecastAlert(BaseModel):
    title: str
    message: str
    severity: Literal['warning', 'critical', 'info']


class AiForecast(BaseModel):
    predicted_total_next_month: float
    risk_level: Literal['Baixo', 'Médio', 'Alto']
    alerts: List[ForecastAlert] = []
    suggestions: List[str] = []


class ChatWidget(BaseModel):
    type: Literal['stat', 'alert', 'saving_tip']
    title: str
    value: Optional[str] = None
    description: str
    color: Optional[Literal['emerald', 'red', 'blue', 'amber']] = None


class ChatReply(BaseModel):
    text: str
    widget: Optional[ChatWidget] = None


# Chart series

class CategoryData(BaseModel):
    name: str
    value: float
    color: str


class MonthlyData(BaseModel):
    name: str
    income: float = 0
    expense: float = 0

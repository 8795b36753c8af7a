"""
Thin client over the Gemini API.

Every call is synchronous and never raises to the caller: failures are
logged and replaced by a fixed fallback so the views can always render.
"""

import logging
from datetime import date

from google import genai
from google.genai import types

from models import EXPENSE_CATEGORIES, INCOME_CATEGORIES, AiForecast, ChatReply, ParsedTransaction

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

ADVICE_EMPTY_FALLBACK = "Mantenha o foco nos seus objetivos financeiros!"
ADVICE_ERROR_FALLBACK = "Gerenciar bem suas receitas e despesas é a chave para o sucesso."
CHAT_EMPTY_FALLBACK = "Desculpe, não consegui analisar seus dados agora."
CHAT_ERROR_FALLBACK = "Ocorreu um erro ao conectar com o assistente."

PARSE_PROMPT = """Extraia uma transação financeira do texto abaixo, escrito em português.
Classifique como "expense" (gasto, compra, pagamento) ou "income" (salário, venda, recebimento).
Sem data explícita, use {today}. Datas sempre em YYYY-MM-DD.
Categorias de despesa: {expense_categories}.
Categorias de receita: {income_categories}.

Texto: "{text}"
"""

ADVICE_PROMPT = """Você é um consultor financeiro. Com base no contexto abaixo,
escreva uma dica motivadora de no máximo duas frases, em português.

Contexto: {summary}
"""

FORECAST_PROMPT = """Analise o histórico de despesas abaixo e preveja o gasto total do próximo mês.
Aponte riscos de orçamento como alertas e dê três sugestões práticas de economia.

Despesas:
{history}
"""

CHAT_PROMPT = """Você é o assistente financeiro do app Cash Hub. Hoje é {today}.
Responda de forma direta e amigável, considerando receitas e despesas.
Se a resposta tiver um número importante, um alerta ou uma dica, preencha "widget".
Para "quanto posso guardar", use total de receitas menos total de despesas.

Transações:
{history}

Pergunta: "{message}"
"""

def format_expense_lines(transactions):
    return "\n".join(
        f"{t.date}: {t.description} - R${t.amount} ({t.category})"
        for t in transactions if t.type == 'expense'
    )


def format_transaction_lines(transactions):
    return "\n".join(
        f"[{t.date}] {'(RECEITA)' if t.type == 'income' else '(DESPESA)'} "
        f"{t.description}: R$ {t.amount} ({t.category})"
        for t in transactions
    )


class GeminiService:
    def __init__(self, api_key=None, model=DEFAULT_MODEL):
        self.api_key = api_key
        self.model = model
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _generate_structured(self, prompt, schema):
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        if isinstance(response.parsed, schema):
            return response.parsed
        if not response.text:
            return None
        return schema.model_validate_json(response.text)

    def parse_transaction_natural_language(self, text, today=None):
        """Turn free text like "gastei 20 no almoço" into a ParsedTransaction, or None.

        A missing or blank date becomes ``today``.
        """
        today = (today or date.today()).isoformat()
        prompt = PARSE_PROMPT.format(
            today=today,
            expense_categories=", ".join(EXPENSE_CATEGORIES),
            income_categories=", ".join(INCOME_CATEGORIES),
            text=text,
        )
        try:
            parsed = self._generate_structured(prompt, ParsedTransaction)
        except ValueError:
            logger.exception("Gemini returned an unusable transaction for %r", text)
            return None
        except Exception:
            logger.exception("Gemini transaction parsing failed")
            return None
        if parsed is not None and not (parsed.date or "").strip():
            parsed = parsed.model_copy(update={"date": today})
        return parsed

    def get_financial_advice(self, summary):
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=ADVICE_PROMPT.format(summary=summary),
            )
        except Exception:
            logger.exception("Gemini advice request failed")
            return ADVICE_ERROR_FALLBACK
        return (response.text or "").strip() or ADVICE_EMPTY_FALLBACK

    def generate_financial_forecast(self, transactions):
        prompt = FORECAST_PROMPT.format(history=format_expense_lines(transactions))
        try:
            return self._generate_structured(prompt, AiForecast)
        except Exception:
            logger.exception("Gemini forecast request failed")
        return None

    def send_chat_message(self, message, transactions, today=None):
        prompt = CHAT_PROMPT.format(
            today=(today or date.today()).isoformat(),
            history=format_transaction_lines(transactions),
            message=message,
        )
        try:
            reply = self._generate_structured(prompt, ChatReply)
        except Exception:
            logger.exception("Gemini chat request failed")
            return ChatReply(text=CHAT_ERROR_FALLBACK)
        return reply or ChatReply(text=CHAT_EMPTY_FALLBACK)

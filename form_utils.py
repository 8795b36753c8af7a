import math
import re

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

def parse_amount(value):
    """Positive float from a form field, or None."""
    try:
        amount = float(str(value).replace(',', '.'))
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return round(amount, 2)

def normalize_cpf(value):
    """Strip punctuation; None unless exactly 11 digits remain."""
    digits = re.sub(r'\D', '', value or '')
    return digits if len(digits) == 11 else None

def is_valid_email(value):
    return bool(EMAIL_RE.match(value or ''))

def format_brl(value):
    """1234.5 -> 'R$ 1.234,50'"""
    try:
        formatted = f"{float(value):,.2f}"
    except (ValueError, TypeError):
        return value
    return "R$ " + formatted.replace(',', '_').replace('.', ',').replace('_', '.')

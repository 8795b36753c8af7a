from datetime import datetime

from models import CategoryData, MonthlyData

COLORS = ['#10b981', '#3b82f6', '#f59e0b', '#8b5cf6', '#ef4444', '#64748b']
MONTH_LABELS = ['Jan', 'Fev', 'Mar', 'Abr', 'Mai', 'Jun', 'Jul', 'Ago', 'Set', 'Out', 'Nov', 'Dez']


def summarize(transactions):
    total_income = sum(t.amount for t in transactions if t.type == 'income')
    total_expense = sum(t.amount for t in transactions if t.type == 'expense')
    return {
        'total_income': total_income,
        'total_expense': total_expense,
        'balance': total_income - total_expense,
    }


def category_breakdown(transactions):
    """Expense totals per category, in the order categories first appear."""
    totals = {}
    for t in transactions:
        if t.type != 'expense':
            continue
        totals[t.category] = totals.get(t.category, 0) + t.amount

    return [
        CategoryData(name=name, value=round(value, 2), color=COLORS[index % len(COLORS)])
        for index, (name, value) in enumerate(totals.items())
    ]


def monthly_totals(transactions, months=6):
    """Income and expense per calendar month for the latest ``months`` months with data."""
    buckets = {}
    for t in transactions:
        try:
            day = datetime.strptime(t.date, '%Y-%m-%d')
        except (TypeError, ValueError):
            continue
        bucket = buckets.setdefault((day.year, day.month), {'income': 0, 'expense': 0})
        bucket[t.type] += t.amount

    latest = sorted(buckets)[-months:] if months > 0 else []
    return [
        MonthlyData(
            name=MONTH_LABELS[month - 1],
            income=round(buckets[(year, month)]['income'], 2),
            expense=round(buckets[(year, month)]['expense'], 2),
        )
        for year, month in latest
    ]

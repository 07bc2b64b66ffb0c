# expense_tracker/summary.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List

from expense_tracker.core.models import Expense, InvalidExpenseError


@dataclass
class Summary:
    count: int
    total: Decimal
    month: int | None = None
    year: int | None = None


def filter_expenses_by_month(expenses: Iterable[Expense], month: int, year: int) -> List[Expense]:
    """
    Return only those expenses whose date falls in the given month of *year*.
    """
    return [e for e in expenses if e.date.year == year and e.date.month == month]


def summarize(
    expenses: Iterable[Expense],
    month: int | None = None,
    today: date | None = None,
) -> Summary:
    """Count and total the expenses, optionally for one month of the current year.

    The year is always taken from *today* (defaulting to the real current
    date), never from the expenses themselves.
    """
    if month is None:
        selected = list(expenses)
        year = None
    else:
        if not 1 <= month <= 12:
            raise InvalidExpenseError(
                "Invalid month. Please provide a number between 1 and 12."
            )
        year = (today or date.today()).year
        selected = filter_expenses_by_month(expenses, month, year)
    total = sum((e.amount for e in selected), Decimal("0"))
    return Summary(count=len(selected), total=total, month=month, year=year)


def totals_by_category(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = {}
    for e in expenses:
        totals[e.category] = totals.get(e.category, Decimal("0")) + e.amount
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))

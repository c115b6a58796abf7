from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from app.db.memory import MemoryStore
from app.models.common import EntryType
from app.models.transaction import Transaction

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass
class MonthlyTotal:
    """Expenses for one calendar month."""

    month: str
    amount: Decimal


@dataclass
class CategoryTotal:
    category_id: int
    amount: Decimal


@dataclass
class Summary:
    total_expenses: Decimal
    total_income: Decimal
    balance: Decimal
    budget_used: float


def _sum(transactions: Iterable[Transaction], entry_type: EntryType) -> Decimal:
    return sum((t.amount for t in transactions if t.type == entry_type), ZERO)


def _shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


class FinanceAnalyzer:
    """
    Read-only analytics over the transaction store.

    Every call rescans the full transaction set; nothing is cached between
    calls, so results always reflect the latest writes.
    """

    def __init__(self, store: MemoryStore, monthly_budget: Decimal = Decimal("3000")) -> None:
        self._store = store
        self._monthly_budget = Decimal(monthly_budget)

    def monthly_expenses(self, months: int = 6, today: Optional[date] = None) -> List[MonthlyTotal]:
        """
        Expense totals for the last `months` calendar months, oldest first,
        ending with the current month. Transactions are bucketed by their
        year and month, not by a rolling window.
        """
        if months <= 0:
            return []

        today = today or date.today()
        _, transactions = self._store.snapshot()

        totals: Dict[Tuple[int, int], Decimal] = {}
        for t in transactions:
            if t.type == EntryType.EXPENSE:
                key = (t.date.year, t.date.month)
                totals[key] = totals.get(key, ZERO) + t.amount

        result = []
        for offset in range(-(months - 1), 1):
            year, month = _shift_month(today.year, today.month, offset)
            result.append(
                MonthlyTotal(month=calendar.month_abbr[month], amount=totals.get((year, month), ZERO))
            )
        return result

    def category_expenses(self) -> List[CategoryTotal]:
        """
        Expense total per expense-type category, in store order. Categories
        without transactions report zero; income categories are left out even
        when an expense transaction points at one.
        """
        categories, transactions = self._store.snapshot()

        totals: Dict[int, Decimal] = {
            c.id: ZERO for c in categories if c.type == EntryType.EXPENSE
        }
        for t in transactions:
            if t.type == EntryType.EXPENSE and t.category_id in totals:
                totals[t.category_id] += t.amount

        return [CategoryTotal(category_id=cid, amount=amount) for cid, amount in totals.items()]

    def budget_used(self, total_expenses: Decimal) -> float:
        # Percentage of the budget ceiling, capped at 100
        if self._monthly_budget <= 0:
            return 100.0 if total_expenses > 0 else 0.0
        used = total_expenses / self._monthly_budget * HUNDRED
        return float(min(used, HUNDRED))

    def summary(self) -> Summary:
        _, transactions = self._store.snapshot()

        total_expenses = _sum(transactions, EntryType.EXPENSE)
        total_income = _sum(transactions, EntryType.INCOME)

        return Summary(
            total_expenses=total_expenses,
            total_income=total_income,
            balance=total_income - total_expenses,
            budget_used=self.budget_used(total_expenses),
        )

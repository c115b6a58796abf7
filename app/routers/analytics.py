"""
Analytics Router
Chart and summary-card data computed from the current transactions
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.config import Settings
from app.db.memory import MemoryStore
from app.deps import get_analyzer, get_settings, get_store
from app.models.analytics import CategoryExpense, MonthlyExpense, SummaryOut
from app.utils.analyzer import FinanceAnalyzer

router = APIRouter()

# Ten years of monthly buckets
MAX_MONTHS = 120


@router.get("/monthly", response_model=List[MonthlyExpense])
def monthly_expenses(
    months: Optional[int] = Query(default=None, le=MAX_MONTHS),
    analyzer: FinanceAnalyzer = Depends(get_analyzer),
    app_settings: Settings = Depends(get_settings),
):
    """
    Expense totals for the last `months` calendar months (oldest first).
    Defaults to DEFAULT_MONTHS, capped at MAX_MONTHS; zero or negative gives
    an empty list.
    """
    if months is None:
        months = app_settings.DEFAULT_MONTHS
    return [
        MonthlyExpense(month=item.month, amount=item.amount)
        for item in analyzer.monthly_expenses(months)
    ]


@router.get("/categories", response_model=List[CategoryExpense])
def category_expenses(
    analyzer: FinanceAnalyzer = Depends(get_analyzer),
    store: MemoryStore = Depends(get_store),
):
    """Expense totals per expense category, joined with the category record."""
    categories = {c.id: c for c in store.get_all_categories()}
    return [
        CategoryExpense(
            category_id=item.category_id,
            amount=item.amount,
            category=categories.get(item.category_id),
        )
        for item in analyzer.category_expenses()
    ]


@router.get("/summary", response_model=SummaryOut)
def summary(analyzer: FinanceAnalyzer = Depends(get_analyzer)):
    result = analyzer.summary()
    return SummaryOut(
        total_expenses=result.total_expenses,
        total_income=result.total_income,
        balance=result.balance,
        budget_used=result.budget_used,
    )

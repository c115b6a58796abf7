from decimal import Decimal
from typing import Annotated, Optional

from pydantic import PlainSerializer

from app.models.category import Category
from app.models.common import CamelModel

# Exact Decimal internally, plain JSON number for the charts
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class MonthlyExpense(CamelModel):
    month: str
    amount: Money


class CategoryExpense(CamelModel):
    category_id: int
    amount: Money
    category: Optional[Category] = None


class SummaryOut(CamelModel):
    total_expenses: Money
    total_income: Money
    balance: Money
    budget_used: float

from datetime import date
from decimal import Decimal

import pytest

from app.db.memory import MemoryStore
from app.models.transaction import TransactionCreate
from app.utils.analyzer import FinanceAnalyzer

TODAY = date(2025, 11, 15)

sample_transactions = [
    {"type": "expense", "amount": 250.0, "date": "2025-11-01T12:00:00Z", "description": "Market", "categoryId": 1},
    {"type": "expense", "amount": 1000.0, "date": "2025-11-02", "description": "Rent", "categoryId": 2},
    {"type": "expense", "amount": 150.0, "date": "2025-10-03", "description": "Dinner", "categoryId": 1},
    {"type": "expense", "amount": 80.5, "date": "2025-07-20", "description": "Train", "categoryId": 3},
    {"type": "expense", "amount": 60.0, "date": "2024-11-20", "description": "Last year", "categoryId": 4},
    {"type": "income", "amount": 2500.0, "date": "2025-11-01", "description": "Salary", "categoryId": 6},
]


def add(store, **fields):
    data = {"type": "expense", "amount": 10.0, "date": "2025-11-05", "description": "Item"}
    data.update(fields)
    return store.create_transaction(TransactionCreate(**data))


@pytest.fixture
def loaded_store():
    store = MemoryStore()
    for item in sample_transactions:
        store.create_transaction(TransactionCreate(**item))
    return store


def test_empty_summary(analyzer):
    result = analyzer.summary()
    assert result.total_expenses == 0
    assert result.total_income == 0
    assert result.balance == 0
    assert result.budget_used == 0


def test_summary_totals(loaded_store):
    result = FinanceAnalyzer(loaded_store).summary()
    assert result.total_expenses == Decimal("1540.50")
    assert result.total_income == Decimal("2500.00")
    assert result.balance == Decimal("959.50")
    assert result.budget_used == pytest.approx(1540.5 / 30)


def test_negative_balance(store, analyzer):
    add(store, amount=100.0)
    add(store, type="income", amount=40.0)
    assert analyzer.summary().balance == Decimal("-60.00")


@pytest.mark.parametrize("amounts, expected", [
    ([1500.0], 50.0),
    ([1000.0, 2000.0], 100.0),
    ([2999.99, 0.02], 100.0),
    ([5000.0], 100.0),
])
def test_budget_used(store, analyzer, amounts, expected):
    for amount in amounts:
        add(store, amount=amount)
    assert analyzer.summary().budget_used == pytest.approx(expected)


def test_budget_used_custom_ceiling(store):
    add(store, amount=250.0)
    assert FinanceAnalyzer(store, monthly_budget=Decimal("1000")).summary().budget_used == pytest.approx(25.0)


def test_amounts_sum_without_float_drift(store, analyzer):
    for _ in range(10):
        add(store, amount=0.1)
    assert analyzer.summary().total_expenses == Decimal("1.00")


def test_monthly_expenses_window(loaded_store):
    result = FinanceAnalyzer(loaded_store).monthly_expenses(6, today=TODAY)
    assert [item.month for item in result] == ["Jun", "Jul", "Aug", "Sep", "Oct", "Nov"]
    assert [item.amount for item in result] == [
        Decimal("0"), Decimal("80.50"), Decimal("0"), Decimal("0"), Decimal("150.00"), Decimal("1250.00"),
    ]


def test_monthly_expenses_three_months_sum(loaded_store):
    result = FinanceAnalyzer(loaded_store).monthly_expenses(3, today=TODAY)
    assert len(result) == 3
    assert [item.month for item in result] == ["Sep", "Oct", "Nov"]
    assert sum(item.amount for item in result) == Decimal("1400.00")


def test_monthly_expenses_matches_year(loaded_store):
    # November 2024 must not leak into November 2025
    result = FinanceAnalyzer(loaded_store).monthly_expenses(1, today=TODAY)
    assert result[0].amount == Decimal("1250.00")


def test_monthly_expenses_across_year_boundary(store, analyzer):
    add(store, amount=20.0, date="2024-12-31")
    add(store, amount=30.0, date="2025-01-01")
    result = analyzer.monthly_expenses(3, today=date(2025, 2, 28))
    assert [(item.month, item.amount) for item in result] == [
        ("Dec", Decimal("20.00")), ("Jan", Decimal("30.00")), ("Feb", Decimal("0")),
    ]


def test_monthly_expenses_end_of_month(store, analyzer):
    # Stepping back from the 31st must land on each calendar month exactly once
    result = analyzer.monthly_expenses(4, today=date(2025, 3, 31))
    assert [item.month for item in result] == ["Dec", "Jan", "Feb", "Mar"]


@pytest.mark.parametrize("months", [0, -3])
def test_monthly_expenses_non_positive(analyzer, months):
    assert analyzer.monthly_expenses(months) == []


def test_monthly_expenses_default_window(analyzer):
    assert len(analyzer.monthly_expenses()) == 6


def test_category_expenses(loaded_store):
    result = FinanceAnalyzer(loaded_store).category_expenses()
    totals = {item.category_id: item.amount for item in result}
    assert totals == {
        1: Decimal("400.00"),
        2: Decimal("1000.00"),
        3: Decimal("80.50"),
        4: Decimal("60.00"),
        5: Decimal("0"),
    }


def test_category_expenses_excludes_income_and_dangling(store, analyzer):
    add(store, amount=99.0, categoryId=6)
    add(store, amount=99.0, categoryId=42)
    add(store, amount=99.0, categoryId=None)
    result = analyzer.category_expenses()
    assert [item.category_id for item in result] == [1, 2, 3, 4, 5]
    assert all(item.amount == 0 for item in result)


def test_category_expenses_ignores_income_transactions(store, analyzer):
    add(store, type="income", amount=500.0, categoryId=1)
    assert analyzer.category_expenses()[0].amount == 0


def test_single_expense_example(store, analyzer):
    today = date.today()
    food = next(c for c in store.get_all_categories() if c.name == "Food")
    add(store, amount=45.0, categoryId=food.id, date=today.isoformat())

    assert analyzer.summary().total_expenses == Decimal("45.00")

    totals = {item.category_id: item.amount for item in analyzer.category_expenses()}
    assert totals[food.id] == Decimal("45.00")
    assert all(amount == 0 for cid, amount in totals.items() if cid != food.id)

    monthly = analyzer.monthly_expenses(1)
    assert len(monthly) == 1
    assert monthly[0].amount == Decimal("45.00")

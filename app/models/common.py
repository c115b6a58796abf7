from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

CENTS = Decimal("0.01")
# numeric(10, 2): at most 8 integer digits
MAX_AMOUNT = Decimal("99999999.99")


class EntryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredModel(CamelModel):
    """Records held by the store are immutable; updates replace them."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def reject_nulls(data, fields):
    """Partial updates may omit these fields but never set them to null."""
    if isinstance(data, dict):
        for name in fields:
            if name in data and data[name] is None:
                raise ValueError(f"{name} may not be null")
    return data


def to_cents(value) -> Decimal:
    """
    Convert a JSON number to an exact two-decimal Decimal.
    Floats go through str() so 0.1 stays 0.1 rather than its binary expansion.
    """
    if isinstance(value, (bool, str)):
        raise ValueError("amount must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError("amount must be a number")
    if not amount.is_finite():
        raise ValueError("amount must be a finite number")
    try:
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"amount must not exceed {MAX_AMOUNT}")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"amount must not exceed {MAX_AMOUNT}")
    return amount

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.models.category import Category
from app.models.common import CamelModel, EntryType, StoredModel, reject_nulls, to_cents

# Fields an update may omit but never set to null
NON_NULLABLE_FIELDS = ("type", "amount", "date", "description")


def parse_date(value) -> datetime:
    """Accept ISO 8601 strings ("2025-11-01", "2025-11-01T12:00:00Z")."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("date must be a non-empty string")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"invalid date: {value!r}")


class TransactionCreate(CamelModel):
    type: EntryType
    amount: Decimal = Field(gt=0)
    date: datetime
    description: str = Field(min_length=1)
    category_id: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_to_cents(cls, value):
        return to_cents(value)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return parse_date(value)


class TransactionUpdate(CamelModel):
    type: Optional[EntryType] = None
    amount: Optional[Decimal] = Field(default=None, gt=0)
    date: Optional[datetime] = None
    description: Optional[str] = Field(default=None, min_length=1)
    category_id: Optional[int] = None
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data):
        return reject_nulls(data, NON_NULLABLE_FIELDS)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_to_cents(cls, value):
        return None if value is None else to_cents(value)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return None if value is None else parse_date(value)

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class Transaction(StoredModel):
    id: int
    amount: Decimal
    date: datetime
    description: str
    type: EntryType
    category_id: Optional[int] = None
    notes: Optional[str] = None


class TransactionWithCategory(Transaction):
    category: Optional[Category] = None

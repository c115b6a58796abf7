from typing import Optional

from pydantic import Field, model_validator

from app.models.common import CamelModel, EntryType, StoredModel, reject_nulls


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    color: str = Field(min_length=1)
    type: EntryType


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = Field(default=None, min_length=1)
    type: Optional[EntryType] = None

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data):
        return reject_nulls(data, ("name", "color", "type"))


class Category(StoredModel):
    id: int
    name: str
    color: str
    type: EntryType

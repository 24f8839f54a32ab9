from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import model_validator
from pydantic_core import PydanticCustomError


class ExpenseCreateIn(BaseModel):
    """Create payload.

    Only typing/coercion happens here; range and enumeration rules are enforced
    by the store so that every violated field is reported together.
    """

    amount: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def amount_and_category_required(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not data.get("amount") or not data.get(
            "category"
        ):
            raise PydanticCustomError(
                "required_fields", "Amount and category are required"
            )
        return data


class ExpenseUpdateIn(BaseModel):
    """Partial update model.

    All fields optional. Which fields get applied is decided by
    `model_fields_set` (keys present in the request body), so an explicit
    ``amount: 0`` or ``description: ""`` is an update, not an omission.
    """

    amount: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class ExpenseOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    amount: float
    category: str
    description: str = ""
    date: datetime
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class ExpenseDeletedOut(BaseModel):
    message: str
    expense: ExpenseOut

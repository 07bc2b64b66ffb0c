# expense_tracker/core/models.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation

DEFAULT_CATEGORY = "Uncategorized"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"
ID_LENGTH = 8


class InvalidExpenseError(ValueError):
    """Raised when an expense field fails validation."""


def new_expense_id() -> str:
    return str(uuid.uuid4())[:ID_LENGTH]


def validate_amount(value) -> Decimal:
    """Coerce *value* to a Decimal and require it to be strictly positive."""
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidExpenseError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite() or amount <= 0:
        raise InvalidExpenseError("Amount must be positive.")
    return amount


def validate_description(value) -> str:
    if value is None or not str(value).strip():
        raise InvalidExpenseError("Description must not be empty.")
    return str(value)


def parse_date(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unrecognized date: {value!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return datetime.fromisoformat(value)


@dataclass
class Expense:
    id: str
    description: str
    amount: Decimal
    category: str = DEFAULT_CATEGORY
    date: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "amount": str(self.amount),
            "date": self.date.strftime(DATE_FORMAT),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        if not isinstance(data, dict):
            raise ValueError(f"Expense entry must be an object, got: {data!r}")
        missing = [k for k in ("id", "description", "amount", "date") if k not in data]
        if missing:
            raise ValueError(f"Missing {', '.join(missing)} in expense entry: {data}")
        amount = data["amount"]
        try:
            amount = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
        except InvalidOperation as exc:
            raise ValueError(f"Invalid amount in expense entry: {data}") from exc
        return cls(
            id=str(data["id"]),
            description=str(data["description"]),
            amount=amount,
            category=data.get("category") or DEFAULT_CATEGORY,
            date=parse_date(data["date"]),
        )

"""JSON-file backed collection of expense records.

The whole collection is held in memory and the document is rewritten after
every successful mutation. Loading is fail-soft: a missing, unreadable or
corrupt document yields an empty ledger.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import List

from expense_tracker.core.models import (
    DEFAULT_CATEGORY,
    Expense,
    new_expense_id,
    validate_amount,
    validate_description,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "expenses.json"


def _category_or_default(category) -> str:
    if category is None or not str(category).strip():
        return DEFAULT_CATEGORY
    return str(category)


class ExpenseStore:
    def __init__(self, path: str | os.PathLike = DEFAULT_DATA_FILE):
        self.path = Path(path)
        self.last_save_error: OSError | None = None
        self._expenses: List[Expense] = self._load()

    def _load(self) -> List[Expense]:
        if not self.path.exists():
            logger.debug("No expense file at %s; starting empty", self.path)
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fp:
                raw = fp.read()
            if not raw.strip():
                return []
            data = json.loads(raw, parse_float=Decimal)
            if data is None:
                return []
            if not isinstance(data, list):
                raise ValueError(f"expected a list of expenses, got {type(data).__name__}")
            expenses = [Expense.from_dict(entry) for entry in data]
        except (OSError, ValueError) as exc:
            logger.warning("Could not read expenses from %s (%s); starting empty", self.path, exc)
            return []
        logger.debug("Loaded %d expense(s) from %s", len(expenses), self.path)
        return expenses

    def save(self) -> bool:
        """Rewrite the document with the current collection.

        Returns ``False`` and records the error on ``last_save_error`` when the
        write fails; the in-memory collection is left as it is.
        """
        payload = json.dumps([e.to_dict() for e in self._expenses], indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                fp.write(payload)
                fp.write("\n")
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            self.last_save_error = exc
            logger.error("Could not save expenses to %s: %s", self.path, exc)
            return False
        self.last_save_error = None
        logger.debug("Saved %d expense(s) to %s", len(self._expenses), self.path)
        return True

    def _file_mode(self) -> int:
        # mkstemp creates 0600 files; keep the existing mode or use the umask default
        if self.path.exists():
            return stat.S_IMODE(self.path.stat().st_mode)
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def list(self) -> List[Expense]:
        return list(self._expenses)

    def get(self, expense_id: str) -> Expense | None:
        return next((e for e in self._expenses if e.id == expense_id), None)

    def add(self, description: str, amount, category: str | None = None) -> Expense:
        description = validate_description(description)
        amount = validate_amount(amount)
        expense = Expense(
            id=new_expense_id(),
            description=description,
            amount=amount,
            category=_category_or_default(category),
            date=datetime.now(),
        )
        self._expenses.append(expense)
        self.save()
        return expense

    def update(
        self,
        expense_id: str,
        description: str | None = None,
        amount=None,
        category: str | None = None,
    ) -> Expense | None:
        """Apply the supplied fields to the matching expense.

        Returns ``None`` when no expense has ``expense_id``.
        """
        if description is not None:
            description = validate_description(description)
        if amount is not None:
            amount = validate_amount(amount)

        expense = self.get(expense_id)
        if expense is None:
            return None
        if description is not None:
            expense.description = description
        if amount is not None:
            expense.amount = amount
        if category is not None:
            expense.category = _category_or_default(category)
        self.save()
        return expense

    def delete(self, expense_id: str) -> bool:
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                del self._expenses[idx]
                self.save()
                return True
        return False

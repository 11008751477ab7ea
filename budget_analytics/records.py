"""Record types exchanged with the persistence/API layer.

The API layer hands the engine plain sequences of records.  They may be
the dataclasses below or mappings decoded from JSON, including the field
names used by the backend (``expense_date``, ``income_date``,
``limit_amount``).  Nothing here mutates a caller's record.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from .config import get_config_value
from .normalize import as_float, parse_date

UNCATEGORIZED = get_config_value('labels', 'uncategorized', default='Uncategorized')

EXPENSE_DATE_FIELDS = ('expense_date', 'date')
INCOME_DATE_FIELDS = ('income_date', 'date')
BUDGET_LIMIT_FIELDS = ('limit_amount', 'limit')

# Mapping from category name to summed amount
CategoryTotals = Dict[str, Decimal]


@dataclass(frozen=True)
class ExpenseRecord:
    category: Optional[str]
    amount: Any
    date: Any = None
    description: str = ''


@dataclass(frozen=True)
class IncomeRecord:
    amount: Any
    date: Any
    source: str = ''


@dataclass(frozen=True)
class Budget:
    category: str
    limit_amount: Any


@dataclass(frozen=True)
class SavingsGoal:
    name: str
    target_amount: Any
    current_amount: Any = 0.0
    target_date: Any = None


@dataclass(frozen=True)
class BudgetStatus:
    percentage_used: float
    is_over_budget: bool
    remaining: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CadenceSuggestion:
    """Recommended daily spending ceiling until the next expected payday."""

    daily_limit: float
    cadence: str
    next_pay_date: date

    def as_dict(self) -> Dict[str, Any]:
        return {
            'daily_limit': self.daily_limit,
            'cadence': self.cadence,
            'next_pay_date': self.next_pay_date.isoformat(),
        }


def ensure_records(records: Any, name: str) -> Tuple[Any, ...]:
    """Snapshot a record sequence, failing fast on a non-sequence argument.

    Raises:
        TypeError: If ``records`` is ``None``, a string, a single mapping or
            not iterable at all.  That is an integration bug, not bad data.
    """
    if isinstance(records, pd.DataFrame):
        return tuple(records.to_dict('records'))
    if records is None or isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise TypeError(f"{name} must be an iterable of records, got {type(records).__name__}")
    return tuple(records)


def field(record: Any, *names: str, default: Any = None) -> Any:
    """Return the first non-null value among ``names`` on a record or mapping."""
    for name in names:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return default


def category_label(value: Any) -> str:
    """Return the bucket name for a category, ``Uncategorized`` when blank."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return UNCATEGORIZED
    text = str(value).strip()
    return text or UNCATEGORIZED


def expense_frame(expenses: Any) -> pd.DataFrame:
    """Build a Category/Amount/Date frame from expense records.

    Malformed amounts become 0.0 and unparseable dates become ``NaT``;
    no row is dropped.
    """
    rows = ensure_records(expenses, 'expenses')
    return pd.DataFrame({
        'Category': pd.Series([category_label(field(r, 'category')) for r in rows], dtype=object),
        'Amount': pd.Series([as_float(field(r, 'amount')) for r in rows], dtype=float),
        'Date': pd.Series([parse_date(field(r, *EXPENSE_DATE_FIELDS)) for r in rows], dtype='datetime64[ns]'),
    })


def income_frame(incomes: Any) -> pd.DataFrame:
    """Build an Amount/Date/Order frame from income records.

    ``Order`` keeps the caller's position so ties on a date resolve to the
    earliest supplied record.
    """
    rows = ensure_records(incomes, 'incomes')
    return pd.DataFrame({
        'Amount': pd.Series([as_float(field(r, 'amount')) for r in rows], dtype=float),
        'Date': pd.Series([parse_date(field(r, *INCOME_DATE_FIELDS)) for r in rows], dtype='datetime64[ns]'),
        'Order': pd.Series(range(len(rows)), dtype=int),
    })

"""Validation of user-entered amounts and dates.

Each validator returns an error message (or a dictionary of messages keyed
by field) instead of raising, so the API layer can hand the errors
straight back to a form.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import pandas as pd

from .config import get_number_value
from .normalize import normalize_amount, parse_date
from .records import EXPENSE_DATE_FIELDS, field

AMOUNT_MAX = get_number_value('validation', 'amount_max', default=1_000_000)
EXPENSE_AMOUNT_MAX = get_number_value('validation', 'expense_amount_max', default=100_000)
DATE_LOOKBACK_YEARS = get_number_value('validation', 'date_lookback_years', default=1, cast=int)


def _label(name: str) -> str:
    return name[:1].upper() + name[1:]


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return isinstance(value, float) and math.isnan(value)


def validate_amount(
    amount: Any,
    field_name: str = 'amount',
    minimum: float = 0,
    maximum: float = AMOUNT_MAX,
) -> Optional[str]:
    """Check an amount is present, numeric and within bounds.

    Example:
        >>> validate_amount('abc')
        'Amount must be a number'
        >>> validate_amount('0')
        'Amount must be greater than 0'
    """
    label = _label(field_name)
    if _blank(amount):
        return f"{label} is required"
    value = normalize_amount(amount)
    if value.is_nan():
        return f"{label} must be a number"
    if value <= minimum:
        return f"{label} must be greater than {minimum:g}"
    if value > maximum:
        return f"{label} seems unusually high. Please verify."
    return None


def validate_date(value: Any, today: Any, field_name: str = 'date') -> Optional[str]:
    """Check a date is present, parseable, not in the future and not too old."""
    label = _label(field_name)
    if _blank(value):
        return f"{label} is required"
    selected = parse_date(value)
    if pd.isna(selected):
        return f"{label} must be a valid date"
    now = parse_date(today)
    if pd.isna(now):
        raise TypeError(f"today must be a date, got {today!r}")
    if selected > now:
        return f"{label} cannot be in the future"
    if selected < now - pd.DateOffset(years=DATE_LOOKBACK_YEARS):
        span = 'one year' if DATE_LOOKBACK_YEARS == 1 else f"{DATE_LOOKBACK_YEARS} years"
        return f"{label} cannot be more than {span} in the past"
    return None


def _collect(**checks: Optional[str]) -> Dict[str, str]:
    return {name: message for name, message in checks.items() if message}


def validate_expense_form(form: Any, today: Any) -> Dict[str, str]:
    """Validate an expense form with ``amount`` and ``date`` fields."""
    return _collect(
        amount=validate_amount(field(form, 'amount'), 'amount', 0, EXPENSE_AMOUNT_MAX),
        date=validate_date(field(form, *reversed(EXPENSE_DATE_FIELDS)), today),
    )


def validate_income_form(amount: Any, income_date: Any, today: Any) -> Dict[str, str]:
    return _collect(
        amount=validate_amount(amount),
        date=validate_date(income_date, today),
    )


def validate_spending_limit(limit: Any) -> Dict[str, str]:
    """A limit of 0 is allowed and means "not configured"."""
    return _collect(limit=validate_amount(limit, 'limit', -1))


def validate_savings_goal(goal: Any) -> Dict[str, str]:
    return _collect(goal=validate_amount(goal, 'goal', -1))

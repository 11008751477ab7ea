"""Expense aggregation by category and month.

These functions group raw expense records for the dashboard: per-category
totals, the largest category, category shares and a month by category
breakdown for stacked charts.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Tuple

import pandas as pd

from .config import get_config_value
from .normalize import ZERO, amount_or_zero, as_float, parse_date, percentage
from .records import (
    EXPENSE_DATE_FIELDS,
    CategoryTotals,
    category_label,
    ensure_records,
    expense_frame,
    field,
)

NO_CATEGORY = get_config_value('labels', 'no_category', default='None')
ALL_CATEGORIES = 'All'


def aggregate_by_category(expenses: Any) -> CategoryTotals:
    """Sum expense amounts per category.

    Args:
        expenses: Sequence of expense records or mappings

    Returns:
        New dictionary mapping category names to exact ``Decimal`` sums, in
        the order categories are first seen.  Blank categories are bucketed
        under ``Uncategorized``; an empty input gives an empty mapping.

    Example:
        >>> aggregate_by_category([
        ...     {'category': 'Food', 'amount': 50},
        ...     {'category': 'Food', 'amount': '30'},
        ...     {'category': 'Transport', 'amount': 20.5},
        ... ])
        {'Food': Decimal('80'), 'Transport': Decimal('20.5')}
    """
    totals: CategoryTotals = {}
    for record in ensure_records(expenses, 'expenses'):
        category = category_label(field(record, 'category'))
        totals[category] = totals.get(category, ZERO) + amount_or_zero(field(record, 'amount'))
    return totals


def total_expenses(totals: Any) -> Decimal:
    """Total of a category mapping, or of a raw expense sequence."""
    if not isinstance(totals, Mapping):
        totals = aggregate_by_category(totals)
    return sum((amount_or_zero(amount) for amount in totals.values()), ZERO)


def largest_expense_category(totals: CategoryTotals) -> Tuple[str, float]:
    """Return the ``(name, amount)`` of the biggest category.

    Ties go to the category seen first; an empty mapping gives
    ``('None', 0.0)``.
    """
    if not totals:
        return NO_CATEGORY, 0.0
    name = max(totals, key=lambda category: totals[category])
    return name, float(totals[name])


def category_shares(totals: CategoryTotals) -> pd.DataFrame:
    """Category totals with their percentage share, largest first."""
    columns = ['Category', 'Amount', 'Share']
    if not totals:
        return pd.DataFrame(columns=columns)
    amounts = {name: as_float(amount) for name, amount in totals.items()}
    grand_total = as_float(total_expenses(totals))
    shares = pd.DataFrame(
        [(name, amount, percentage(amount, grand_total)) for name, amount in amounts.items()],
        columns=columns,
    )
    return shares.sort_values('Amount', ascending=False, kind='mergesort').reset_index(drop=True)


def monthly_category_breakdown(
    expenses: Any,
    categories: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Pivot expenses into a month by category table.

    Rows are ``YYYY-MM`` months in chronological order, columns are
    categories (restricted to and ordered by ``categories`` when given),
    and empty cells are 0.  Records with unparseable dates are skipped.
    """
    frame = expense_frame(expenses).dropna(subset=['Date']).copy()
    if frame.empty:
        empty = pd.DataFrame(columns=list(categories or []), dtype=float)
        empty.index.name = 'Month'
        return empty

    frame['Month'] = frame['Date'].dt.to_period('M').astype(str)
    table = frame.pivot_table(
        index='Month',
        columns='Category',
        values='Amount',
        aggfunc='sum',
        fill_value=0.0,
    ).sort_index()
    if categories is not None:
        table = table.reindex(columns=list(categories), fill_value=0.0)
    table.columns.name = None
    return table.astype(float)


def filter_expenses(
    expenses: Any,
    start_date: Any = None,
    end_date: Any = None,
    category: Optional[str] = None,
) -> List[Any]:
    """Select expense records by inclusive date range and category.

    ``category`` of ``None``, ``''`` or ``'All'`` disables the category
    filter.  Once a date bound is given, records with unparseable dates are
    left out.  The caller's record objects are returned as-is.

    Raises:
        ValueError: If a supplied date bound cannot be parsed.
    """
    rows = ensure_records(expenses, 'expenses')
    start = _bound(start_date, 'start_date')
    end = _bound(end_date, 'end_date')
    wants_category = category not in (None, '', ALL_CATEGORIES)

    selected = []
    for record in rows:
        if wants_category and category_label(field(record, 'category')) != category:
            continue
        if start is not None or end is not None:
            when = parse_date(field(record, *EXPENSE_DATE_FIELDS))
            if pd.isna(when):
                continue
            if start is not None and when < start:
                continue
            if end is not None and when > end:
                continue
        selected.append(record)
    return selected


def _bound(value: Any, name: str) -> Optional[pd.Timestamp]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    parsed = parse_date(value)
    if pd.isna(parsed):
        raise ValueError(f"Unable to parse {name} {value!r}")
    return parsed

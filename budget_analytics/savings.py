"""Savings figures: net savings, goal progress and savings rate."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from .normalize import ZERO, amount_or_zero, as_float, percentage
from .records import ensure_records, field


def evaluate_savings(income: Any, total_expenses: Any) -> float:
    """Income minus expenses.  Negative savings is a valid result."""
    return as_float(income) - as_float(total_expenses)


def savings_progress_percent(savings: Any, goal: Any) -> float:
    """Savings as a percentage of the goal, 0 when no goal is set.

    The value is not clamped so an exceeded goal reads above 100.
    """
    return percentage(as_float(savings), as_float(goal))


def savings_rate_percent(savings: Any, income: Any) -> float:
    """Savings as a percentage of income, 0 when there is no income."""
    return percentage(as_float(savings), as_float(income))


def total_income(incomes: Any) -> Decimal:
    """Exact sum of the income amounts; malformed amounts count as 0."""
    return sum(
        (amount_or_zero(field(income, 'amount')) for income in ensure_records(incomes, 'incomes')),
        ZERO,
    )


def goal_progress(goal: Any) -> Dict[str, Any]:
    """Progress of one savings goal record.

    Returns:
        Dictionary with the raw ``progress_percent``, a ``display_percent``
        clamped to 0-100 for progress bars, the amount still ``remaining``
        (never negative) and ``is_complete``.
    """
    target = as_float(field(goal, 'target_amount'))
    current = as_float(field(goal, 'current_amount'))
    progress = savings_progress_percent(current, target)
    return {
        'name': field(goal, 'name', default=''),
        'progress_percent': progress,
        'display_percent': min(max(0.0, progress), 100.0),
        'remaining': max(0.0, target - current),
        'is_complete': target > 0 and current >= target,
    }

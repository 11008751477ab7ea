"""Budget status calculations.

A non-positive limit means the budget is not configured: it reports 0%
used and is never over budget.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from .aggregation import aggregate_by_category
from .normalize import as_float, percentage
from .records import (
    BUDGET_LIMIT_FIELDS,
    BudgetStatus,
    category_label,
    ensure_records,
    field,
)


def evaluate_budget(total_expenses: Any, limit: Any) -> BudgetStatus:
    """Compare total spend against a limit.

    Args:
        total_expenses: Amount spent in the period
        limit: Budget ceiling for the period

    Returns:
        ``BudgetStatus`` with the percentage used, the over-budget flag and
        the remaining amount (clamped at 0 once over budget)

    Example:
        >>> evaluate_budget(100, 80)
        BudgetStatus(percentage_used=125.0, is_over_budget=True, remaining=0.0)
    """
    spent = as_float(total_expenses)
    cap = as_float(limit)
    if cap <= 0:
        return BudgetStatus(percentage_used=0.0, is_over_budget=False, remaining=0.0)

    used = percentage(spent, cap)
    over = used > 100
    return BudgetStatus(
        percentage_used=used,
        is_over_budget=over,
        remaining=0.0 if over else cap - spent,
    )


def budget_usage_percent(expenses: Any, budget: Any) -> float:
    return percentage(as_float(expenses), as_float(budget))


def total_budget_limit(budgets: Any) -> float:
    """Sum of the limits across budget records."""
    return float(sum(
        as_float(field(budget, *BUDGET_LIMIT_FIELDS))
        for budget in ensure_records(budgets, 'budgets')
    ))


def evaluate_category_budgets(totals: Any, budgets: Any) -> Dict[str, BudgetStatus]:
    """Evaluate each category budget against that category's spend.

    Args:
        totals: Category totals mapping, or raw expense records
        budgets: Budget records carrying ``category`` and ``limit_amount``

    Returns:
        Dictionary mapping budgeted categories to their ``BudgetStatus``.
        A later budget for the same category replaces an earlier one and a
        budgeted category with no spend is evaluated against 0.
    """
    if not isinstance(totals, Mapping):
        totals = aggregate_by_category(totals)

    limits: Dict[str, float] = {}
    for budget in ensure_records(budgets, 'budgets'):
        limits[category_label(field(budget, 'category'))] = as_float(
            field(budget, *BUDGET_LIMIT_FIELDS)
        )
    return {
        category: evaluate_budget(totals.get(category, 0.0), limit)
        for category, limit in limits.items()
    }

"""Top-level package for the budget analytics engine.

The engine turns plain expense, income, budget and savings goal records
into dashboard figures.  The primary modules are:

* ``aggregation`` – per-category and per-month expense totals
* ``budgets`` / ``savings`` – budget status and savings figures
* ``cadence`` / ``suggestions`` – pay cadence inference, next payday
  projection and daily spending suggestions
* ``analytics`` – the ``BudgetAnalytics`` facade tying everything together

All functions are pure: they perform no I/O and never modify the records
they are given.
"""

from .aggregation import (
    aggregate_by_category,
    category_shares,
    filter_expenses,
    largest_expense_category,
    monthly_category_breakdown,
    total_expenses,
)
from .analytics import BudgetAnalytics
from .budgets import evaluate_budget, evaluate_category_budgets, total_budget_limit
from .cadence import infer_cadence, project_next_pay_date
from .normalize import amount_or_zero, as_float, normalize_amount
from .records import (
    Budget,
    BudgetStatus,
    CadenceSuggestion,
    ExpenseRecord,
    IncomeRecord,
    SavingsGoal,
)
from .savings import (
    evaluate_savings,
    goal_progress,
    savings_progress_percent,
    savings_rate_percent,
)
from .suggestions import suggest_daily_limit, weekly_limit

__all__ = [
    'Budget',
    'BudgetAnalytics',
    'BudgetStatus',
    'CadenceSuggestion',
    'ExpenseRecord',
    'IncomeRecord',
    'SavingsGoal',
    'aggregate_by_category',
    'amount_or_zero',
    'as_float',
    'category_shares',
    'evaluate_budget',
    'evaluate_category_budgets',
    'evaluate_savings',
    'filter_expenses',
    'goal_progress',
    'infer_cadence',
    'largest_expense_category',
    'monthly_category_breakdown',
    'normalize_amount',
    'project_next_pay_date',
    'savings_progress_percent',
    'savings_rate_percent',
    'suggest_daily_limit',
    'total_budget_limit',
    'total_expenses',
    'weekly_limit',
]

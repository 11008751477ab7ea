"""Budget analytics over one snapshot of a user's records.

``BudgetAnalytics`` is the single entry point the API layer uses to build
dashboard figures.  It keeps the records it was given and recomputes every
figure on request from the pure helpers in the sibling modules.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from .aggregation import aggregate_by_category, largest_expense_category, total_expenses
from .budgets import evaluate_budget, evaluate_category_budgets, total_budget_limit
from .cadence import GapStats, gap_stats, infer_cadence
from .normalize import as_float
from .records import (
    BudgetStatus,
    CadenceSuggestion,
    CategoryTotals,
    ensure_records,
    field,
)
from .savings import (
    evaluate_savings,
    goal_progress,
    savings_progress_percent,
    savings_rate_percent,
    total_income,
)
from .suggestions import suggest_daily_limit, weekly_limit


class BudgetAnalytics:
    """Budget, savings and income cadence analytics."""

    def __init__(self, expenses: Any, incomes: Any, budgets: Any = (), goals: Any = ()):
        """Snapshot the record sequences; the records themselves are not modified."""
        self.expenses = ensure_records(expenses, 'expenses')
        self.incomes = ensure_records(incomes, 'incomes')
        self.budgets = ensure_records(budgets, 'budgets')
        self.goals = ensure_records(goals, 'goals')

    def category_totals(self) -> CategoryTotals:
        return aggregate_by_category(self.expenses)

    def total_expenses(self) -> Decimal:
        return total_expenses(self.category_totals())

    def total_income(self) -> Decimal:
        return total_income(self.incomes)

    def spending_limit(self) -> float:
        """Overall limit implied by the category budgets."""
        return total_budget_limit(self.budgets)

    def savings_goal(self) -> float:
        return float(sum(as_float(field(goal, 'target_amount')) for goal in self.goals))

    def budget_status(self, limit: Any = None) -> BudgetStatus:
        """Budget status against ``limit``, or against the summed budgets."""
        if limit is None:
            limit = self.spending_limit()
        return evaluate_budget(self.total_expenses(), limit)

    def category_budget_status(self) -> Dict[str, BudgetStatus]:
        return evaluate_category_budgets(self.category_totals(), self.budgets)

    def savings(self) -> float:
        return evaluate_savings(self.total_income(), self.total_expenses())

    def savings_rate(self) -> float:
        return savings_rate_percent(self.savings(), self.total_income())

    def savings_progress(self, goal: Any = None) -> float:
        if goal is None:
            goal = self.savings_goal()
        return savings_progress_percent(self.savings(), goal)

    def cadence(self) -> Optional[str]:
        return infer_cadence(self.incomes)

    def income_gap_stats(self) -> GapStats:
        return gap_stats(self.incomes)

    def suggestion(self, today: Any) -> Optional[CadenceSuggestion]:
        return suggest_daily_limit(self.incomes, today)

    def summary(
        self,
        today: Any,
        spending_limit: Any = None,
        savings_goal: Any = None,
    ) -> Dict[str, Any]:
        """Calculate every dashboard figure in one pass.

        Args:
            today: Current date for the spending suggestion
            spending_limit: Overall limit; defaults to the summed budgets
            savings_goal: Savings target; defaults to the summed goal targets

        Returns:
            Dictionary of plain values ready for serialization.  The
            ``suggestion`` entry is ``None`` when there is not enough income
            history, which is distinct from a zero suggestion, and
            ``average_pay_gap_days`` is ``None`` until two incomes are dated.
        """
        totals = self.category_totals()
        spent = total_expenses(totals)
        income = self.total_income()
        savings = evaluate_savings(income, spent)
        limit = self.spending_limit() if spending_limit is None else spending_limit
        goal = self.savings_goal() if savings_goal is None else savings_goal
        largest_name, largest_value = largest_expense_category(totals)
        suggestion = self.suggestion(today)
        gaps = self.income_gap_stats()

        return {
            'category_totals': {name: float(amount) for name, amount in totals.items()},
            'total_expenses': float(spent),
            'income': float(income),
            'largest_category': {'name': largest_name, 'value': largest_value},
            'budget_status': evaluate_budget(spent, limit).as_dict(),
            'category_budgets': {
                category: status.as_dict()
                for category, status in evaluate_category_budgets(totals, self.budgets).items()
            },
            'savings': savings,
            'savings_rate': savings_rate_percent(savings, income),
            'savings_progress': savings_progress_percent(savings, goal),
            'goals': [goal_progress(item) for item in self.goals],
            'cadence': self.cadence(),
            'average_pay_gap_days': gaps.mean_days if gaps.samples else None,
            'suggestion': suggestion.as_dict() if suggestion else None,
            'weekly_limit': weekly_limit(suggestion) if suggestion else None,
        }

"""Daily spending limit suggestions from income cadence.

The latest paycheck is spread over the days left until the next projected
payday.  ``today`` is always passed in by the caller.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

import pandas as pd

from .cadence import cadence_of, dated_incomes, project_next_pay_date
from .records import CadenceSuggestion

logger = logging.getLogger(__name__)


def days_until(target: Any, today: Any) -> int:
    """Whole days from ``today`` to ``target``, never less than 1.

    A target already in the past still gives 1 so the daily figure stays
    finite and positive.
    """
    if today is None:
        raise TypeError("today must be a date or datetime, got None")
    now = pd.Timestamp(today)
    if now.tzinfo is not None:
        now = now.tz_localize(None)
    remaining = (pd.Timestamp(target) - now) / pd.Timedelta(days=1)
    return max(1, math.ceil(remaining))


def suggest_daily_limit(incomes: Any, today: Any) -> Optional[CadenceSuggestion]:
    """Suggest a daily spending ceiling until the next payday.

    Args:
        incomes: Income records in any order
        today: Current date (or datetime) the suggestion is made for

    Returns:
        ``CadenceSuggestion`` with the daily limit, cadence and next pay
        date, or ``None`` when fewer than two incomes have a usable date.
        When several incomes share the latest date, the first one supplied
        is used as the last paycheck.

    Example:
        >>> suggest_daily_limit(incomes, date(2024, 2, 1)).daily_limit
        90.9090909090909
    """
    dated = dated_incomes(incomes)
    cadence = cadence_of(dated)
    if cadence is None:
        logger.debug("No spending suggestion: %d dated income record(s)", len(dated))
        return None

    latest = dated[dated['Date'] == dated['Date'].iloc[-1]].iloc[0]
    next_pay_date = project_next_pay_date(latest['Date'], cadence)
    days = days_until(next_pay_date, today)
    return CadenceSuggestion(
        daily_limit=float(latest['Amount']) / days,
        cadence=cadence,
        next_pay_date=next_pay_date,
    )


def weekly_limit(suggestion: CadenceSuggestion) -> float:
    return suggestion.daily_limit * 7

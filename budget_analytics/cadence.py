"""Pay cadence inference and next payday projection.

The cadence is a coarse label derived from the mean gap, in whole days,
between consecutive income dates.  Thresholds are inclusive upper bounds
and can be tuned through the ``cadence`` section of the analytics
settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd

from .config import get_config_value, get_number_value
from .normalize import parse_date
from .records import income_frame

logger = logging.getLogger(__name__)

WEEKLY = 'weekly'
BIWEEKLY = 'biweekly'
MONTHLY = 'monthly'
IRREGULAR = 'irregular'
CADENCES = (WEEKLY, BIWEEKLY, MONTHLY, IRREGULAR)

MINIMUM_INCOME_RECORDS = 2

PROJECTION_OFFSETS: Dict[str, pd.DateOffset] = {
    WEEKLY: pd.DateOffset(days=7),
    BIWEEKLY: pd.DateOffset(days=14),
    MONTHLY: pd.DateOffset(months=1),
}


def _load_thresholds() -> Dict[str, float]:
    configured = get_config_value('cadence', 'thresholds', default={}) or {}
    thresholds = {WEEKLY: 8.0, BIWEEKLY: 16.0, MONTHLY: 31.0}
    if not isinstance(configured, dict):
        logger.warning("Ignoring cadence thresholds %r: expected a mapping", configured)
        return thresholds
    for label in configured:
        if label in thresholds:
            thresholds[label] = get_number_value(
                'cadence', 'thresholds', label, default=thresholds[label]
            )
        else:
            logger.warning("Ignoring unknown cadence threshold %r", label)
    return dict(sorted(thresholds.items(), key=lambda item: item[1]))


def _load_fallback() -> str:
    fallback = get_config_value('cadence', 'fallback', default=BIWEEKLY)
    if not isinstance(fallback, str) or fallback not in PROJECTION_OFFSETS:
        logger.warning("Cadence fallback %r has no projection, using %s", fallback, BIWEEKLY)
        return BIWEEKLY
    return fallback


# Inclusive upper bound on the mean gap (days) for each label, ascending
CADENCE_THRESHOLDS = _load_thresholds()
# Projection used for irregular or unknown cadences
FALLBACK_CADENCE = _load_fallback()


@dataclass
class GapStats:
    mean_days: float
    samples: int


def dated_incomes(incomes: Any) -> pd.DataFrame:
    """Income frame without unparseable dates, sorted oldest first.

    Records sharing a date keep the order they were supplied in.
    """
    frame = income_frame(incomes)
    frame = frame.dropna(subset=['Date'])
    return frame.sort_values(['Date', 'Order'], kind='mergesort').reset_index(drop=True)


def income_gaps(incomes: Any) -> pd.Series:
    """Whole-day gaps between consecutive income dates."""
    return _gaps(dated_incomes(incomes))


def gap_stats(incomes: Any) -> GapStats:
    """Mean gap in days and the number of gaps it was taken over."""
    gaps = income_gaps(incomes)
    if gaps.empty:
        return GapStats(0.0, 0)
    return GapStats(float(gaps.mean()), len(gaps))


def classify_gap(mean_gap: float) -> str:
    """Label a mean gap in days.

    Example:
        >>> classify_gap(14)
        'biweekly'
        >>> classify_gap(45)
        'irregular'
    """
    for label, ceiling in CADENCE_THRESHOLDS.items():
        if mean_gap <= ceiling:
            return label
    return IRREGULAR


def infer_cadence(incomes: Any) -> Optional[str]:
    """Infer the pay cadence of an income history.

    Args:
        incomes: Income records in any order

    Returns:
        ``'weekly'``, ``'biweekly'``, ``'monthly'`` or ``'irregular'``, or
        ``None`` when fewer than two records have a usable date

    Example:
        >>> infer_cadence([
        ...     {'amount': 1000, 'date': '2024-01-01'},
        ...     {'amount': 1000, 'date': '2024-01-15'},
        ...     {'amount': 1000, 'date': '2024-01-29'},
        ... ])
        'biweekly'
    """
    return cadence_of(dated_incomes(incomes))


def cadence_of(dated: pd.DataFrame) -> Optional[str]:
    """Cadence of a frame produced by :func:`dated_incomes`."""
    if len(dated) < MINIMUM_INCOME_RECORDS:
        return None
    return classify_gap(float(_gaps(dated).mean()))


def project_next_pay_date(last_date: Any, cadence: Optional[str]):
    """Project the next expected payday from the latest income date.

    Weekly and biweekly add 7 and 14 days, monthly adds one calendar month
    (clamped to the last day of a shorter month).  Irregular or unknown
    cadences fall back to the biweekly projection.

    Raises:
        ValueError: If ``last_date`` cannot be parsed.

    Example:
        >>> project_next_pay_date('2024-01-31', 'monthly')
        datetime.date(2024, 2, 29)
    """
    when = parse_date(last_date)
    if pd.isna(when):
        raise ValueError(f"Unable to project a pay date from {last_date!r}")
    offset = PROJECTION_OFFSETS.get(cadence, PROJECTION_OFFSETS[FALLBACK_CADENCE])
    return (when + offset).date()


def _gaps(dated: pd.DataFrame) -> pd.Series:
    return dated['Date'].diff().dt.days.dropna().astype(float).reset_index(drop=True)

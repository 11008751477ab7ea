"""Coercion helpers for amounts and dates arriving from API records.

Every analytics helper funnels raw values through these functions so a
single malformed record contributes nothing instead of breaking the
aggregation of the rest.  Amounts are ``Decimal`` so sums over records
are exact; ratios and frame columns work on floats via :func:`as_float`.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

NOT_A_NUMBER = Decimal('NaN')
ZERO = Decimal(0)


def normalize_amount(value: Any) -> Decimal:
    """Coerce a numeric or string amount into a ``Decimal``.

    Floats are converted through their shortest repr so ``0.1`` becomes
    ``Decimal('0.1')``; strings are parsed as decimals.  Anything that is
    not a number yields ``Decimal('NaN')``; use :func:`amount_or_zero` when
    the value feeds a sum.

    Example:
        >>> normalize_amount('12.50')
        Decimal('12.50')
        >>> normalize_amount(0.1)
        Decimal('0.1')
        >>> normalize_amount('abc')
        Decimal('NaN')
    """
    if isinstance(value, (bool, np.bool_)):
        return NOT_A_NUMBER
    if isinstance(value, Decimal):
        return NOT_A_NUMBER if value.is_nan() else value
    if isinstance(value, (int, np.integer)):
        return Decimal(int(value))
    if isinstance(value, (float, np.floating)):
        return Decimal(repr(float(value)))
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return NOT_A_NUMBER
        # Signalling NaNs raise on comparison
        return NOT_A_NUMBER if parsed.is_nan() else parsed
    return NOT_A_NUMBER


def amount_or_zero(value: Any) -> Decimal:
    """Normalize an amount, treating malformed or non-finite input as zero."""
    amount = normalize_amount(value)
    if amount.is_finite():
        return amount
    logger.debug("Treating malformed amount %r as zero", value)
    return ZERO


def as_float(value: Any) -> float:
    """:func:`amount_or_zero` as a float, for ratios and frame columns."""
    return float(amount_or_zero(value))


def normalize_amounts(values: Iterable[Any]) -> pd.Series:
    return pd.Series([as_float(value) for value in values], dtype=float)


def parse_date(value: Any) -> pd.Timestamp:
    """Parse a date-like value to a day-resolution timestamp.

    Timezone information is dropped (wall-clock date is kept).  Missing
    or unparseable values, including bare numbers, return ``NaT``.
    """
    if value is None or isinstance(value, (bool, int, float, Decimal, np.number)):
        return pd.NaT
    if isinstance(value, str) and not value.strip():
        return pd.NaT
    try:
        parsed = pd.to_datetime(value, errors='coerce')
    except (TypeError, ValueError, OverflowError):
        logger.debug("Unparseable date %r", value)
        return pd.NaT
    if not isinstance(parsed, pd.Timestamp) or pd.isna(parsed):
        logger.debug("Unparseable date %r", value)
        return pd.NaT
    if parsed.tzinfo is not None:
        parsed = parsed.tz_localize(None)
    # Frames hold nanosecond timestamps
    if not (pd.Timestamp.min <= parsed <= pd.Timestamp.max):
        logger.debug("Date %r is outside the supported range", value)
        return pd.NaT
    return parsed.normalize()


def percentage(value: float, total: float) -> float:
    """Return ``value`` as a percentage of ``total``; 0 when total is not positive."""
    return (value / total) * 100 if total > 0 else 0.0

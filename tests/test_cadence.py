import itertools
import random
from datetime import date, timedelta

import pytest

from budget_analytics.cadence import (
    BIWEEKLY,
    CADENCES,
    IRREGULAR,
    MONTHLY,
    WEEKLY,
    classify_gap,
    gap_stats,
    income_gaps,
    infer_cadence,
    project_next_pay_date,
)
from budget_analytics.records import IncomeRecord


def _income(when, amount=1000):
    return {'amount': amount, 'income_date': when}


def _every(days, count=2, start=date(2024, 1, 1)):
    return [_income((start + timedelta(days=days * i)).isoformat()) for i in range(count)]


def test_biweekly_paychecks():
    incomes = [_income('2024-01-01'), _income('2024-01-15'), _income('2024-01-29')]

    assert infer_cadence(incomes) == BIWEEKLY
    assert income_gaps(incomes).tolist() == [14.0, 14.0]
    assert project_next_pay_date('2024-01-29', BIWEEKLY) == date(2024, 2, 12)


@pytest.mark.parametrize('gap, expected', [
    (1, WEEKLY),
    (7, WEEKLY),
    (8, WEEKLY),
    (9, BIWEEKLY),
    (16, BIWEEKLY),
    (17, MONTHLY),
    (31, MONTHLY),
    (32, IRREGULAR),
    (90, IRREGULAR),
])
def test_thresholds_are_inclusive_upper_bounds(gap, expected):
    assert infer_cadence(_every(gap)) == expected
    assert classify_gap(gap) == expected


def test_classification_uses_mean_gap():
    incomes = [_income('2024-01-01'), _income('2024-01-08'), _income('2024-01-17')]

    stats = gap_stats(incomes)

    assert stats.mean_days == 8.0
    assert stats.samples == 2
    assert infer_cadence(incomes) == WEEKLY


def test_monthly_paychecks_across_short_months():
    incomes = [_income('2024-01-31'), _income('2024-02-29'), _income('2024-03-31')]
    assert infer_cadence(incomes) == MONTHLY


def test_same_day_entries_count_as_zero_gaps():
    incomes = [_income('2024-01-01'), _income('2024-01-01'), _income('2024-01-29')]
    assert income_gaps(incomes).tolist() == [0.0, 28.0]
    assert infer_cadence(incomes) == BIWEEKLY


def test_cadence_ignores_input_order():
    incomes = [_income('2024-03-01'), _income('2024-01-05'), _income('2024-02-11'), _income('2024-01-19')]
    expected = infer_cadence(incomes)

    for permutation in itertools.permutations(incomes):
        assert infer_cadence(list(permutation)) == expected

    rng = random.Random(3)
    history = _every(13, count=12) + [_income('2024-07-04'), _income('garbage')]
    baseline = infer_cadence(history)
    for _ in range(20):
        shuffled = history[:]
        rng.shuffle(shuffled)
        assert infer_cadence(shuffled) == baseline


@pytest.mark.parametrize('incomes', [
    [],
    [_income('2024-01-01')],
    [_income('2024-01-01'), _income('not a date')],
    [_income(None), _income('')],
])
def test_insufficient_history_gives_none(incomes):
    assert infer_cadence(incomes) is None


def test_unparseable_dates_are_skipped():
    incomes = [_income('2024-01-01'), _income('someday'), _income('2024-01-08')]
    assert infer_cadence(incomes) == WEEKLY


def test_accepts_income_records():
    incomes = [IncomeRecord(500, date(2024, 1, 1)), IncomeRecord(500, date(2024, 1, 31))]
    assert infer_cadence(incomes) == MONTHLY


def test_non_sequence_input_fails_fast():
    with pytest.raises(TypeError):
        infer_cadence(None)


@pytest.mark.parametrize('last, cadence, expected', [
    ('2024-01-29', WEEKLY, date(2024, 2, 5)),
    ('2024-01-29', BIWEEKLY, date(2024, 2, 12)),
    ('2024-03-15', MONTHLY, date(2024, 4, 15)),
    ('2024-01-31', MONTHLY, date(2024, 2, 29)),
    ('2023-01-31', MONTHLY, date(2023, 2, 28)),
    ('2024-12-20', MONTHLY, date(2025, 1, 20)),
    ('2024-01-29', IRREGULAR, date(2024, 2, 12)),
    ('2024-01-29', 'fortnightly', date(2024, 2, 12)),
    ('2024-01-29', None, date(2024, 2, 12)),
])
def test_project_next_pay_date(last, cadence, expected):
    assert project_next_pay_date(last, cadence) == expected


def test_projection_is_always_after_last_date():
    start = date(2023, 1, 1)
    for offset in range(0, 800, 17):
        last = start + timedelta(days=offset)
        for cadence in CADENCES + ('unknown', None):
            assert project_next_pay_date(last, cadence) > last


def test_projection_rejects_unparseable_date():
    with pytest.raises(ValueError):
        project_next_pay_date('never', WEEKLY)

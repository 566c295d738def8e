from datetime import timedelta

import pytest

from beatstats.exceptions import InvalidArgumentError
from beatstats.logic.activity import ActivityConfig, ActivitySeriesBuilder, build_activity_series

from conftest import make_item


def test_empty_items_give_fourteen_zeros(now):
    assert build_activity_series([], now) == [0] * 14


def test_weekly_plays_are_smeared_over_last_seven_days(now):
    item = make_item(plays_7d=70)
    assert build_activity_series([item], now) == [0] * 7 + [10] * 7


def test_publication_day_spike(now):
    item = make_item(plays=100, publication_date=now - timedelta(days=1, hours=3))
    series = build_activity_series([item], now)
    assert series[12] == 25
    assert sum(series) == 25


def test_spike_on_oldest_day_of_window(now):
    item = make_item(plays=8, publication_date=now - timedelta(days=13, hours=20))
    assert build_activity_series([item], now)[0] == 2


def test_no_spike_outside_window(now):
    old = make_item(plays=1000, publication_date=now - timedelta(days=14))
    future = make_item(plays=1000, publication_date=now + timedelta(hours=5))
    assert build_activity_series([old, future], now) == [0] * 14


def test_rounding_happens_once_per_bucket(now):
    items = [make_item(id="a", plays_7d=3.5), make_item(id="b", plays_7d=3.5)]
    # 0.5 + 0.5 per bucket; rounding per item would give 2
    assert build_activity_series(items, now)[-7:] == [1] * 7


def test_rounds_half_up(now):
    assert build_activity_series([make_item(plays_7d=3.5)], now)[-1] == 1


def test_short_window_piles_overflow_on_first_bucket(now):
    assert build_activity_series([make_item(plays_7d=7)], now, days=3) == [5, 1, 1]


def test_zero_day_window_is_empty(now):
    assert build_activity_series([make_item(plays_7d=7)], now, days=0) == []


@pytest.mark.parametrize("days", [-1, -14, 2.5, "14", True])
def test_invalid_window_raises(now, days):
    with pytest.raises(InvalidArgumentError):
        build_activity_series([], now, days=days)


def test_invalid_argument_is_a_value_error(now):
    with pytest.raises(ValueError):
        build_activity_series([], now, days=-1)


def test_series_has_requested_length_and_non_negative_ints(raw_posts, now):
    from beatstats.logic.normalizer import normalize

    items = normalize(raw_posts, now)
    for days in (1, 7, 14, 30):
        series = build_activity_series(items, now, days=days)
        assert len(series) == days
        assert all(isinstance(v, int) and v >= 0 for v in series)


def test_overridable_constants(now):
    builder = ActivitySeriesBuilder(ActivityConfig(window_days=5, smear_days=1, spike_weight=1.0))
    item = make_item(plays=3, plays_7d=4, publication_date=now - timedelta(hours=2))
    assert builder.build([item], now) == [0, 0, 0, 0, 7]

from datetime import timedelta

import pytest

from beatstats.logic.ranking import RankingConfig, RankingEngine, rank, threshold_index

from conftest import NOW, make_item


def scored(*scores):
    return [make_item(id=f"p{i}", trending_score=s) for i, s in enumerate(scores)]


@pytest.fixture
def engine():
    return RankingEngine()


def test_sorted_by_score_is_stable():
    items = scored(5, 10, 5, 10, 1)
    result = rank(items)
    assert [m.id for m in result.sorted_by_score] == ["p1", "p3", "p0", "p2", "p4"]


def test_sorted_by_recency_is_stable():
    same_day = NOW - timedelta(days=2)
    items = [
        make_item(id="old", publication_date=NOW - timedelta(days=9)),
        make_item(id="tie-a", publication_date=same_day),
        make_item(id="new", publication_date=NOW - timedelta(hours=1)),
        make_item(id="tie-b", publication_date=same_day),
    ]
    result = rank(items)
    assert [m.id for m in result.sorted_by_recency] == ["new", "tie-a", "tie-b", "old"]


def test_rank_does_not_reorder_input():
    items = scored(1, 3, 2)
    rank(items)
    assert [m.id for m in items] == ["p0", "p1", "p2"]


@pytest.mark.parametrize("count,expected", [
    (0, 0), (1, 0), (2, 0), (5, 0), (9, 0), (10, 1), (14, 1), (15, 2), (20, 3), (100, 19),
])
def test_threshold_index(count, expected):
    assert threshold_index(count, 0.2) == expected


def test_empty_collection_has_zero_threshold(engine):
    assert engine.trending_threshold([]) == 0.0
    assert rank([]).sorted_by_score == []


def test_two_equal_scores_both_trending(engine):
    items = scored(50, 50)
    threshold = engine.trending_threshold(items)
    assert threshold == 50
    assert all(engine.is_trending(m, threshold) for m in items)


def test_small_collection_only_best_is_trending(engine):
    items = scored(3, 9, 4, 1, 7)
    threshold = engine.trending_threshold(items)
    assert threshold == 9
    assert [m.id for m in items if engine.is_trending(m, threshold)] == ["p1"]


def test_top_fifth_flagged_for_distinct_scores(engine):
    items = scored(*range(1, 21))
    threshold = engine.trending_threshold(items)
    flagged = [m for m in items if engine.is_trending(m, threshold)]
    assert threshold == 17
    assert len(flagged) == threshold_index(20, 0.2) + 1


def test_all_zero_scores_flag_nothing(engine):
    items = scored(0, 0, 0)
    threshold = engine.trending_threshold(items)
    assert threshold == 0
    assert not any(engine.is_trending(m, threshold) for m in items)


def test_custom_fraction():
    engine = RankingEngine(RankingConfig(trending_fraction=0.5))
    assert engine.trending_threshold(scored(1, 2, 3, 4)) == 3


@pytest.mark.parametrize("age,expected", [
    (timedelta(hours=1), True),
    (timedelta(days=6, hours=23), True),
    (timedelta(days=7), False),
    (timedelta(days=30), False),
    (-timedelta(days=2), True),
])
def test_is_new(engine, now, age, expected):
    item = make_item(publication_date=now - age)
    assert engine.is_new(item, now) is expected


def test_top_by_plays_limits_and_keeps_ties(engine):
    items = [make_item(id=f"p{i}", plays=p) for i, p in enumerate([10, 30, 30, 5, 40, 1, 2, 3])]
    top = engine.top(items, 6, key=lambda m: m.plays)
    assert [m.id for m in top] == ["p4", "p1", "p2", "p0", "p3", "p7"]
    assert engine.top(items, 0) == []

from datetime import timedelta

import pytest

from beatstats.logic.normalizer import normalize
from beatstats.logic.scoring import ScoringConfig, TrendingScorer

from conftest import days_ago, make_item


@pytest.fixture
def scorer():
    return TrendingScorer()


def test_falls_back_to_lifetime_plays_when_weekly_empty(scorer, now):
    # likes/saves are lifetime here; only the weekly counters feed the score
    raw = {"_id": "a", "likes": 10, "saves": 5, "plays_7d": 0, "plays": 100, "publication_date": days_ago(1)}
    item = normalize([raw], now)[0]
    assert scorer.score(item, now) == pytest.approx(99.8)


def test_prefers_weekly_plays(scorer, now):
    item = make_item(plays=5000, plays_7d=700, likes_7d=10, saves_7d=4, publication_date=now - timedelta(days=20))
    assert scorer.score(item, now) == pytest.approx(700 + 20 + 12 - 4.0)


def test_score_never_negative(scorer, now):
    item = make_item(plays=1, publication_date=now - timedelta(days=365))
    assert scorer.score(item, now) == 0.0


def test_future_items_get_no_age_bonus(scorer, now):
    item = make_item(plays=10, publication_date=now + timedelta(days=5))
    assert scorer.score(item, now) == pytest.approx(10.0)


def test_custom_weights(now):
    scorer = TrendingScorer(ScoringConfig(plays_weight=0.5, likes_weight=1, saves_weight=1, age_decay_per_day=0))
    item = make_item(plays_7d=10, likes_7d=2, saves_7d=3)
    assert scorer.score(item, now) == pytest.approx(10.0)


def test_score_all_sets_scores_without_mutating(scorer, now):
    items = [make_item(id="a", plays=50), make_item(id="b", plays=10)]
    scored = scorer.score_all(items, now)
    assert [m.id for m in scored] == ["a", "b"]
    assert scored[0].trending_score == pytest.approx(44.0)
    assert items[0].trending_score == 0.0


def test_deterministic(scorer, raw_posts, now):
    items = normalize(raw_posts, now)
    assert [scorer.score(m, now) for m in items] == [scorer.score(m, now) for m in items]

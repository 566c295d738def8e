from datetime import UTC, datetime, timedelta

import pytest

from beatstats.domain.models import NormalizedMetrics

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def days_ago(days: float) -> str:
    return (NOW - timedelta(days=days)).isoformat().replace("+00:00", "Z")


def make_item(**overrides) -> NormalizedMetrics:
    values = {"id": "p1", "publication_date": NOW - timedelta(days=30)}
    values.update(overrides)
    return NormalizedMetrics(**values)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def raw_posts():
    """Posts response roughly as the upstream API returns it, warts included."""
    return [
        {
            "_id": "a1",
            "title": "Night Drive",
            "publication_date": days_ago(1),
            "plays": 100,
            "likes": 10,
            "saves": 5,
            "plays_7d": 0,
            "user_id": "u-42",
            "audio_format": "wav",
            "cover_format": "png",
        },
        {
            "_id": "a2",
            "title": 'He said "hi", ok',
            "publication_date": days_ago(20),
            "plays": 5000,
            "plays_7d": 700,
            "likes_7d": 10,
            "saves_7d": 4,
            "price": 29.99,
            "sales_count": 3,
        },
        {
            "postId": "a3",
            "name": "Lo-fi Sketch",
            "publicationDate": "not a date",
            "playCount": "250",
            "likes": -4,
            "saves": None,
        },
    ]

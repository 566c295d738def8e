from datetime import datetime
from typing import Any, Iterable, List, Optional

from beatstats.data.field_mapper import FieldMapper
from beatstats.domain.models import NormalizedMetrics

SECONDS_PER_DAY = 86_400

_TEXT_FIELDS = ("title", "user_id", "audio_format", "cover_format")
_COUNT_FIELDS = ("plays", "likes", "saves", "sales_count")
_NUMBER_FIELDS = ("plays_7d", "likes_7d", "saves_7d", "price")


def age_in_days(published: datetime, now: datetime) -> float:
    """Fractional days between publication and now; may be negative for future dates."""
    return (now - published).total_seconds() / SECONDS_PER_DAY


class MetricsNormalizer:
    """
    Turns heterogeneous raw post records into NormalizedMetrics.
    One output per input, same order; malformed records get best-effort defaults.
    """

    def __init__(self, mapper: Optional[FieldMapper] = None):
        self.mapper = mapper or FieldMapper()

    def normalize(self, raw: Iterable[Any], now: datetime) -> List[NormalizedMetrics]:
        now = FieldMapper.to_timestamp(now)
        return [self.normalize_one(record, now, position) for position, record in enumerate(raw)]

    def normalize_one(self, record: Any, now: datetime, position: int = 0) -> NormalizedMetrics:
        m = self.mapper
        values: dict[str, Any] = {}

        identifier = m.to_text(m.resolve(record, "id").value).strip()
        values["id"] = identifier or f"item-{position}"

        for name in _TEXT_FIELDS:
            values[name] = m.to_text(m.resolve(record, name).value)
        for name in _COUNT_FIELDS:
            values[name] = m.to_count(m.resolve(record, name).value)
        for name in _NUMBER_FIELDS:
            values[name] = m.to_number(m.resolve(record, name).value)

        published = m.to_timestamp(m.resolve(record, "publication_date").value)
        values["publication_date"] = published
        values["age_days"] = max(0.0, age_in_days(published, now))

        return NormalizedMetrics(**values)


def normalize(raw: Iterable[Any], now: datetime) -> List[NormalizedMetrics]:
    return MetricsNormalizer().normalize(raw, now)

import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from beatstats.config import settings
from beatstats.data.field_mapper import FieldMapper
from beatstats.domain.models import NormalizedMetrics
from beatstats.exceptions import InvalidArgumentError
from beatstats.logic.normalizer import age_in_days


@dataclass
class ActivityConfig:
    window_days: int = settings.activity.window_days
    smear_days: int = settings.activity.smear_days
    spike_weight: float = settings.activity.spike_weight


class ActivitySeriesBuilder:
    """
    Reconstructs an approximate daily activity histogram from aggregate counters.

    Upstream only knows weekly and lifetime totals, so each post contributes a
    flat smear of its weekly plays over the last ``smear_days`` buckets plus a
    one-off spike of ``plays * spike_weight`` on its publication day.
    Index 0 is the oldest day of the window, the last index is today.
    """

    def __init__(self, config: Optional[ActivityConfig] = None):
        self.config = config or ActivityConfig()

    def build(
        self,
        items: Sequence[NormalizedMetrics],
        now: datetime,
        days: Optional[int] = None,
    ) -> List[int]:
        days = self.config.window_days if days is None else days
        if isinstance(days, bool) or not isinstance(days, int):
            raise InvalidArgumentError(f"days must be an integer, got {days!r}")
        if days < 0:
            raise InvalidArgumentError(f"days must be >= 0, got {days}")
        if days == 0:
            return []

        now = FieldMapper.to_timestamp(now)
        smear_days = self.config.smear_days
        buckets = [0.0] * days

        for item in items:
            share = item.plays_7d / smear_days if smear_days > 0 else 0.0
            for offset in range(smear_days):
                # Windows shorter than the smear pile the overflow onto index 0
                buckets[max(0, days - 1 - offset)] += share

            day = math.floor(age_in_days(item.publication_date, now))
            if 0 <= day < days:
                buckets[days - 1 - day] += item.plays * self.config.spike_weight

        return [_round_half_up(value) for value in buckets]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_activity_series(
    items: Sequence[NormalizedMetrics],
    now: datetime,
    days: Optional[int] = None,
) -> List[int]:
    return ActivitySeriesBuilder().build(items, now, days=days)

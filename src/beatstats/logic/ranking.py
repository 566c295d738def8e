import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence

from beatstats.config import settings
from beatstats.data.dto import RankingResult
from beatstats.data.field_mapper import FieldMapper
from beatstats.domain.models import NormalizedMetrics


@dataclass
class RankingConfig:
    trending_fraction: float = settings.ranking.trending_fraction
    new_window_days: float = settings.ranking.new_window_days


def threshold_index(count: int, fraction: float) -> int:
    """
    Index of the trending cutoff in a descending score list.
    With the default 0.2 fraction it is 0 below ten items, so only the best score sets the bar.
    """
    return max(0, math.floor(count * fraction) - 1)


class RankingEngine:
    """
    Orders scored items and decides which ones get the "new" and "trending" badges.
    All sorts are stable: equal keys keep their input order.
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()

    def rank(self, items: Sequence[NormalizedMetrics]) -> RankingResult:
        return RankingResult(
            sorted_by_score=self.sort_by_score(items),
            sorted_by_recency=self.sort_by_recency(items),
            trending_threshold=self.trending_threshold(items),
        )

    @staticmethod
    def sort_by_score(items: Sequence[NormalizedMetrics]) -> List[NormalizedMetrics]:
        return sorted(items, key=lambda m: m.trending_score, reverse=True)

    @staticmethod
    def sort_by_recency(items: Sequence[NormalizedMetrics]) -> List[NormalizedMetrics]:
        return sorted(items, key=lambda m: m.publication_date, reverse=True)

    @staticmethod
    def top(
        items: Sequence[NormalizedMetrics],
        n: int,
        key: Callable[[NormalizedMetrics], float] = lambda m: m.trending_score,
    ) -> List[NormalizedMetrics]:
        return sorted(items, key=key, reverse=True)[: max(0, n)]

    def trending_threshold(self, items: Sequence[NormalizedMetrics]) -> float:
        if not items:
            return 0.0
        scores = sorted((m.trending_score for m in items), reverse=True)
        return scores[threshold_index(len(scores), self.config.trending_fraction)]

    def is_new(self, item: NormalizedMetrics, now: datetime) -> bool:
        now = FieldMapper.to_timestamp(now)
        return now - item.publication_date < timedelta(days=self.config.new_window_days)

    @staticmethod
    def is_trending(item: NormalizedMetrics, threshold: float) -> bool:
        # An all-zero collection would otherwise flag everything
        return threshold > 0 and item.trending_score >= threshold


def rank(items: Sequence[NormalizedMetrics]) -> RankingResult:
    return RankingEngine().rank(items)

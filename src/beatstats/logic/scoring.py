from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from beatstats.config import settings
from beatstats.data.field_mapper import FieldMapper
from beatstats.domain.models import NormalizedMetrics
from beatstats.logic.normalizer import age_in_days


@dataclass
class ScoringConfig:
    plays_weight: float = settings.scoring.plays_weight
    likes_weight: float = settings.scoring.likes_weight
    saves_weight: float = settings.scoring.saves_weight
    # Points lost per day since publication
    age_decay_per_day: float = settings.scoring.age_decay_per_day


class TrendingScorer:
    """
    Pure logic engine for trending scores.
    Weekly plays are preferred; lifetime plays stand in when the weekly counter is empty.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score(self, item: NormalizedMetrics, now: datetime) -> float:
        now = FieldMapper.to_timestamp(now)
        plays_term = item.plays_7d if item.plays_7d > 0 else float(item.plays)
        age_days = max(0.0, age_in_days(item.publication_date, now))
        raw = (
            plays_term * self.config.plays_weight
            + item.likes_7d * self.config.likes_weight
            + item.saves_7d * self.config.saves_weight
            - age_days * self.config.age_decay_per_day
        )
        return max(0.0, raw)

    def score_all(self, items: Iterable[NormalizedMetrics], now: datetime) -> List[NormalizedMetrics]:
        """Returns copies carrying a fresh trending_score; input order is kept."""
        return [item.model_copy(update={"trending_score": self.score(item, now)}) for item in items]

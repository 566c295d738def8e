from beatstats.logic.activity import ActivityConfig, ActivitySeriesBuilder, build_activity_series
from beatstats.logic.normalizer import MetricsNormalizer, normalize
from beatstats.logic.ranking import RankingConfig, RankingEngine, rank, threshold_index
from beatstats.logic.scoring import ScoringConfig, TrendingScorer
from beatstats.logic.totals import calculate_totals

__all__ = [
    "ActivityConfig",
    "ActivitySeriesBuilder",
    "MetricsNormalizer",
    "RankingConfig",
    "RankingEngine",
    "ScoringConfig",
    "TrendingScorer",
    "build_activity_series",
    "calculate_totals",
    "normalize",
    "rank",
    "threshold_index",
]

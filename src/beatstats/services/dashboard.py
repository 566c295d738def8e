import logging
from datetime import UTC, datetime
from typing import Any, List, Optional

from beatstats.config import settings
from beatstats.data.dto import DashboardView, ExportArtifact, ItemView
from beatstats.data.field_mapper import FieldMapper
from beatstats.data.payload import extract_records
from beatstats.domain.models import Account, NormalizedMetrics
from beatstats.logic.activity import ActivitySeriesBuilder
from beatstats.logic.normalizer import MetricsNormalizer
from beatstats.logic.ranking import RankingEngine
from beatstats.logic.scoring import TrendingScorer
from beatstats.logic.totals import calculate_totals
from beatstats.services.assets import AssetLocator
from beatstats.services.exporter import CsvExporter

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Runs the full analytics pipeline for one refresh:
    raw payload -> normalized metrics -> scores -> ranking/totals/activity -> view-model.
    Every call starts from scratch; nothing is carried between refreshes.
    """

    def __init__(
        self,
        normalizer: Optional[MetricsNormalizer] = None,
        scorer: Optional[TrendingScorer] = None,
        ranking: Optional[RankingEngine] = None,
        activity: Optional[ActivitySeriesBuilder] = None,
        assets: Optional[AssetLocator] = None,
        exporter: Optional[CsvExporter] = None,
        top_n: Optional[int] = None,
    ):
        self.normalizer = normalizer or MetricsNormalizer()
        self.scorer = scorer or TrendingScorer()
        self.ranking = ranking or RankingEngine()
        self.activity = activity or ActivitySeriesBuilder()
        self.assets = assets or AssetLocator()
        self.exporter = exporter or CsvExporter()
        self.top_n = settings.ranking.top_n if top_n is None else top_n

    def metrics(self, payload: Any, now: datetime) -> List[NormalizedMetrics]:
        records = extract_records(payload)
        normalized = self.normalizer.normalize(records, now)
        return self.scorer.score_all(normalized, now)

    def build(
        self,
        payload: Any,
        now: Optional[datetime] = None,
        account: Optional[Account] = None,
        days: Optional[int] = None,
    ) -> DashboardView:
        now = FieldMapper.to_timestamp(now) if now else datetime.now(UTC)
        account = account or Account()

        items = self.metrics(payload, now)
        ranked = self.ranking.rank(items)
        threshold = ranked.trending_threshold

        def view(item: NormalizedMetrics) -> ItemView:
            return ItemView(
                metrics=item,
                is_new=self.ranking.is_new(item, now),
                is_trending=self.ranking.is_trending(item, threshold),
                cover_url=self.assets.cover_url(item, account),
                audio_url=self.assets.audio_url(item, account),
            )

        # A bad window raises here, before any views are built
        series = self.activity.build(items, now, days=days)
        logger.debug(
            "Built dashboard for %r: %d items, threshold %.2f",
            account.username or account.id,
            len(items),
            threshold,
        )

        return DashboardView(
            account=account,
            generated_at=now,
            items=[view(m) for m in items],
            popular=[view(m) for m in ranked.sorted_by_score[: self.top_n]],
            recent=[view(m) for m in ranked.sorted_by_recency],
            top_by_plays=[view(m) for m in self.ranking.top(items, self.top_n, key=lambda m: m.plays)],
            trending_threshold=threshold,
            totals=calculate_totals(items),
            activity_series=series,
        )

    def export(
        self,
        payload: Any,
        now: Optional[datetime] = None,
        account: Optional[Account] = None,
    ) -> ExportArtifact:
        now = now or datetime.now(UTC)
        items = self.normalizer.normalize(extract_records(payload), now)
        return self.exporter.export(items, account)

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from beatstats.domain.models import Account, NormalizedMetrics


@dataclass
class Totals:
    """Portfolio-wide roll-up of a normalized collection."""
    total_plays: int = 0
    plays_7d: float = 0.0
    estimated_plays_30d: float = 0.0  # weekly plays extrapolated over four weeks
    total_likes: int = 0
    total_saves: int = 0
    total_sales: int = 0
    estimated_revenue: float = 0.0
    total_items: int = 0


@dataclass
class RankingResult:
    sorted_by_score: List[NormalizedMetrics]
    sorted_by_recency: List[NormalizedMetrics]
    trending_threshold: float


@dataclass
class ItemView:
    """A normalized item annotated for presentation."""
    metrics: NormalizedMetrics
    is_new: bool
    is_trending: bool
    cover_url: str = ""
    audio_url: str = ""


@dataclass
class DashboardView:
    account: Account
    generated_at: datetime
    items: List[ItemView]
    popular: List[ItemView]
    recent: List[ItemView]
    top_by_plays: List[ItemView]
    trending_threshold: float
    totals: Totals
    activity_series: List[int] = field(default_factory=list)


@dataclass
class ExportArtifact:
    """In-memory export handed to whatever offers the file for download."""
    filename: str
    content: str
    media_type: str
    row_count: Optional[int] = None

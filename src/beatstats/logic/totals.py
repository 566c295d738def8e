from typing import Sequence

from beatstats.data.dto import Totals
from beatstats.domain.models import NormalizedMetrics

WEEKS_PER_MONTH = 4


def calculate_totals(items: Sequence[NormalizedMetrics]) -> Totals:
    """
    Rolls up the whole collection. An empty collection gives all-zero totals.
    """
    plays_7d = sum((m.plays_7d for m in items), 0.0)
    return Totals(
        total_plays=sum(m.plays for m in items),
        plays_7d=plays_7d,
        estimated_plays_30d=plays_7d * WEEKS_PER_MONTH,
        total_likes=sum(m.likes for m in items),
        total_saves=sum(m.saves for m in items),
        total_sales=sum(m.sales_count for m in items),
        estimated_revenue=sum((m.sales_count * m.price for m in items), 0.0),
        total_items=len(items),
    )

import csv
import io
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from beatstats.config import settings
from beatstats.data.dto import ExportArtifact
from beatstats.domain.models import Account, NormalizedMetrics

logger = logging.getLogger(__name__)


class _PlainDecimal(Decimal):
    """Decimal that always renders positionally (0.0000001, never 1E-7)."""

    def __str__(self) -> str:
        return format(self, "f")


def _cell(value: Any) -> Any:
    if isinstance(value, float):
        return int(value) if value.is_integer() else _PlainDecimal(repr(value))
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def to_delimited_text(items: Sequence[NormalizedMetrics], columns: Sequence[str]) -> str:
    """
    Comma-separated text: header row, then one row per item in column order.
    Text is double-quoted with inner quotes doubled, numbers are bare decimals,
    columns that are not metric fields are left empty.
    """
    buffer = io.StringIO()
    buffer.write(",".join(columns) + "\n")
    # QUOTE_STRINGS quotes text but leaves numbers and None bare
    writer = csv.writer(buffer, quoting=csv.QUOTE_STRINGS, lineterminator="\n")
    for item in items:
        row = item.model_dump()
        writer.writerow([_cell(row.get(column)) for column in columns])
    return buffer.getvalue()[:-1]


class CsvExporter:
    """
    Builds the downloadable stats sheet for an account.
    Saving or offering the file is left to the caller.
    """

    def __init__(self, columns: Optional[Sequence[str]] = None):
        self.columns = list(columns or settings.export.columns)

    def render(self, items: Sequence[NormalizedMetrics]) -> str:
        return to_delimited_text(items, self.columns)

    @staticmethod
    def filename_for(account: Optional[Account]) -> str:
        name = (account.username if account else "") or settings.export.fallback_name
        safe_name = name.strip().replace(" ", "_").replace("/", "-")
        return f"{safe_name or settings.export.fallback_name}{settings.export.filename_suffix}"

    def export(self, items: Sequence[NormalizedMetrics], account: Optional[Account] = None) -> ExportArtifact:
        filename = self.filename_for(account)
        logger.debug("Exporting %d rows to %s", len(items), filename)
        return ExportArtifact(
            filename=filename,
            content=self.render(items),
            media_type=settings.export.media_type,
            row_count=len(items),
        )

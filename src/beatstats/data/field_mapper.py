import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from beatstats.config_fields import AliasConfig, FieldConfig, field_config

FAR_PAST = datetime(1970, 1, 1, tzinfo=UTC)
_EPOCH = FAR_PAST


@dataclass
class FieldMatch:
    field: str
    key: Optional[str]
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "key": self.key, "value": self.value}


class FieldMapper:
    """
    Config-driven resolver for loosely-shaped upstream records.
    Each canonical field has an ordered alias list; first present non-null value wins.
    Coercion helpers never raise: garbage becomes the field default.
    """

    def __init__(self, config: FieldConfig = field_config):
        self.config = config

    def resolve(self, record: Any, field: str, table: str = "item") -> FieldMatch:
        aliases = self._table(table).get(field, AliasConfig(aliases=[field])).aliases
        return self.extract_by_aliases(record, aliases, field=field)

    @staticmethod
    def extract_by_aliases(record: Any, aliases: Iterable[str], field: str = "") -> FieldMatch:
        if not isinstance(record, Mapping):
            return FieldMatch(field=field, key=None, value=None)
        for alias in aliases:
            value = record.get(alias)
            if value is not None:
                return FieldMatch(field=field, key=alias, value=value)
        return FieldMatch(field=field, key=None, value=None)

    def explain(self, record: Any, table: str = "item") -> List[FieldMatch]:
        """Which raw key fed each canonical field; handy when auditing upstream payloads."""
        return [self.resolve(record, name, table=table) for name in self._table(table)]

    def _table(self, table: str) -> Dict[str, AliasConfig]:
        if table == "profile":
            return self.config.profile
        return self.config.item

    @staticmethod
    def to_number(value: Any) -> float:
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            number = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
        except (ValueError, OverflowError):
            return 0.0
        if math.isnan(number) or math.isinf(number) or number < 0:
            return 0.0
        return number

    @classmethod
    def to_count(cls, value: Any) -> int:
        return int(cls.to_number(value))

    @staticmethod
    def to_text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float, bool)):
            return str(value)
        return ""

    @staticmethod
    def to_timestamp(value: Any) -> datetime:
        if value is None or isinstance(value, bool):
            return FAR_PAST
        try:
            if isinstance(value, datetime):
                parsed = value
            elif isinstance(value, (int, float)):
                # Epoch milliseconds, as browsers and most JSON APIs emit them
                return _EPOCH + timedelta(milliseconds=float(value))
            else:
                text = str(value).strip()
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                parsed = datetime.fromisoformat(text)
            # Shifting an offset date near year 1 or 9999 can leave the datetime range
            return parsed.astimezone(UTC) if parsed.tzinfo else parsed.replace(tzinfo=UTC)
        except (ValueError, OverflowError):
            return FAR_PAST

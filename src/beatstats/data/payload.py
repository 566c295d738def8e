from typing import Any, List, Mapping, Optional

from beatstats.config_fields import FieldConfig, field_config


def extract_records(payload: Any, config: Optional[FieldConfig] = None) -> List[Any]:
    """
    Unwrap an upstream posts response into a flat list of raw records.

    The posts endpoint answers with a bare list, a single post object, or an
    envelope such as ``{"posts": [...]}``. Anything else yields no records.
    """
    config = config or field_config
    if isinstance(payload, list):
        return list(payload)
    if not isinstance(payload, Mapping):
        return []
    if payload.get("_id") is not None:
        return [payload]
    for key in config.payload_list_keys:
        inner = payload.get(key)
        if isinstance(inner, list):
            return list(inner)
    return []

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from beatstats.exceptions import ConfigError


class AliasConfig(BaseModel):
    aliases: List[str] = Field(default_factory=list)


def _aliases(*names: str) -> AliasConfig:
    return AliasConfig(aliases=list(names))


def _default_item_fields() -> Dict[str, AliasConfig]:
    """
    Canonical item field -> raw keys, in priority order.
    First key present with a non-null value wins.
    """
    return {
        "id": _aliases("_id", "id", "post_id", "postId"),
        "title": _aliases("title", "name"),
        "publication_date": _aliases("publication_date", "publicationDate", "published_at", "created_at"),
        "plays": _aliases("plays", "play_count", "playCount"),
        "likes": _aliases("likes", "like_count", "likeCount"),
        "saves": _aliases("saves", "save_count", "saveCount"),
        "plays_7d": _aliases("plays_7d", "plays7d", "playsLast7d"),
        "likes_7d": _aliases("likes_7d", "likes7d", "likesLast7d"),
        "saves_7d": _aliases("saves_7d", "saves7d", "savesLast7d"),
        "price": _aliases("price"),
        "sales_count": _aliases("sales_count", "salesCount", "sales"),
        "user_id": _aliases("user_id", "userId", "owner_id"),
        "audio_format": _aliases("audio_format", "audioFormat"),
        "cover_format": _aliases("cover_format", "coverFormat"),
    }


def _default_profile_fields() -> Dict[str, AliasConfig]:
    return {
        "id": _aliases("id", "_id", "userId"),
        "username": _aliases("username", "user_name"),
        "full_name": _aliases("full_name", "fullName", "name"),
        "email": _aliases("email"),
    }


class FieldConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")
    version: Optional[str] = None
    item: Dict[str, AliasConfig] = Field(default_factory=_default_item_fields)
    profile: Dict[str, AliasConfig] = Field(default_factory=_default_profile_fields)
    payload_list_keys: List[str] = Field(default_factory=lambda: ["posts"])


def load_field_config(path: Optional[Path] = None) -> FieldConfig:
    """
    Load alias tables from YAML with safe defaults.
    Fields listed in the file replace the defaults for that field only.
    """
    file_path = path or Path("config/fields.yaml")
    if not file_path.exists():
        return FieldConfig()

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        loaded = FieldConfig.model_validate(data)
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        raise ConfigError(f"Invalid field config {file_path}: {exc}") from exc

    merged_item = _default_item_fields()
    merged_item.update(loaded.item)
    loaded.item = merged_item
    merged_profile = _default_profile_fields()
    merged_profile.update(loaded.profile)
    loaded.profile = merged_profile
    return loaded


# Singleton-style loaded config for convenience
field_config = load_field_config()

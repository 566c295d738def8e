from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from beatstats.data.field_mapper import FAR_PAST, FieldMapper


class NormalizedMetrics(BaseModel):
    """
    Canonical, defaulted engagement record for one post.
    age_days and trending_score are derived per computation pass and never persisted.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    publication_date: datetime = FAR_PAST
    plays: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)
    plays_7d: float = Field(default=0.0, ge=0)
    likes_7d: float = Field(default=0.0, ge=0)
    saves_7d: float = Field(default=0.0, ge=0)
    price: float = Field(default=0.0, ge=0)
    sales_count: int = Field(default=0, ge=0)
    user_id: str = ""
    audio_format: str = ""
    cover_format: str = ""

    age_days: float = Field(default=0.0, ge=0)
    trending_score: float = Field(default=0.0, ge=0)


class Account(BaseModel):
    """
    Identity of the account whose dashboard is being built.
    Always passed in by the caller; the engine never looks it up.
    """
    id: str = ""
    username: str = ""
    full_name: str = ""
    email: str = ""

    @property
    def display_name(self) -> str:
        return self.full_name or self.username

    @classmethod
    def from_profile(cls, profile: Any, mapper: Optional[FieldMapper] = None) -> "Account":
        """Build from a loosely-shaped profile payload (e.g. a /users/me response)."""
        mapper = mapper or FieldMapper()
        values = {
            name: mapper.to_text(mapper.resolve(profile, name, table="profile").value)
            for name in ("id", "username", "full_name", "email")
        }
        if not values["username"] and "@" in values["email"]:
            values["username"] = values["email"].split("@")[0]
        return cls(**values)

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from beatstats.exceptions import ConfigError

EXPORT_COLUMNS = [
    "id",
    "title",
    "publication_date",
    "plays",
    "plays_7d",
    "likes",
    "saves",
    "price",
    "sales_count",
]


class AppSettings(BaseModel):
    name: str = "beatstats"
    version: str = "1.0.0"
    cors_origins: list[str] = []


class ScoringSettings(BaseModel):
    plays_weight: float = 1.0
    likes_weight: float = 2.0
    saves_weight: float = 3.0
    age_decay_per_day: float = 0.2


class RankingSettings(BaseModel):
    trending_fraction: float = 0.2  # top 20% of scores
    new_window_days: float = 7.0
    top_n: int = 6


class ActivitySettings(BaseModel):
    """
    Tuning for the reconstructed activity histogram.
    There is no per-day history upstream, only weekly and lifetime aggregates.
    """
    window_days: int = 14
    smear_days: int = 7
    spike_weight: float = 0.25


class ExportSettings(BaseModel):
    columns: list[str] = list(EXPORT_COLUMNS)
    filename_suffix: str = "-stats.csv"
    fallback_name: str = "producer"
    media_type: str = "text/csv;charset=utf-8"


class AssetSettings(BaseModel):
    base_url: str = "https://res.beatnow.app"
    root: str = "beatnow"
    default_cover_format: str = "jpg"
    default_audio_format: str = "mp3"


class LoggingSettings(BaseModel):
    log_requests: bool = True
    level: str = "INFO"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BEATSTATS_", env_nested_delimiter="__", env_file=".env", extra="ignore"
    )
    app: AppSettings = AppSettings()
    scoring: ScoringSettings = ScoringSettings()
    ranking: RankingSettings = RankingSettings()
    activity: ActivitySettings = ActivitySettings()
    export: ExportSettings = ExportSettings()
    assets: AssetSettings = AssetSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        # Load from default path if exists
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            return cls(**config_data)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as exc:
            raise ConfigError(f"Failed to load settings from {path}: {exc}") from exc

settings = Settings.load()

import re
from typing import Optional

from beatstats.config import AssetSettings, settings
from beatstats.domain.models import Account, NormalizedMetrics

_DUPLICATE_SLASHES = re.compile(r"([^:]/)/+")


class AssetLocator:
    """
    Resolves cover art and audio preview URLs for a post.
    Owner id comes from the post itself, else from the injected account.
    """

    def __init__(self, config: Optional[AssetSettings] = None):
        self.config = config or settings.assets

    def cover_url(self, item: NormalizedMetrics, account: Optional[Account] = None) -> str:
        ext = item.cover_format or self.config.default_cover_format
        return self._build(item, account, f"caratula.{ext}")

    def audio_url(self, item: NormalizedMetrics, account: Optional[Account] = None) -> str:
        ext = item.audio_format or self.config.default_audio_format
        return self._build(item, account, f"audio.{ext}")

    def _build(self, item: NormalizedMetrics, account: Optional[Account], filename: str) -> str:
        owner = item.user_id or (account.id if account else "")
        url = f"{self.config.base_url}/{self.config.root}/{owner}/posts/{item.id}/{filename}"
        return _DUPLICATE_SLASHES.sub(r"\1", url)

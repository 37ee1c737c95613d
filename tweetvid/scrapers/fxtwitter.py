from __future__ import annotations

from typing import Any

from tweetvid.config import settings
from tweetvid.scrapers.base import BaseStrategy, ResolvedMedia, StrategyOutcome
from tweetvid.utils.formatters import DEFAULT_TITLE, build_filename
from tweetvid.utils.post_reference import PostReference


class FxTwitterStrategy(BaseStrategy):
    """Ask the fxtwitter mirror API for the post's media.

    Only the post id is used, so this works whatever host the link was on.
    """

    name = "fxtwitter"

    def __init__(
        self,
        api_base: str | None = None,
        headers: dict[str, str] | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        super().__init__(timeout_seconds)
        self._api_base = (api_base or settings.mirror_api_base).rstrip("/")
        self._headers = (
            headers if headers is not None else {"User-Agent": settings.mirror_user_agent}
        )

    def api_url(self, post_id: str) -> str:
        return f"{self._api_base}/status/{post_id}"

    async def _resolve(self, reference: PostReference) -> StrategyOutcome:
        data = await self._fetch_json(self.api_url(reference.post_id), self._headers)
        return self.parse_tweet(data, reference)

    def parse_tweet(self, data: dict[str, Any], reference: PostReference) -> StrategyOutcome:
        """Turn an fxtwitter ``{"tweet": {...}}`` payload into ResolvedMedia."""
        tweet = data.get("tweet")
        if not tweet:
            return None

        videos = (tweet.get("media") or {}).get("videos") or []
        if not videos:
            return None

        video = videos[0]
        video_url = video.get("url")
        if not video_url:
            return None

        title = tweet.get("text") or DEFAULT_TITLE
        height = video.get("height")

        return ResolvedMedia(
            url=video_url,
            title=title,
            filename=build_filename(title, reference.post_id),
            quality=f"{height}p" if height else "auto",
            strategy=self.name,
        )

from __future__ import annotations

from urllib.parse import urlparse, urlunparse

from tweetvid.config import settings
from tweetvid.scrapers.base import BaseStrategy, ResolvedMedia, StrategyOutcome
from tweetvid.scrapers.patterns import MOBILE_PATTERNS, collect_candidates, is_mobile_video
from tweetvid.utils.formatters import build_filename
from tweetvid.utils.post_reference import PostReference


def mobile_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.mobile_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": settings.accept_language,
        "Connection": "keep-alive",
    }


class MobilePageStrategy(BaseStrategy):
    """Scrape the mobile rendering, which uses different markup."""

    name = "mobile"

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        mobile_host: str | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        super().__init__(timeout_seconds)
        self._headers = headers if headers is not None else mobile_headers()
        self._mobile_host = mobile_host or settings.mobile_host

    def to_mobile_url(self, url: str) -> str:
        """Swap the host for the mobile one, keeping path and query."""
        return urlunparse(urlparse(url)._replace(netloc=self._mobile_host))

    async def _resolve(self, reference: PostReference) -> StrategyOutcome:
        body = await self._fetch_text(self.to_mobile_url(reference.url), self._headers)
        return self.parse_page(body, reference)

    def parse_page(self, body: str, reference: PostReference) -> StrategyOutcome:
        candidates = [
            url for url in collect_candidates(body, MOBILE_PATTERNS)
            if is_mobile_video(url)
        ]
        if not candidates:
            return None

        title = f"twitter_video_{reference.post_id}"
        return ResolvedMedia(
            url=candidates[0],
            title=title,
            filename=build_filename(title),
            quality="auto",
            strategy=self.name,
        )

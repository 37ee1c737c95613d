from __future__ import annotations

import structlog

from tweetvid.config import settings
from tweetvid.scrapers.base import BaseStrategy, ResolvedMedia, StrategyOutcome
from tweetvid.scrapers.patterns import (
    DESKTOP_PATTERNS,
    collect_candidates,
    is_plausible_video,
)
from tweetvid.utils.formatters import build_filename
from tweetvid.utils.opengraph import extract_title
from tweetvid.utils.post_reference import PostReference

logger = structlog.get_logger()


def desktop_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.desktop_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": settings.accept_language,
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


class DesktopPageStrategy(BaseStrategy):
    """Scrape the desktop rendering of the post page."""

    name = "desktop"

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        super().__init__(timeout_seconds)
        self._headers = headers if headers is not None else desktop_headers()

    async def _resolve(self, reference: PostReference) -> StrategyOutcome:
        body = await self._fetch_text(reference.url, self._headers)
        return self.parse_page(body, reference)

    def parse_page(self, body: str, reference: PostReference) -> StrategyOutcome:
        candidates = [
            url for url in collect_candidates(body, DESKTOP_PATTERNS)
            if is_plausible_video(url)
        ]
        if not candidates:
            return None

        logger.debug("desktop_candidates", post_id=reference.post_id, count=len(candidates))

        # The longest URL usually carries the highest resolution path.
        video_url = max(candidates, key=len)
        title = extract_title(body)

        return ResolvedMedia(
            url=video_url,
            title=title,
            filename=build_filename(title, reference.post_id),
            quality="auto",
            strategy=self.name,
        )

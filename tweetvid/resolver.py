from __future__ import annotations

import time
from collections.abc import Sequence
from pathlib import Path

import structlog

from tweetvid.errors import NoVideoFound
from tweetvid.scrapers import default_strategies
from tweetvid.scrapers.base import BaseStrategy, ResolvedMedia
from tweetvid.utils.media_handler import save_media
from tweetvid.utils.post_reference import parse_post_reference

logger = structlog.get_logger()


class VideoResolver:
    """Run strategies in priority order until one returns a video.

    Each strategy gets exactly one attempt, one at a time. The first
    non-empty outcome wins; if none produce anything, NoVideoFound is raised.
    """

    def __init__(self, strategies: Sequence[BaseStrategy] | None = None) -> None:
        self._strategies = list(strategies) if strategies is not None else default_strategies()

    @property
    def strategies(self) -> list[BaseStrategy]:
        return list(self._strategies)

    async def resolve(self, url: str) -> ResolvedMedia:
        reference = parse_post_reference(url)
        log = logger.bind(post_id=reference.post_id)
        log.info("resolving_post", url=reference.url)

        for strategy in self._strategies:
            start = time.monotonic()
            outcome = await strategy.attempt(reference)
            duration_ms = int((time.monotonic() - start) * 1000)
            if outcome is not None:
                log.info(
                    "media_resolved",
                    strategy=strategy.name,
                    duration_ms=duration_ms,
                    title=outcome.title,
                    quality=outcome.quality,
                )
                return outcome
            log.info("strategy_exhausted", strategy=strategy.name, duration_ms=duration_ms)

        log.error("all_strategies_exhausted", strategies=[s.name for s in self._strategies])
        raise NoVideoFound(reference.post_id)

    async def download(self, url: str, output_dir: str | Path) -> Path:
        """Resolve *url* and save the video under *output_dir*."""
        media = await self.resolve(url)
        return await save_media(media, output_dir)

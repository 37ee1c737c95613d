from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, TypeAlias

import aiohttp
import structlog

from tweetvid.config import settings
from tweetvid.errors import StrategyFault
from tweetvid.utils.post_reference import PostReference

logger = structlog.get_logger()


@dataclass(frozen=True)
class MediaCandidate:
    """One discovered encoding of a video."""

    url: str
    content_type: str = "video/mp4"
    bitrate: int | None = None

    @property
    def is_video(self) -> bool:
        return self.content_type.startswith("video/")

    @classmethod
    def from_variant(cls, variant: dict[str, Any]) -> MediaCandidate:
        """Build from a ``{"url", "content_type", "bitrate"}`` variant dict.

        For callers of the standalone ``select_best_variant`` who hold raw
        API ``variants`` lists; no strategy goes through it.
        """
        return cls(
            url=variant["url"],
            content_type=variant.get("content_type", ""),
            bitrate=variant.get("bitrate"),
        )


@dataclass(frozen=True)
class ResolvedMedia:
    """The video chosen for download."""

    url: str
    title: str
    filename: str
    quality: str = "auto"
    strategy: str = "unknown"

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


# None means "no result".
StrategyOutcome: TypeAlias = ResolvedMedia | None


class BaseStrategy(ABC):
    """One independent attempt at resolving a post's video.

    Subclasses implement `_resolve`. `attempt` is the boundary: whatever
    `_resolve` raises is logged and turned into ``None`` so the resolver can
    move on to the next strategy.
    """

    name: str = "base"

    def __init__(self, timeout_seconds: int | None = None) -> None:
        if timeout_seconds is None:
            timeout_seconds = settings.request_timeout_seconds
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def attempt(self, reference: PostReference) -> StrategyOutcome:
        start = time.monotonic()
        try:
            result = await self._resolve(reference)
        except aiohttp.ClientResponseError as exc:
            logger.warning(
                "strategy_fetch_failed",
                strategy=self.name,
                post_id=reference.post_id,
                status=exc.status,
                error=exc.message,
                duration_ms=int((time.monotonic() - start) * 1000),
            )
            return None
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning(
                "strategy_fetch_failed",
                strategy=self.name,
                post_id=reference.post_id,
                error=str(exc) or type(exc).__name__,
                duration_ms=int((time.monotonic() - start) * 1000),
            )
            return None
        except Exception as exc:
            logger.warning(
                "strategy_failed",
                strategy=self.name,
                post_id=reference.post_id,
                error=str(exc),
                error_type=type(exc).__name__,
                duration_ms=int((time.monotonic() - start) * 1000),
            )
            return None

        if result is None:
            logger.info(
                "strategy_no_result",
                strategy=self.name,
                post_id=reference.post_id,
                duration_ms=int((time.monotonic() - start) * 1000),
            )
        return result

    @abstractmethod
    async def _resolve(self, reference: PostReference) -> StrategyOutcome:
        """Strategy-specific extraction. May raise; `attempt` absorbs it."""
        ...

    async def _fetch_text(self, url: str, headers: dict[str, str]) -> str:
        async with aiohttp.ClientSession() as session:
            async with session.get(
                url,
                headers=headers,
                timeout=self._timeout,
                allow_redirects=True,
            ) as resp:
                resp.raise_for_status()
                return await resp.text(encoding="utf-8", errors="ignore")

    async def _fetch_json(self, url: str, headers: dict[str, str]) -> dict[str, Any]:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, headers=headers, timeout=self._timeout) as resp:
                resp.raise_for_status()
                data = await resp.json(content_type=None)
        if not isinstance(data, dict):
            raise StrategyFault(f"expected a JSON object, got {type(data).__name__}")
        return data

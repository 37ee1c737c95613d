import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest

from tweetvid.errors import StrategyFault
from tweetvid.scrapers.base import BaseStrategy, ResolvedMedia
from tweetvid.utils.post_reference import parse_post_reference

REF = parse_post_reference("https://x.com/user/status/1")


class DummyStrategy(BaseStrategy):
    name = "dummy"

    async def _resolve(self, reference):
        return ResolvedMedia(
            url="https://video.twimg.com/a.mp4",
            title="primary",
            filename=f"primary_{reference.post_id}.mp4",
            strategy=self.name,
        )


class RaisingStrategy(BaseStrategy):
    name = "raising"

    def __init__(self, exc: BaseException) -> None:
        super().__init__()
        self._exc = exc

    async def _resolve(self, reference):
        raise self._exc


class EmptyStrategy(BaseStrategy):
    name = "empty"

    async def _resolve(self, reference):
        return None


@pytest.mark.asyncio
async def test_attempt_returns_result():
    result = await DummyStrategy().attempt(REF)
    assert result.title == "primary"
    assert result.filename == "primary_1.mp4"


@pytest.mark.asyncio
async def test_attempt_empty_is_none():
    assert await EmptyStrategy().attempt(REF) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        aiohttp.ClientResponseError(
            request_info=MagicMock(), history=(), status=429, message="Too Many Requests"
        ),
        aiohttp.ClientConnectionError("refused"),
        asyncio.TimeoutError(),
        StrategyFault("bad payload"),
        KeyError("tweet"),
        RuntimeError("anything else"),
    ],
)
async def test_attempt_absorbs_faults(exc):
    assert await RaisingStrategy(exc).attempt(REF) is None


@pytest.mark.asyncio
async def test_cancellation_is_not_absorbed():
    with pytest.raises(asyncio.CancelledError):
        await RaisingStrategy(asyncio.CancelledError()).attempt(REF)


def test_resolved_media_is_immutable():
    media = ResolvedMedia(url="u", title="t", filename="f.mp4")
    with pytest.raises(AttributeError):
        media.url = "other"  # type: ignore[misc]


def test_resolved_media_to_dict():
    media = ResolvedMedia(url="u", title="t", filename="f.mp4", quality="720p", strategy="s")
    assert media.to_dict() == {
        "url": "u",
        "title": "t",
        "filename": "f.mp4",
        "quality": "720p",
        "strategy": "s",
    }

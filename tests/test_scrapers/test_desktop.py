from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from tweetvid.scrapers.desktop import DesktopPageStrategy, desktop_headers
from tweetvid.utils.post_reference import parse_post_reference

REF = parse_post_reference("https://x.com/user/status/1234567890")

PAGE = """
<html><head>
<title>Ignored title / X</title>
<meta property="og:description" content="Watch this! 🚀 / Twitter" />
</head><body>
<video src="https://video.twimg.com/ext_tw_video/1/pu/vid/320x568/low.mp4"></video>
<script>{"video_info": {"variants": ["https://video.twimg.com/ext_tw_video/1/pu/vid/720x1280/high_quality.mp4?tag=12"]}}</script>
</body></html>
"""


def _make_text_response(body: str):
    """Create an aiohttp-compatible async context-manager mock response."""
    mock_resp = AsyncMock()
    mock_resp.raise_for_status = MagicMock()
    mock_resp.text = AsyncMock(return_value=body)
    mock_resp.__aenter__ = AsyncMock(return_value=mock_resp)
    mock_resp.__aexit__ = AsyncMock(return_value=False)
    return mock_resp


def _make_mock_session(response):
    """Create an aiohttp.ClientSession mock that returns *response* on get()."""
    mock_session = AsyncMock()
    mock_session.get = MagicMock(return_value=response)
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=False)
    return mock_session


@pytest.mark.asyncio
async def test_desktop_picks_longest_url_and_og_title():
    mock_session = _make_mock_session(_make_text_response(PAGE))

    with patch("aiohttp.ClientSession", return_value=mock_session):
        result = await DesktopPageStrategy().attempt(REF)

    assert result is not None
    assert result.url.endswith("720x1280/high_quality.mp4?tag=12")
    assert result.title == "Watch this! 🚀"
    assert result.filename == "watch_this_1234567890.mp4"
    assert result.quality == "auto"
    assert result.strategy == "desktop"


@pytest.mark.asyncio
async def test_desktop_fetches_original_url_with_browser_headers():
    mock_session = _make_mock_session(_make_text_response(PAGE))

    with patch("aiohttp.ClientSession", return_value=mock_session):
        await DesktopPageStrategy().attempt(REF)

    args, kwargs = mock_session.get.call_args
    assert args[0] == "https://x.com/user/status/1234567890"
    assert kwargs["headers"] == desktop_headers()
    assert "Mozilla" in kwargs["headers"]["User-Agent"]


@pytest.mark.asyncio
async def test_desktop_injected_headers_used():
    mock_session = _make_mock_session(_make_text_response(PAGE))
    headers = {"User-Agent": "custom/1.0"}

    with patch("aiohttp.ClientSession", return_value=mock_session):
        await DesktopPageStrategy(headers=headers).attempt(REF)

    assert mock_session.get.call_args[1]["headers"] == headers


@pytest.mark.asyncio
async def test_desktop_no_video_returns_none():
    body = '<html><img src="https://pbs.twimg.com/media/pic.jpg"></html>'
    mock_session = _make_mock_session(_make_text_response(body))

    with patch("aiohttp.ClientSession", return_value=mock_session):
        result = await DesktopPageStrategy().attempt(REF)

    assert result is None


@pytest.mark.asyncio
async def test_desktop_http_error_returns_none():
    error_resp = _make_text_response("")
    error_resp.raise_for_status = MagicMock(
        side_effect=aiohttp.ClientResponseError(
            request_info=MagicMock(), history=(), status=403, message="Forbidden"
        )
    )
    mock_session = _make_mock_session(error_resp)

    with patch("aiohttp.ClientSession", return_value=mock_session):
        result = await DesktopPageStrategy().attempt(REF)

    assert result is None


@pytest.mark.asyncio
async def test_desktop_connection_error_returns_none():
    mock_session = _make_mock_session(None)
    mock_session.get = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))

    with patch("aiohttp.ClientSession", return_value=mock_session):
        result = await DesktopPageStrategy().attempt(REF)

    assert result is None


class TestParsePage:
    def test_title_default_when_missing(self):
        body = '"https://video.twimg.com/tweet_video/gif.mp4"'
        result = DesktopPageStrategy().parse_page(body, REF)
        assert result.title == "twitter_video"
        assert result.filename == "twitter_video_1234567890.mp4"

    def test_title_from_page_title(self):
        body = (
            "<title>Someone on X: clip / X</title>"
            '"https://video.twimg.com/tweet_video/gif.mp4"'
        )
        result = DesktopPageStrategy().parse_page(body, REF)
        assert result.title == "Someone on X: clip"

    def test_longest_tie_keeps_first(self):
        body = (
            '"https://video.twimg.com/amplify_video/1/aaaa.mp4" '
            '"https://video.twimg.com/amplify_video/1/bbbb.mp4"'
        )
        result = DesktopPageStrategy().parse_page(body, REF)
        assert result.url == "https://video.twimg.com/amplify_video/1/aaaa.mp4"

    def test_escaped_playback_url(self):
        body = '<script>{"playback_url":"https:\\/\\/video.twimg.com\\/amplify_video\\/7\\/pl.m3u8"}</script>'
        result = DesktopPageStrategy().parse_page(body, REF)
        assert result.url == "https://video.twimg.com/amplify_video/7/pl.m3u8"

"""Named regex groups used by the page scrapers to find video URLs.

Each group declares how a match turns into URLs:

- ``DIRECT_URL``: the whole match is the URL.
- ``EMBEDDED_JSON``: the match is a JSON block; every ``inner`` hit inside it
  is a URL.
- ``ESCAPED_FIELD``: group 1 is a JSON string value whose slashes may be
  escaped (``\\u002F`` or ``\\/``).
- ``QUOTED_FIELD``: the first ``https://`` run inside the match is the URL,
  falling back to the whole match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum


class Extraction(StrEnum):
    DIRECT_URL = "direct-url"
    EMBEDDED_JSON = "embedded-json"
    ESCAPED_FIELD = "escaped-field"
    QUOTED_FIELD = "quoted-field"


_QUOTED_URL = re.compile(r"https://[^\"'\s]+")
_ESCAPED_SLASH = re.compile(r"\\u002F|\\/", re.IGNORECASE)

VIDEO_HOST = "video.twimg.com"


@dataclass(frozen=True)
class PatternGroup:
    name: str
    pattern: re.Pattern[str]
    extraction: Extraction
    inner: re.Pattern[str] | None = None

    def extract(self, body: str) -> list[str]:
        """Return every URL this group yields for *body*, in match order."""
        urls: list[str] = []
        for match in self.pattern.finditer(body):
            if self.extraction is Extraction.DIRECT_URL:
                urls.append(match.group(0))
            elif self.extraction is Extraction.EMBEDDED_JSON:
                urls.extend(self.inner.findall(match.group(0)))
            elif self.extraction is Extraction.ESCAPED_FIELD:
                urls.append(_ESCAPED_SLASH.sub("/", match.group(1)))
            else:
                found = _QUOTED_URL.search(match.group(0))
                urls.append(found.group(0) if found else match.group(0))
        return urls


DESKTOP_PATTERNS: tuple[PatternGroup, ...] = (
    PatternGroup(
        "direct_file",
        re.compile(r'https://video\.twimg\.com/[^"]+\.mp4[^"]*'),
        Extraction.DIRECT_URL,
    ),
    PatternGroup(
        "amplified",
        re.compile(r'https://video\.twimg\.com/amplify_video/[^"]+'),
        Extraction.DIRECT_URL,
    ),
    PatternGroup(
        "video_info",
        re.compile(r'"video_info":\s*\{[^}]+\}'),
        Extraction.EMBEDDED_JSON,
        inner=re.compile(r'https://video\.twimg\.com/[^"]+'),
    ),
    PatternGroup(
        "playback_url",
        re.compile(r'<script[^>]*>.*?"playback_url":"([^"]*)".*?</script>', re.DOTALL),
        Extraction.ESCAPED_FIELD,
    ),
)

MOBILE_PATTERNS: tuple[PatternGroup, ...] = (
    PatternGroup(
        "direct_file",
        re.compile(r"https://video\.twimg\.com/[^\"'\s]+\.mp4[^\"'\s]*"),
        Extraction.DIRECT_URL,
    ),
    PatternGroup(
        "amplified",
        re.compile(r"https://video\.twimg\.com/amplify_video/[^\"'\s]+"),
        Extraction.DIRECT_URL,
    ),
    PatternGroup(
        "playback_url",
        re.compile(r'"playback_url":"([^"]+)"'),
        Extraction.QUOTED_FIELD,
    ),
    PatternGroup(
        "video_url",
        re.compile(r"video_url['\"]\s*:\s*['\"]([^'\"]+)['\"]"),
        Extraction.QUOTED_FIELD,
    ),
)


def collect_candidates(body: str, groups: tuple[PatternGroup, ...]) -> list[str]:
    """Pool the URLs of every group, deduplicated, first occurrence kept."""
    pooled: list[str] = []
    for group in groups:
        pooled.extend(group.extract(body))
    return list(dict.fromkeys(pooled))


def is_plausible_video(url: str) -> bool:
    return ".mp4" in url or "video" in url


def is_mobile_video(url: str) -> bool:
    return VIDEO_HOST in url and (".mp4" in url or "amplify" in url)

"""Pull Open Graph metadata and the page title out of a raw HTML body.

The desktop scraper uses this to name the downloaded file after the post text.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

from tweetvid.utils.formatters import clean_title

# og: meta tags, either attribute order, either quote style. The content
# value runs to its own closing quote so apostrophes in "..." survive.
_CONTENT = r"""content\s*=\s*(?:"([^"]*)"|'([^']*)')"""
_OG_PATTERN = re.compile(
    r'<meta\s+(?:[^>]*?)'
    r'(?:property|name)\s*=\s*["\']og:(\w+)["\']'
    r'[^>]*?' + _CONTENT,
    re.IGNORECASE | re.DOTALL,
)
_OG_PATTERN_REV = re.compile(
    r'<meta\s+(?:[^>]*?)' + _CONTENT +
    r'[^>]*?(?:property|name)\s*=\s*["\']og:(\w+)["\']',
    re.IGNORECASE | re.DOTALL,
)
_TITLE_PATTERN = re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE)


@dataclass
class OpenGraphData:
    image: str | None = None
    title: str | None = None
    description: str | None = None
    site_name: str | None = None


def parse_opengraph(body: str) -> OpenGraphData:
    """Extract Open Graph meta tags from an HTML document."""
    found: dict[str, str] = {}

    for match in _OG_PATTERN.finditer(body):
        key = match.group(1).lower()
        value = match.group(2) if match.group(2) is not None else match.group(3)
        found.setdefault(key, html.unescape(value))

    for match in _OG_PATTERN_REV.finditer(body):
        value = match.group(1) if match.group(1) is not None else match.group(2)
        key = match.group(3).lower()
        if key not in found:  # don't override
            found[key] = html.unescape(value)

    return OpenGraphData(
        image=found.get("image"),
        title=found.get("title"),
        description=found.get("description"),
        site_name=found.get("site_name"),
    )


def page_title(body: str) -> str | None:
    match = _TITLE_PATTERN.search(body)
    return html.unescape(match.group(1)) if match else None


def extract_title(body: str) -> str:
    """og:description, then <title>, minus the trailing site name."""
    og = parse_opengraph(body)
    raw = og.description or page_title(body)
    return clean_title(raw)

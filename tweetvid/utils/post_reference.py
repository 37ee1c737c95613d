from __future__ import annotations

import re
from dataclasses import dataclass

from tweetvid.errors import InvalidReference


@dataclass(frozen=True)
class PostReference:
    post_id: str
    url: str


# Handle, then /status/<digits>, then end of string or the start of a
# trailing path, query or fragment.
_POST_URL_PATTERN = re.compile(
    r"^https?://(?:(?:www|mobile|m)\.)?(?:twitter\.com|x\.com)"
    r"/\w+/status/([0-9]+)(?=[/?#]|$)",
    re.IGNORECASE,
)


def parse_post_reference(url: str) -> PostReference:
    """Validate a post link and extract its numeric post id.

    Raises InvalidReference for anything that is not a twitter.com / x.com
    status URL. Never touches the network.
    """
    url = url.strip()
    match = _POST_URL_PATTERN.match(url)
    if match is None:
        raise InvalidReference(url)
    return PostReference(post_id=match.group(1), url=url)


def is_valid_post_url(url: str) -> bool:
    return _POST_URL_PATTERN.match(url.strip()) is not None

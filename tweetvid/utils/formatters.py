from __future__ import annotations

import re

DEFAULT_TITLE = "twitter_video"
MAX_FILENAME_LENGTH = 100

_UNSAFE_RUN = re.compile(r"[^a-z0-9]+")
_SITE_SUFFIX = re.compile(r"\s+/\s*(?:Twitter|X)\s*$")


def sanitize_filename(title: str, max_len: int = MAX_FILENAME_LENGTH) -> str:
    """Reduce a title to a lowercase ASCII slug safe for any filesystem.

    Runs of anything outside [a-z0-9] collapse to a single underscore, and the
    result is cut to *max_len* characters to avoid ENAMETOOLONG.
    """
    slug = _UNSAFE_RUN.sub("_", title.lower()).strip("_")
    slug = slug[:max_len].rstrip("_")
    return slug or DEFAULT_TITLE


def build_filename(title: str, post_id: str | None = None, ext: str = "mp4") -> str:
    """Build ``<slug>_<post_id>.<ext>`` (or ``<slug>.<ext>`` without an id)."""
    slug = sanitize_filename(title)
    if post_id:
        return f"{slug}_{post_id}.{ext}"
    return f"{slug}.{ext}"


def clean_title(raw: str | None) -> str:
    """Strip the trailing site name from a page title, defaulting when empty."""
    if not raw:
        return DEFAULT_TITLE
    title = _SITE_SUFFIX.sub("", raw).strip()
    return title or DEFAULT_TITLE

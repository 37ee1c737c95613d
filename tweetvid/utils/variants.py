from __future__ import annotations

from collections.abc import Iterable

from tweetvid.scrapers.base import MediaCandidate


def select_best_variant(candidates: Iterable[MediaCandidate]) -> MediaCandidate | None:
    """Pick the video variant with the highest declared bitrate.

    Variants without a bitrate rank below any that declare one. Ties keep the
    first one seen. Returns None when there is no video variant at all.
    """
    unique: dict[str, MediaCandidate] = {}
    for candidate in candidates:
        unique.setdefault(candidate.url, candidate)
    videos = [c for c in unique.values() if c.is_video]

    best: MediaCandidate | None = None
    for current in videos:
        if best is None:
            best = current
        elif current.bitrate is None:
            continue
        elif best.bitrate is None or current.bitrate > best.bitrate:
            best = current
    return best

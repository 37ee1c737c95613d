from __future__ import annotations


class TweetVidError(Exception):
    """Base class for errors raised by tweetvid."""


class InvalidReference(TweetVidError, ValueError):
    """The input link is not a recognised post URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Not a valid Twitter/X post URL: {url!r}")


class StrategyFault(TweetVidError):
    """A single strategy failed to parse its response (triggers fallback)."""


class NoVideoFound(TweetVidError):
    """Every strategy came back empty for a post."""

    def __init__(self, post_id: str) -> None:
        self.post_id = post_id
        super().__init__(
            f"Failed to extract video information from post {post_id}. "
            "The post may not contain a video or may be private."
        )


class PersistenceFault(TweetVidError):
    """Downloading or writing the resolved media failed."""

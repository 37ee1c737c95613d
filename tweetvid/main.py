from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence

import structlog

from tweetvid.config import settings
from tweetvid.errors import TweetVidError
from tweetvid.resolver import VideoResolver
from tweetvid.utils.post_reference import is_valid_post_url


def configure_logging(log_level: str | None = None) -> None:
    """Set up structlog with JSON rendering for pipes, pretty for terminals."""
    level = (log_level or settings.log_level).upper()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
            if sys.stderr.isatty()
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level, logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tweetvid",
        description="Download the video attached to a Twitter/X post.",
        epilog="Example: tweetvid https://x.com/user/status/1234567890",
    )
    parser.add_argument("url", help="Twitter/X post URL containing a video")
    parser.add_argument(
        "-o",
        "--output",
        default=settings.output_dir,
        help="Output directory (default: %(default)s)",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print the resolved video as JSON instead of downloading it",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL setting)",
    )
    return parser


async def run(args: argparse.Namespace, resolver: VideoResolver | None = None) -> int:
    resolver = resolver or VideoResolver()

    if args.info:
        media = await resolver.resolve(args.url)
        print(json.dumps(media.to_dict(), indent=2, ensure_ascii=False))
        return 0

    path = await resolver.download(args.url, args.output)
    print(path)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if not is_valid_post_url(args.url):
        print("Invalid Twitter/X URL. Please provide a valid post URL.", file=sys.stderr)
        return 1

    try:
        return asyncio.run(run(args))
    except TweetVidError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())

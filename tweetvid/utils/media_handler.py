from __future__ import annotations

import asyncio
from pathlib import Path

import aiohttp
import structlog

from tweetvid.config import settings
from tweetvid.errors import PersistenceFault
from tweetvid.scrapers.base import ResolvedMedia

logger = structlog.get_logger()

_CHUNK_SIZE = 64 * 1024


async def save_media(
    media: ResolvedMedia,
    output_dir: str | Path,
    session: aiohttp.ClientSession | None = None,
) -> Path:
    """Stream *media* to ``<output_dir>/<filename>`` and return the path.

    The directory is created if needed. A partially written file is removed
    before PersistenceFault is raised.
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PersistenceFault(f"Cannot create output directory {output_dir}: {exc}") from exc

    target = output_dir / media.filename
    own_session = session is None
    if own_session:
        session = aiohttp.ClientSession()

    written = 0
    try:
        async with session.get(
            media.url,
            headers={"User-Agent": settings.download_user_agent},
            timeout=aiohttp.ClientTimeout(total=settings.download_timeout_seconds),
        ) as resp:
            resp.raise_for_status()
            with target.open("wb") as fh:
                async for chunk in resp.content.iter_chunked(_CHUNK_SIZE):
                    fh.write(chunk)
                    written += len(chunk)
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
        target.unlink(missing_ok=True)
        logger.error("media_download_failed", url=media.url, path=str(target), error=str(exc))
        raise PersistenceFault(f"Download failed: {str(exc) or type(exc).__name__}") from exc
    finally:
        if own_session:
            await session.close()

    logger.info(
        "media_saved",
        path=str(target),
        size_mb=round(written / 1024 / 1024, 1),
        quality=media.quality,
    )
    return target

import asyncio
import logging

import aiohttp
from yarl import URL

from .models import Target, WorkerResult
from .utils import now

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


def build_request_url(url: str) -> URL:
    """Turn ``url`` into a request target, raising ``aiohttp.InvalidURL`` if it cannot be sent."""
    try:
        parsed = URL(url)
    except (ValueError, TypeError) as e:
        raise aiohttp.InvalidURL(url, str(e)) from e
    if not parsed.is_absolute() or parsed.scheme not in SUPPORTED_SCHEMES or not parsed.host:
        raise aiohttp.InvalidURL(url, "expected an absolute http(s) URL")
    return parsed


async def execute(
    session: aiohttp.ClientSession, target: Target, worker_id: int
) -> WorkerResult:
    """Perform one GET against ``target`` and classify it. Never retries."""
    try:
        url = build_request_url(target.url)
    except aiohttp.InvalidURL as e:
        logger.debug(f"[W{worker_id}] create request for {target.url}: {e}")
        return WorkerResult(success=False, latency=0.0, worker_id=worker_id)

    start = now()
    try:
        async with session.get(url) as resp:
            content = await resp.read()
            status = resp.status
        latency = now() - start
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
        latency = now() - start
        logger.debug(f"[W{worker_id}] perform request for {target.url}: {e!r}")
        return WorkerResult(success=False, latency=latency, worker_id=worker_id)

    logger.debug(
        f"[W{worker_id}] Fetched {target.url}: status={status}, "
        f"size={len(content)} bytes, latency={latency:.4f}s"
    )
    return WorkerResult(
        success=status == target.success_status_code,
        latency=latency,
        worker_id=worker_id,
    )

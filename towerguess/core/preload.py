"""
Media preload barrier

Waits until every image has either loaded or failed, or until the timeout
expires. Individual failures never block the barrier.
"""
import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List

from towerguess.models import PreloadReport


logger = logging.getLogger(__name__)

# Resolves True when the media behind a catalog URL is available
MediaProbe = Callable[[str], Awaitable[bool]]


class LocalMediaProbe:
    """Probe catalog URLs against the image folder on disk"""

    def __init__(self, images_dir: str, url_prefix: str = "/images"):
        self.images_dir = Path(images_dir).resolve()
        self.url_prefix = url_prefix.rstrip("/") + "/"

    def resolve_path(self, url: str) -> Path:
        if not url.startswith(self.url_prefix):
            raise ValueError(f"URL outside image prefix: {url}")
        path = (self.images_dir / url[len(self.url_prefix):]).resolve()
        if self.images_dir not in path.parents:
            raise ValueError(f"URL escapes image folder: {url}")
        return path

    async def __call__(self, url: str) -> bool:
        path = self.resolve_path(url)
        size = await asyncio.to_thread(lambda: path.stat().st_size)
        return size > 0


async def _settle(probe: MediaProbe, url: str) -> bool:
    try:
        return bool(await probe(url))
    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.debug(f"Preload failed for {url}: {type(e).__name__}: {e}")
        return False


async def preload_all(urls: List[str], probe: MediaProbe, timeout: float) -> PreloadReport:
    """
    Probe every URL concurrently and wait for all of them, bounded by timeout

    Duplicate URLs are probed independently.

    Args:
        urls: Catalog URLs of the pool
        probe: Async media check
        timeout: Upper bound in seconds; unresolved probes are cancelled

    Returns:
        PreloadReport with loaded/failed counts and the timeout flag
    """
    report = PreloadReport(total=len(urls))
    if not urls:
        return report

    tasks = [asyncio.ensure_future(_settle(probe, url)) for url in urls]
    done, pending = await asyncio.wait(tasks, timeout=timeout)

    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
        report.timed_out = True
        logger.warning(f"⚠️ Preload timed out after {timeout}s with {len(pending)}/{len(urls)} images unresolved")

    for task in done:
        if task.result():
            report.loaded += 1
        else:
            report.failed += 1

    logger.info(f"Preloaded {report.loaded}/{report.total} images ({report.failed} failed)")
    return report

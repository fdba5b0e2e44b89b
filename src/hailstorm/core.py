import asyncio
import logging

import aiohttp
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .barrier import WaitGroup
from .collector import Collector
from .config import LoadConfig
from .errors import IncompleteRunError
from .metrics import compute_stats
from .models import ProgressCallback, ResultSet, Statistics, Target, WorkerResult
from .requester import execute
from .utils import get_default_headers, now

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(
        self,
        target: Target,
        workers: int = 1,
        requests_per_worker: int = 1,
        default_headers: dict[str, str] | None = None,
        use_progress_bar: bool = False,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError("must use at least one worker")
        if requests_per_worker < 1:
            raise ValueError("must perform at least one request")

        self.target = target
        self.workers = workers
        self.requests_per_worker = requests_per_worker
        self.default_headers = get_default_headers(default_headers)
        self.use_progress_bar = use_progress_bar
        self.progress_callback = progress_callback

        self._completed = 0

        logger.info(
            f"Initialized Dispatcher for {target.url}: workers={workers}, "
            f"requests_per_worker={requests_per_worker}, "
            f"success_status={target.success_status_code}"
        )

    @property
    def total_requests(self) -> int:
        return self.workers * self.requests_per_worker

    # ────────────────────────────────
    # Worker Loop
    # ────────────────────────────────

    async def _worker(
        self,
        session: aiohttp.ClientSession,
        collector: Collector,
        wg: WaitGroup,
        worker_id: int,
    ) -> None:
        for _ in range(self.requests_per_worker):
            result = await execute(session, self.target, worker_id)
            await collector.put(result)
            wg.done()
        logger.debug(f"Worker {worker_id} finished {self.requests_per_worker} requests")

    # ────────────────────────────────
    # Main Runner
    # ────────────────────────────────

    async def run(self) -> ResultSet:
        logger.info(f"Starting {self.total_requests} requests with {self.workers} workers")
        self._completed = 0

        progress = None
        task_id = None
        if self.use_progress_bar:
            progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=Console(stderr=True),
                transient=True,
            )
            progress.start()
            task_id = progress.add_task("[cyan]Hailing...", total=self.total_requests)

        def on_result(result: WorkerResult) -> None:
            self._completed += 1
            if progress and task_id is not None:
                progress.advance(task_id)
            if self.progress_callback:
                self.progress_callback(self._completed, self.total_requests, result.worker_id)

        collector = Collector(expected=self.total_requests, on_result=on_result)
        wg = WaitGroup()
        t0 = now()

        connector = aiohttp.TCPConnector(limit=0)
        timeout = aiohttp.ClientTimeout(total=None)
        try:
            async with aiohttp.ClientSession(
                connector=connector, timeout=timeout, headers=self.default_headers
            ) as session:
                collector.start()

                workers = []
                for worker_id in range(self.workers):
                    wg.add(self.requests_per_worker)
                    workers.append(
                        asyncio.create_task(self._worker(session, collector, wg, worker_id))
                    )

                barrier = asyncio.create_task(wg.wait())
                await asyncio.wait(
                    [barrier, *workers], return_when=asyncio.FIRST_EXCEPTION
                )

                failed = [w for w in workers if w.done() and not w.cancelled() and w.exception()]
                if failed:
                    for task in (barrier, *workers):
                        task.cancel()
                    await asyncio.gather(barrier, *workers, return_exceptions=True)
                    await collector.abort()
                    exc = failed[0].exception()
                    logger.error(f"Worker crashed, aborting run: {exc!r}")
                    raise IncompleteRunError(f"worker failed: {exc!r}") from exc

                results = await collector.close()
        finally:
            if progress:
                progress.stop()

        logger.info(
            f"Run completed: {len(results)} results from {self.workers} workers "
            f"in {now() - t0:.3f}s"
        )
        return results


async def run_load(config: LoadConfig) -> tuple[ResultSet, Statistics]:
    """Run one load test described by ``config`` and reduce its results."""
    target = Target.from_config(config)
    dispatcher = Dispatcher(
        target,
        workers=config.workers,
        requests_per_worker=config.requests_per_worker,
        use_progress_bar=config.progress,
    )
    results = await dispatcher.run()
    stats = compute_stats(results, config.percentiles)
    logger.info(
        f"Stats computed: total={stats.total}, passed={stats.passed}, "
        f"failed={stats.failed}, mean={stats.mean:.4f}s"
    )
    return results, stats


def run_and_report(config: LoadConfig) -> Statistics:
    _, stats = asyncio.run(run_load(config))
    return stats

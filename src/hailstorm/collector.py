import asyncio
import logging
from collections.abc import Callable

from .errors import CollectorClosedError, IncompleteRunError
from .models import ResultSet, WorkerResult

logger = logging.getLogger(__name__)

_CLOSED = object()


class Collector:
    """Single consumer that drains worker results into one ResultSet.

    Any number of workers may ``put`` concurrently; only the drain task
    touches the accumulated records. ``close`` is called once no producer
    remains and returns the finished ResultSet.
    """

    def __init__(
        self,
        expected: int | None = None,
        on_result: Callable[[WorkerResult], None] | None = None,
        maxsize: int = 0,
    ) -> None:
        self.expected = expected
        self.on_result = on_result
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._drain())
            logger.debug("Collector started")

    async def put(self, result: WorkerResult) -> None:
        if self._closed:
            raise CollectorClosedError(
                f"result from worker {result.worker_id} arrived after close"
            )
        await self._queue.put(result)

    async def _drain(self) -> ResultSet:
        records: list[WorkerResult] = []
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                break
            records.append(item)
            if self.on_result:
                self.on_result(item)
        logger.debug(f"Collector drained {len(records)} results")
        return ResultSet(tuple(records))

    async def close(self) -> ResultSet:
        if self._task is None:
            raise RuntimeError("Collector.close() called before start()")
        if self._closed:
            raise CollectorClosedError("collector already closed")
        self._closed = True
        await self._queue.put(_CLOSED)
        results = await self._task

        if self.expected is not None and len(results) != self.expected:
            raise IncompleteRunError(
                f"collected {len(results)} results, expected {self.expected}"
            )
        return results

    async def abort(self) -> None:
        self._closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            logger.debug("Collector aborted")

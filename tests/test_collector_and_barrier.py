import asyncio

import pytest

from hailstorm.barrier import WaitGroup
from hailstorm.collector import Collector
from hailstorm.errors import CollectorClosedError, IncompleteRunError
from hailstorm.models import WorkerResult


def test_collector_gathers_from_many_producers():
    seen = []

    async def scenario():
        collector = Collector(expected=40, on_result=seen.append)
        collector.start()

        async def producer(worker_id):
            for i in range(10):
                await collector.put(WorkerResult(i % 2 == 0, i / 100, worker_id))
                await asyncio.sleep(0)

        await asyncio.gather(*(producer(w) for w in range(4)))
        return await collector.close()

    results = asyncio.run(scenario())
    assert len(results) == 40
    assert len(seen) == 40
    assert {w: len(rs) for w, rs in results.by_worker().items()} == {0: 10, 1: 10, 2: 10, 3: 10}


def test_collector_rejects_put_after_close():
    async def scenario():
        collector = Collector()
        collector.start()
        await collector.close()
        await collector.put(WorkerResult(True, 0.1, 0))

    with pytest.raises(CollectorClosedError):
        asyncio.run(scenario())


def test_collector_detects_missing_results():
    async def scenario():
        collector = Collector(expected=3)
        collector.start()
        await collector.put(WorkerResult(True, 0.1, 0))
        return await collector.close()

    with pytest.raises(IncompleteRunError):
        asyncio.run(scenario())


def test_waitgroup_releases_after_all_done():
    async def scenario():
        wg = WaitGroup()
        wg.add(3)

        async def finish():
            for _ in range(3):
                await asyncio.sleep(0.01)
                wg.done()

        task = asyncio.create_task(finish())
        await asyncio.wait_for(wg.wait(), timeout=1.0)
        await task
        return wg.pending

    assert asyncio.run(scenario()) == 0


def test_waitgroup_negative_counter():
    async def scenario():
        wg = WaitGroup()
        wg.done()

    with pytest.raises(ValueError):
        asyncio.run(scenario())

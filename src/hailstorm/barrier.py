import asyncio
import logging

logger = logging.getLogger(__name__)


class WaitGroup:
    """Completion counter: ``wait()`` returns once every ``add`` has been matched by ``done``."""

    def __init__(self) -> None:
        self._count = 0
        self._zero = asyncio.Event()
        self._zero.set()

    @property
    def pending(self) -> int:
        return self._count

    def add(self, n: int = 1) -> None:
        count = self._count + n
        if count < 0:
            raise ValueError(f"WaitGroup counter went negative ({count})")
        self._count = count
        if count == 0:
            self._zero.set()
            logger.debug("WaitGroup released")
        else:
            self._zero.clear()

    def done(self) -> None:
        self.add(-1)

    async def wait(self) -> None:
        await self._zero.wait()

from collections import defaultdict
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import LoadConfig


DEFAULT_PERCENTILES: tuple[int, ...] = (0, 25, 50, 75, 100)


@dataclass(frozen=True)
class Target:
    url: str
    success_status_code: int = 200

    @classmethod
    def from_config(cls, config: "LoadConfig") -> "Target":
        return cls(url=config.target_url, success_status_code=config.success_status_code)


@dataclass(frozen=True)
class WorkerResult:
    success: bool
    latency: float  # seconds
    worker_id: int


@dataclass(frozen=True)
class ResultSet:
    """Unordered bag of every WorkerResult produced by one run."""

    records: tuple[WorkerResult, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[WorkerResult]:
        return iter(self.records)

    def passed_latencies(self) -> list[float]:
        return [r.latency for r in self.records if r.success]

    def by_worker(self) -> dict[int, list[WorkerResult]]:
        grouped: dict[int, list[WorkerResult]] = defaultdict(list)
        for r in self.records:
            grouped[r.worker_id].append(r)
        return dict(grouped)


@dataclass(frozen=True)
class Statistics:
    total: int
    passed: int
    failed: int
    mean: float
    percentiles: Mapping[int, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "percentiles", MappingProxyType(dict(self.percentiles)))


# Progress callback: (completed, total, worker_id)
ProgressCallback = Callable[[int, int, int], None]

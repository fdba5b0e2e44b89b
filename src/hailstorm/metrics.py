from collections.abc import Iterable, Sequence

from .models import DEFAULT_PERCENTILES, Statistics, WorkerResult


def percentile(sorted_latencies: Sequence[float], p: int) -> float:
    """Nearest-rank percentile of an ascending, non-empty sequence.

    ``k = max(1, ceil(p * n / 100))``; the result is the k-th smallest value,
    so ``p == 0`` is the minimum and ``p == 100`` the maximum.
    """
    if not 0 <= p <= 100:
        raise ValueError(f"percentile rank must be within [0, 100], got {p}")
    n = len(sorted_latencies)
    if n == 0:
        raise ValueError("percentile of an empty sequence")
    k = max(1, -(-p * n // 100))
    return sorted_latencies[k - 1]


def compute_stats(
    results: Iterable[WorkerResult],
    percentiles: Iterable[int] = DEFAULT_PERCENTILES,
) -> Statistics:
    """Reduce a bag of results to Statistics. Input order never matters."""
    total = 0
    latencies: list[float] = []
    for r in results:
        total += 1
        if r.success:
            latencies.append(r.latency)

    passed = len(latencies)
    if not passed:
        return Statistics(total=total, passed=0, failed=total, mean=0.0, percentiles={})

    sl = sorted(latencies)
    # sum over the sorted list so float rounding is independent of arrival order
    mean = sum(sl) / passed

    return Statistics(
        total=total,
        passed=passed,
        failed=total - passed,
        mean=mean,
        percentiles={p: percentile(sl, p) for p in percentiles},
    )

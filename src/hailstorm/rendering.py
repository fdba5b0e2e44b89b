from collections.abc import Sequence

from .models import ResultSet, Statistics

COLUMN = 15


def format_duration(seconds: float) -> str:
    """Compact duration string: ``0s``, ``850ns``, ``12.5µs``, ``3.2ms``, ``1.5s``."""
    if seconds == 0:
        return "0s"
    ns = seconds * 1e9
    if abs(ns) < 1e3:
        return f"{ns:.0f}ns"
    if abs(ns) < 1e6:
        return f"{ns / 1e3:.4g}µs"
    if abs(ns) < 1e9:
        return f"{ns / 1e6:.4g}ms"
    return f"{seconds:.4g}s"


def render_report(stats: Statistics, percentiles: Sequence[int]) -> str:
    lines = ["Requests:"]
    lines.append(" ".join(f"{h:>{COLUMN}}" for h in ("Total", "Passed", "Failed", "Mean")))
    lines.append(
        f"{stats.total:>{COLUMN}d} {stats.passed:>{COLUMN}d} "
        f"{stats.failed:>{COLUMN}d} {format_duration(stats.mean):>{COLUMN}}"
    )
    lines.append("Percentiles:")
    lines.append("".join(f"{p:>{COLUMN - 1}d}% " for p in percentiles))
    values = []
    for p in percentiles:
        v = stats.percentiles.get(p)
        values.append(f"{format_duration(v) if v is not None else '-':>{COLUMN}} ")
    lines.append("".join(values))
    return "\n".join(lines)


def render_latency_histogram(latencies: list[float], bins: int = 20) -> str:
    if not latencies:
        return "No latency data."
    lo, hi = min(latencies), max(latencies)
    if hi <= lo:
        return f"Histogram: single value {format_duration(lo)}"

    width = 40
    counts = [0] * bins
    for x in latencies:
        j = int((x - lo) / (hi - lo) * bins)
        if j == bins:
            j -= 1
        counts[j] += 1

    peak = max(counts)
    lines = []
    for i, c in enumerate(counts):
        left = lo + (hi - lo) * (i / bins)
        right = lo + (hi - lo) * ((i + 1) / bins)
        bar = "#" * max(1, int((c / peak) * width)) if c else ""
        lines.append(f"{format_duration(left):>10} - {format_duration(right):<10} | {bar} ({c})")
    return "Latency Histogram\n" + "\n".join(lines)


def render_worker_breakdown(results: ResultSet) -> str:
    grouped = results.by_worker()
    if not grouped:
        return "No worker data."

    lines = ["Workers:"]
    lines.append(" ".join(f"{h:>{COLUMN}}" for h in ("Worker", "Passed", "Failed", "Mean")))
    for worker_id in sorted(grouped):
        passed = [r.latency for r in grouped[worker_id] if r.success]
        failed = len(grouped[worker_id]) - len(passed)
        mean = sum(passed) / len(passed) if passed else 0.0
        lines.append(
            f"{f'W{worker_id:02d}':>{COLUMN}} {len(passed):>{COLUMN}d} "
            f"{failed:>{COLUMN}d} {format_duration(mean):>{COLUMN}}"
        )
    return "\n".join(lines)

"""
Quick sanity run: a few workers hammering a public endpoint.
Run: uv run examples/hail_on_httpbin.py
"""
import asyncio
import os

from hailstorm import LoadConfig, run_load
from hailstorm.logging_config import setup_logging
from hailstorm.rendering import render_latency_histogram, render_report

URL = os.getenv("HAILSTORM_URL", "https://httpbin.org/get")


async def main():
    setup_logging(level="INFO")
    config = LoadConfig(
        target_url=URL,
        workers=4,
        requests_per_worker=5,
        percentiles=(0, 50, 90, 99, 100),
    )
    results, stats = await run_load(config)
    print(render_report(stats, config.percentiles))
    print()
    print(render_latency_histogram(results.passed_latencies(), bins=12))

if __name__ == "__main__":
    asyncio.run(main())

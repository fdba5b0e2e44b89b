import time

from . import __version__

# ────────────────────────────────
# Time Helpers
# ────────────────────────────────


def now() -> float:
    return time.perf_counter()


# ────────────────────────────────
# Request Headers
# ────────────────────────────────

USER_AGENT = f"hailstorm/{__version__}"


def get_default_headers(base_headers: dict | None = None) -> dict:
    base = base_headers or {}
    return {
        "User-Agent": USER_AGENT,
        "Accept": "*/*",
        **base,
    }

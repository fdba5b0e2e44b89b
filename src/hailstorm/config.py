import argparse
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import DEFAULT_PERCENTILES


class LoadConfig(BaseModel):
    """Validated settings for one load run."""

    model_config = ConfigDict(frozen=True)

    target_url: str
    workers: int = 1
    requests_per_worker: int = 1
    success_status_code: int = Field(200, ge=100, le=599)
    percentiles: tuple[int, ...] = DEFAULT_PERCENTILES
    verbose: bool = False
    log_file: Optional[str] = None
    progress: bool = True
    histogram: bool = False
    per_worker: bool = False

    @field_validator("target_url")
    @classmethod
    def _require_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("missing URL")
        return v

    @field_validator("workers")
    @classmethod
    def _require_worker(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must use at least one worker")
        return v

    @field_validator("requests_per_worker")
    @classmethod
    def _require_request(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must perform at least one request")
        return v

    @field_validator("percentiles")
    @classmethod
    def _check_percentiles(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v:
            raise ValueError("at least one percentile rank is required")
        for p in v:
            if not 0 <= p <= 100:
                raise ValueError(f"percentile rank {p} is outside [0, 100]")
        return tuple(sorted(set(v)))

    @property
    def total_requests(self) -> int:
        return self.workers * self.requests_per_worker

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "LoadConfig":
        return cls(
            target_url=args.url or "",
            workers=args.workers,
            requests_per_worker=args.requests,
            success_status_code=args.status,
            percentiles=args.percentiles,
            verbose=args.verbose,
            log_file=args.log_file,
            progress=not args.no_progress,
            histogram=args.histogram,
            per_worker=args.per_worker,
        )


def parse_percentiles(value: str) -> tuple[int, ...]:
    """argparse type for ``-p 0,50,90,99``."""
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid percentile list: {value!r} (expected e.g. 0,50,100)"
        )

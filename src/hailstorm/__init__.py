__version__ = "0.1.0"

__all__ = [
    "Collector",
    "Dispatcher",
    "LoadConfig",
    "ResultSet",
    "Statistics",
    "Target",
    "WorkerResult",
    "compute_stats",
    "execute",
    "run_and_report",
    "run_load",
]


from .collector import Collector
from .config import LoadConfig
from .core import Dispatcher, run_and_report, run_load
from .metrics import compute_stats
from .models import ResultSet, Statistics, Target, WorkerResult
from .requester import execute

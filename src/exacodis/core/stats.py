"""Run and assertion statistics."""

from dataclasses import asdict, dataclass
from typing import Iterable

from exacodis.core.record import TestRecord


@dataclass(frozen=True)
class Stats:
    """Snapshot of the statistics of a pilot."""

    nb_runs: int = 0
    passed_runs: int = 0
    failed_runs: int = 0
    passed_runs_percent: float = 0
    failed_runs_percent: float = 0
    nb_assertions: int = 0
    passed_assertions: int = 0
    failed_assertions: int = 0
    passed_assertions_percent: float = 0
    failed_assertions_percent: float = 0
    milliseconds: int = 0
    hms: str = "00:00:00"

    @property
    def all_passed(self) -> bool:
        return self.failed_runs == 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def percentages(passed: int, total: int) -> tuple[float, float]:
    """Return the (passed, failed) percentages.

    The failed share is derived from the rounded passed share so both
    always add up to 100. An empty total gives (0, 0).
    """
    if not total:
        return 0, 0
    passed_percent = round(passed / total * 100, 2)
    return passed_percent, 100 - passed_percent


def format_percent(value: float) -> str:
    """Format a percentage with at most two decimals, without trailing zeros."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def ms_to_hms(milliseconds: int) -> str:
    """Convert milliseconds to an ``HH:MM:SS`` string.

    Hours are not clamped and there is no day rollover.
    """
    seconds = milliseconds // 1000
    minutes, sec = divmod(seconds, 60)
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}:{sec:02d}"


def compute_stats(
    runners: Iterable[TestRecord],
    passed_assertions: int,
    failed_assertions: int,
    milliseconds: int,
) -> Stats:
    """Compute a statistics snapshot.

    Args:
        runners: Every test record of the pilot
        passed_assertions: Running count of passed judgments
        failed_assertions: Running count of failed judgments
        milliseconds: Cumulative elapsed time of all runs

    Returns:
        Stats snapshot
    """
    runners = list(runners)
    nb_runs = len(runners)
    passed_runs = sum(1 for r in runners if r.has_passed())
    passed_runs_percent, failed_runs_percent = percentages(passed_runs, nb_runs)

    nb_assertions = passed_assertions + failed_assertions
    passed_assertions_percent, failed_assertions_percent = percentages(
        passed_assertions, nb_assertions
    )

    return Stats(
        nb_runs=nb_runs,
        passed_runs=passed_runs,
        failed_runs=nb_runs - passed_runs,
        passed_runs_percent=passed_runs_percent,
        failed_runs_percent=failed_runs_percent,
        nb_assertions=nb_assertions,
        passed_assertions=passed_assertions,
        failed_assertions=failed_assertions,
        passed_assertions_percent=passed_assertions_percent,
        failed_assertions_percent=failed_assertions_percent,
        milliseconds=milliseconds,
        hms=ms_to_hms(milliseconds),
    )

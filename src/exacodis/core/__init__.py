"""Core test orchestration functionality."""

from exacodis.core.invoker import ReflectiveInvoker
from exacodis.core.pilot import Pilot, RunCounter
from exacodis.core.record import CaughtError, Judgment, TestRecord, TestStatus, Value
from exacodis.core.stats import Stats

__all__ = [
    "Pilot",
    "RunCounter",
    "ReflectiveInvoker",
    "TestRecord",
    "TestStatus",
    "Judgment",
    "Value",
    "CaughtError",
    "Stats",
]

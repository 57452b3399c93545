"""Test record: executes one test body and captures its outcome."""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from exacodis.errors import ExacodisError, IdentityLockedError

log = logging.getLogger(__name__)

RunId = Union[int, str]

# Errors that always escape a test body. Anything else deriving from
# Exception becomes the record's outcome.
FATAL_ERRORS: tuple[type[BaseException], ...] = (
    ExacodisError,
    TypeError,
    NameError,
    AttributeError,
    SyntaxError,
    ImportError,
    NotImplementedError,
    AssertionError,
    RecursionError,
)


class TestStatus(str, Enum):
    """Status of a test record."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class Value:
    """Outcome of a test body that returned normally."""

    value: Any


@dataclass(frozen=True)
class CaughtError:
    """Outcome of a test body that raised an expected-failure error."""

    error: Exception


Outcome = Union[Value, CaughtError]


@dataclass(frozen=True)
class Judgment:
    """A single pass/fail verdict recorded by an assertion."""

    passed: bool
    expected: Any = None
    label: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "result": self.passed,
            "expected": self.expected,
            "test_name": self.label,
        }


class TestRecord:
    """Executes a zero-argument test body at construction time.

    The body's return value, or the error it raised, is kept as the
    outcome together with the elapsed wall-clock time. Errors listed in
    ``FATAL_ERRORS`` are not captured and propagate to the caller.
    """

    __test__ = False

    def __init__(self, test: Callable[[], Any], description: str = ""):
        """Run the test body and capture its outcome.

        Args:
            test: Zero-argument callable holding the code under test
            description: Free-text label for the report
        """
        self._id: Optional[RunId] = None
        self._description = description
        self._assert_results: list[Judgment] = []

        start = time.perf_counter_ns()
        try:
            outcome: Outcome = Value(test())
            end = time.perf_counter_ns()
        except FATAL_ERRORS:
            raise
        except Exception as e:
            outcome = CaughtError(e)
            end = time.perf_counter_ns()
            log.debug("Test body raised %s: %s", type(e).__name__, e)

        self._outcome = outcome
        # nanoseconds truncated to whole milliseconds
        self._milliseconds = (end - start) // 1_000_000

    def __repr__(self) -> str:
        return f"TestRecord(id={self._id!r}, status={self.status.value!r})"

    @property
    def id(self) -> Optional[RunId]:
        return self._id

    def set_id(self, run_id: RunId) -> None:
        """Lock the record's id. Once defined it is not updatable."""
        if self._id is not None:
            raise IdentityLockedError(
                f"Test id is already defined and locked, not updatable with '{run_id}'"
            )
        self._id = run_id

    @property
    def description(self) -> str:
        return self._description

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def result(self) -> Any:
        """The returned value, or the caught error object."""
        if isinstance(self._outcome, CaughtError):
            return self._outcome.error
        return self._outcome.value

    @property
    def raised(self) -> bool:
        """Whether the body raised an expected-failure error."""
        return isinstance(self._outcome, CaughtError)

    @property
    def milliseconds(self) -> int:
        return self._milliseconds

    def add_assert_result(
        self,
        passed: bool,
        expected: Any = None,
        label: Optional[str] = None,
    ) -> Judgment:
        """Append a judgment to the assertion log."""
        judgment = Judgment(passed=passed, expected=expected, label=label)
        self._assert_results.append(judgment)
        return judgment

    @property
    def assert_results(self) -> tuple[Judgment, ...]:
        return tuple(self._assert_results)

    @property
    def nb_assertions(self) -> int:
        return len(self._assert_results)

    @property
    def nb_assertions_passed(self) -> int:
        return sum(1 for j in self._assert_results if j.passed)

    @property
    def status(self) -> TestStatus:
        """A record without any judgment never counts as passed."""
        if not self._assert_results:
            return TestStatus.FAILED
        if all(j.passed for j in self._assert_results):
            return TestStatus.PASSED
        return TestStatus.FAILED

    def has_passed(self) -> bool:
        return self.status == TestStatus.PASSED

    def has_failed(self) -> bool:
        return self.status == TestStatus.FAILED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self._id,
            "description": self._description,
            "status": self.status.value,
            "milliseconds": self._milliseconds,
            "raised": self.raised,
            "assert_results": [j.to_dict() for j in self._assert_results],
        }

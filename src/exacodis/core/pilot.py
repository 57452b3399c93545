"""Test orchestration."""

import functools
import itertools
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence

from exacodis.core.invoker import ReflectiveInvoker
from exacodis.core.record import RunId, TestRecord
from exacodis.core.stats import Stats, compute_stats
from exacodis.errors import (
    DuplicateIdError,
    DuplicateResourceError,
    NoTestRanError,
    UnknownHelperError,
    UnknownIdError,
    UnknownResourceError,
)

log = logging.getLogger(__name__)


class RunCounter:
    """Source of ids for runs registered without an explicit one."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


# Shared by every Pilot of the process unless another counter is injected,
# so unlabelled runs keep unique ids across pilots.
DEFAULT_COUNTER = RunCounter()


class Pilot:
    """Runs test bodies and records assertion judgments against them.

    Assertions target the current test record, which is the latest run
    unless another one is selected with ``set_current_runner_to``.
    Helpers registered with ``add_helper`` are callable as attributes::

        pilot = Pilot("My project")
        pilot.inject_standard_helpers()
        pilot.run(lambda: 1 + 1, "addition")
        pilot.assert_equal(2)
    """

    def __init__(self, project_title: str, counter: Optional[RunCounter] = None):
        """Initialize the pilot.

        Args:
            project_title: Title shown in the report
            counter: Id source for unlabelled runs (default: process-wide)
        """
        self.project_title = project_title
        self._counter = counter or DEFAULT_COUNTER
        self._helpers: dict[str, Callable[..., Any]] = {}
        self._resources: dict[str, Any] = {}
        self._runners: dict[RunId, TestRecord] = {}
        self._current_runner: Optional[TestRecord] = None
        self._passed_assertions = 0
        self._failed_assertions = 0
        self._milliseconds = 0

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached when normal attribute lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        helpers = self.__dict__.get("_helpers", {})
        if name in helpers:
            return helpers[name]
        raise UnknownHelperError(f"Unknown helper: {name}")

    # Helpers

    def add_helper(self, name: str, helper: Callable[..., Any]) -> None:
        """Register a helper, replacing any previous one with the same name.

        The helper receives the pilot as its first argument.
        """
        self._check_helper_name(name)
        self._helpers[name] = functools.partial(helper, self)
        log.debug("Registered helper %s", name)

    def add_helpers(self, helpers: Mapping[str, Any]) -> None:
        """Register every callable of a name -> helper mapping.

        Names are checked first, so an invalid one registers nothing.
        """
        callables = {name: helper for name, helper in helpers.items() if callable(helper)}
        for name in callables:
            self._check_helper_name(name)
        for name, helper in callables.items():
            self.add_helper(name, helper)

    def _check_helper_name(self, name: str) -> None:
        if not name.isidentifier() or name.startswith("_"):
            raise ValueError(f"Invalid helper name: '{name}'")
        if hasattr(type(self), name):
            raise ValueError(f"Helper name '{name}' shadows a Pilot attribute")

    def inject_helpers(self, path: Path | str) -> None:
        """Register the helpers of a catalog file."""
        from exacodis.helpers.loader import load_helpers

        self.add_helpers(load_helpers(path))

    def inject_standard_helpers(self, path: Path | str | None = None) -> None:
        """Register the bundled helper catalog, or the one at ``path``."""
        from exacodis.helpers.loader import STANDARD_HELPERS_PATH

        self.inject_helpers(path or STANDARD_HELPERS_PATH)

    def call_helper(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Dispatch a helper by name."""
        if name not in self._helpers:
            raise UnknownHelperError(f"Unknown helper: {name}")
        return self._helpers[name](*args, **kwargs)

    def helper_names(self) -> list[str]:
        return sorted(self._helpers)

    # Resources

    def add_resource(self, name: str, resource: Any) -> None:
        if name in self._resources:
            raise DuplicateResourceError(f"Resource's name: {name} is already defined")
        self._resources[name] = resource

    def override_resource(self, name: str, resource: Any) -> None:
        if name not in self._resources:
            raise UnknownResourceError(f"Resource's name: {name} is not defined")
        self._resources[name] = resource

    def get_resource(self, name: str) -> Any:
        if name not in self._resources:
            raise UnknownResourceError(f"Resource: {name} does not exist")
        return self._resources[name]

    def remove_resource(self, name: str) -> None:
        if name not in self._resources:
            raise UnknownResourceError(f"Resource: {name} does not exist")
        del self._resources[name]

    def has_resource(self, name: str) -> bool:
        return name in self._resources

    def stage_resources(self, resources: Mapping[str, Any]) -> None:
        """Add several resources at once."""
        for name, resource in resources.items():
            self.add_resource(name, resource)

    # Runs

    def run(
        self,
        test: Callable[[], Any],
        description: str = "",
        run_id: Optional[RunId] = None,
    ) -> RunId:
        """Execute a test body and make it the current test.

        Args:
            test: Zero-argument callable holding the code under test
            description: Free-text label for the report
            run_id: Explicit id, or None to take the next counter value

        Returns:
            The id of the run

        Raises:
            DuplicateIdError: If ``run_id`` is already used
        """
        if run_id is not None and run_id in self._runners:
            raise DuplicateIdError(f"Runner's id: {run_id} is already defined and locked")

        if run_id is None:
            run_id = self._counter.next()
            while run_id in self._runners:
                run_id = self._counter.next()

        runner = TestRecord(test, description)
        runner.set_id(run_id)
        self._runners[run_id] = runner
        self._current_runner = runner
        self._milliseconds += runner.milliseconds
        log.debug("Run %s completed in %d ms", run_id, runner.milliseconds)

        return run_id

    def run_class_method(
        self,
        target: Any,
        method: Optional[str] = None,
        *,
        args: Sequence[Any] = (),
        kwargs: Optional[Mapping[str, Any]] = None,
        description: str = "",
        run_id: Optional[RunId] = None,
    ) -> RunId:
        """Execute a method of a class as a test body, whatever its visibility.

        Args:
            target: Live instance, class, dotted class name or compact
                ``"pkg.module.ClassName::method"`` form
            method: Method name, unless given in compact form
            args: Positional arguments for the method
            kwargs: Named arguments for the method
            description: Free-text label (default: ``ClassName::method``)
            run_id: Explicit id, or None to take the next counter value

        Returns:
            The id of the run
        """
        invoker = ReflectiveInvoker(target, method, args=args, kwargs=kwargs)
        return self.run(invoker, description or invoker.describe(), run_id)

    def get_valid_runner_id(self, run_id: Optional[RunId] = None) -> RunId:
        """Resolve the id targeted by an operation.

        Args:
            run_id: Explicit id, or None for the current test

        Raises:
            UnknownIdError: If the explicit id was never used
            NoTestRanError: If no id is given and nothing has run yet
        """
        if run_id is not None:
            if run_id in self._runners:
                return run_id
            raise UnknownIdError(f"Unknown runner's id: '{run_id}'")
        if self._current_runner is not None:
            return self._current_runner.id
        raise NoTestRanError("No test ran")

    def get_runner(self, run_id: Optional[RunId] = None) -> TestRecord:
        return self._runners[self.get_valid_runner_id(run_id)]

    @property
    def current_runner(self) -> TestRecord:
        return self.get_runner()

    def get_all_runners(self) -> dict[RunId, TestRecord]:
        return dict(self._runners)

    def set_current_runner_to(self, run_id: RunId) -> None:
        """Select an existing test record as the current one."""
        self._current_runner = self._runners[self.get_valid_runner_id(run_id)]

    # Assertions

    def add_success(self, label: Optional[str] = None, run_id: Optional[RunId] = None) -> None:
        runner = self.get_runner(run_id)
        runner.add_assert_result(passed=True, label=label)
        self._passed_assertions += 1

    def add_failure(
        self,
        expected: Any,
        label: Optional[str] = None,
        run_id: Optional[RunId] = None,
    ) -> None:
        runner = self.get_runner(run_id)
        runner.add_assert_result(passed=False, expected=expected, label=label)
        self._failed_assertions += 1

    def assert_that(
        self,
        test: Callable[[], Any],
        label: Optional[str] = None,
        expected: Any = "Truthy",
    ) -> None:
        """Record the truthiness of an ad hoc predicate on the current test."""
        if test():
            self.add_success(label)
        else:
            self.add_failure(expected, label)

    # Statistics and report

    def get_stats(self) -> Stats:
        return compute_stats(
            self._runners.values(),
            passed_assertions=self._passed_assertions,
            failed_assertions=self._failed_assertions,
            milliseconds=self._milliseconds,
        )

    def create_report(self, max_str_length: int = 500, output: Path | str | None = None) -> str:
        """Render the HTML report, and write it to ``output`` if given."""
        from exacodis.report.generator import ReportGenerator

        generator = ReportGenerator(self, max_str_length=max_str_length)
        html = generator.render()
        if output is not None:
            generator.write(html, Path(output))
        return html

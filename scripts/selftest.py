#!/usr/bin/env python3
"""Self-test script for Exacodis.

Drives a pilot through resources, the standard helpers, captured errors
and reflective runs, then checks the resulting statistics and writes the
HTML report to ``reports/selftest.html``.
"""

import sys
from pathlib import Path

# Add parent directory to path for exacodis imports
SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from rich.console import Console

from exacodis import Pilot
from exacodis.core.pilot import RunCounter

console = Console()


class Calendar:
    """Small class exercised through reflective runs."""

    def __init__(self, year: int = 2021):
        self.year = year

    def __is_leap(self) -> bool:
        return self.year % 4 == 0 and (self.year % 100 != 0 or self.year % 400 == 0)

    @staticmethod
    def months() -> int:
        return 12


def main() -> int:
    pilot = Pilot("Exacodis - A Python minimalist test harness", counter=RunCounter())
    pilot.inject_standard_helpers()

    pilot.add_resource("year", 2021)
    pilot.add_resource("years", [2020, 2021])
    pilot.add_resource("is_leap", False)
    pilot.add_resource("current_month", "september")
    pilot.add_resource(
        "dummy_data",
        [pilot.get_resource("year"), pilot.get_resource("is_leap"), pilot.get_resource("current_month")],
    )

    pilot.run(
        lambda: pilot.get_resource("year"),
        "Resource extractor (int) - is_int equal not_equal in in_strict not_in not_in_strict",
        run_id="001",
    )
    pilot.assert_is_int()
    pilot.assert_equal(2021)
    pilot.assert_not_equal(2000)
    pilot.assert_in([2021.0])
    pilot.assert_in_strict([2021])
    pilot.assert_not_in(["2025"])
    pilot.assert_not_in_strict(["2021"])

    pilot.run(lambda: pilot.get_resource("years"), "Resource extractor (list)", run_id="002")
    pilot.assert_is_list()
    pilot.assert_equal([2020, 2021])

    pilot.run(
        lambda: pilot.get_resource("dummy_data"),
        "Resource composed from other resources",
        run_id="003",
    )
    pilot.assert_is_list()
    pilot.assert_equal([2021, False, "september"])

    pilot.run(lambda: pilot.get_resource("dummy_data")[2], "Indexing a resource", run_id="004")
    pilot.assert_is_str()
    pilot.assert_equal("september")

    pilot.run(lambda: True, "is_bool equal not_equal", run_id="005")
    pilot.assert_is_bool()
    pilot.assert_equal(True)
    pilot.assert_not_equal(False)

    def raises():
        raise ValueError("invalid argument")

    pilot.run(raises, "Exception interceptor", run_id="006")
    pilot.assert_exception(Exception("instance"))
    pilot.assert_exception(Exception)
    pilot.assert_exception(ValueError)

    pilot.run(lambda: pilot.get_resource("dummy_data"), "Count the values", run_id="007")
    pilot.assert_is_list()
    pilot.assert_count(3)
    pilot.assert_that(
        lambda: len(pilot.get_resource("dummy_data")) == 3,
        "Dynamic assertion using manual count",
        3,
    )

    pilot.run_class_method(f"{__name__}.Calendar::__is_leap", run_id="008")
    pilot.assert_is_bool()
    pilot.assert_equal(False)

    pilot.run_class_method(Calendar(2024), "__is_leap", run_id="009")
    pilot.assert_equal(True)

    pilot.run_class_method(Calendar, "months", run_id="010")
    pilot.assert_equal(12)

    stats = pilot.get_stats().to_dict()
    del stats["milliseconds"], stats["hms"]
    pilot.run(lambda: stats, "Check the statistics", run_id="011")
    pilot.assert_is_dict()
    pilot.assert_equal(
        {
            "nb_runs": 10,
            "passed_runs": 10,
            "failed_runs": 0,
            "passed_runs_percent": 100.0,
            "failed_runs_percent": 0.0,
            "nb_assertions": 26,
            "passed_assertions": 26,
            "failed_assertions": 0,
            "passed_assertions_percent": 100.0,
            "failed_assertions_percent": 0.0,
        }
    )

    report_path = PROJECT_ROOT / "reports" / "selftest.html"
    pilot.create_report(output=report_path)

    final = pilot.get_stats()
    if final.all_passed:
        console.print(f"[green]All {final.nb_runs} runs passed[/green] in {final.hms}")
    else:
        console.print(f"[red]{final.failed_runs} of {final.nb_runs} runs failed[/red]")
    console.print(f"[dim]Report: {report_path}[/dim]")

    return 0 if final.all_passed else 1


if __name__ == "__main__":
    sys.exit(main())

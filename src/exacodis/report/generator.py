"""Report generation using Jinja2 templates."""

import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from pprint import pformat
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from exacodis.core.stats import format_percent, percentages

if TYPE_CHECKING:
    from exacodis.core.pilot import Pilot
    from exacodis.core.record import TestRecord

log = logging.getLogger(__name__)

TRUNCATION_MARKER = "..."


class ReportGenerator:
    """Generates a static HTML report from the runs of a pilot."""

    def __init__(self, pilot: "Pilot", max_str_length: int = 500):
        """Initialize the report generator.

        Args:
            pilot: Pilot whose runs and statistics are reported
            max_str_length: Longest rendered value before truncation
        """
        if max_str_length < 1:
            raise ValueError("max_str_length must be at least 1")
        self.pilot = pilot
        self.max_str_length = max_str_length

        # Set up Jinja2 environment
        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

        # Add custom filters
        self.env.filters["shorten"] = self.shorten
        self.env.filters["describe_value"] = self.describe_value
        self.env.filters["percent"] = format_percent

    def render(self) -> str:
        """Render the report as an HTML string."""
        template = self.env.get_template("report.html")
        return template.render(**self._prepare_context())

    def generate(self, output_path: Path) -> Path:
        """Render the report and write it to ``output_path``."""
        return self.write(self.render(), output_path)

    def write(self, html: str, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        log.info("Report written to %s", output_path)
        return output_path

    def _prepare_context(self) -> dict[str, Any]:
        stats = self.pilot.get_stats()
        runners = [self._runner_context(r) for r in self.pilot.get_all_runners().values()]

        return {
            "project_title": self.pilot.project_title,
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            "stats": stats,
            "runners": runners,
        }

    @staticmethod
    def _runner_context(runner: "TestRecord") -> dict[str, Any]:
        nb_assertions = runner.nb_assertions
        nb_passed = runner.nb_assertions_passed
        passed_percent, failed_percent = percentages(nb_passed, nb_assertions)

        return {
            "runner": runner,
            "nb_assertions": nb_assertions,
            "nb_passed": nb_passed,
            "nb_failed": nb_assertions - nb_passed,
            "passed_percent": passed_percent,
            "failed_percent": failed_percent,
        }

    def shorten(self, value: Any) -> str:
        """Truncate a value's text past ``max_str_length``."""
        text = value if isinstance(value, str) else pformat(value)
        if len(text) > self.max_str_length:
            return text[: self.max_str_length] + TRUNCATION_MARKER
        return text

    def describe_value(self, value: Any) -> str:
        """Describe a captured result by type for the "Given" column."""
        if value is None:
            return "None"
        if isinstance(value, bool):
            return f"bool: {value}"
        if isinstance(value, int):
            return f"int: {value}"
        if isinstance(value, float):
            return f"float: {value}"
        if isinstance(value, str):
            return self.shorten(f"str: {value}")
        if isinstance(value, (list, tuple, dict, set, frozenset)):
            return self.shorten(f"{type(value).__name__}\n{pformat(value)}")
        if isinstance(value, BaseException):
            trace = "".join(traceback.format_exception(type(value), value, value.__traceback__))
            return self.shorten(
                f"Exception: {type(value).__qualname__}\nMessage: {value}\nTrace: {trace}"
            )
        return self.shorten(f"Object: {type(value).__qualname__}")

"""HTML report generation."""

from exacodis.report.generator import ReportGenerator

__all__ = ["ReportGenerator"]

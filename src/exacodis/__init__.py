"""
Exacodis - A minimalist test harness.

This package provides tools to:
- Run test bodies and capture their result or error and timing
- Record assertion judgments against the latest result
- Invoke any method of a class, private or static, for white-box testing
- Generate static HTML reports with run and assertion statistics
"""

__version__ = "0.1.0"
__author__ = "Exacodis Team"

from exacodis.core.pilot import Pilot

__all__ = ["Pilot"]

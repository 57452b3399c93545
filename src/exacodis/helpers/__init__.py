"""Assertion helper catalogs."""

from exacodis.helpers.loader import STANDARD_HELPERS_PATH, load_helpers

__all__ = ["STANDARD_HELPERS_PATH", "load_helpers"]

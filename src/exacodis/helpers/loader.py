"""Loading of helper catalogs from Python source files."""

import importlib.util
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from exacodis.errors import HelperSourceError, HelperSourceNotFoundError

log = logging.getLogger(__name__)

STANDARD_HELPERS_PATH = Path(__file__).parent / "standard.py"

CATALOG_ATTRIBUTE = "HELPERS"


def load_helpers(path: Path | str) -> Mapping[str, Any]:
    """Execute a catalog file and return its ``HELPERS`` mapping.

    Args:
        path: Path to a Python file defining ``HELPERS = {name: helper}``

    Returns:
        The name -> helper mapping, values not filtered

    Raises:
        HelperSourceNotFoundError: If the file does not exist
        HelperSourceError: If the file defines no ``HELPERS`` mapping
    """
    path = Path(path)
    if not path.is_file():
        raise HelperSourceNotFoundError(f"Helper file not found: {path}")

    spec = importlib.util.spec_from_file_location(f"exacodis_helpers_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise HelperSourceError(f"Unable to load helper file: {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    helpers = getattr(module, CATALOG_ATTRIBUTE, None)
    if not isinstance(helpers, Mapping):
        raise HelperSourceError(f"Helper file {path} must define a {CATALOG_ATTRIBUTE} mapping")

    log.info("Loaded %d helper(s) from %s", len(helpers), path)
    return helpers

"""
Gearmotor catalog loader.

Loads pre-parsed vendor performance rows and component part numbers from
a JSON file. The catalog shipped in conveyorcalc.data is used unless a
path is given or CONVEYORCALC_CATALOG_PATH is set.
"""

import json
import importlib.resources as resources
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from conveyorcalc.config import get_settings
from conveyorcalc.errors import CatalogError
from conveyorcalc.gearmotor.models import GearmotorCatalog


logger = logging.getLogger(__name__)

DEFAULT_CATALOG_NAME = "nord_flexbloc_catalog.json"


def _packaged_catalog_text(filename: str) -> str:
    resource = resources.files("conveyorcalc.data").joinpath(filename)
    if not resource.is_file():
        raise CatalogError(f"Packaged gearmotor catalog {filename} not found.")
    return resource.read_text(encoding="utf-8")


def _resolve_catalog_path(path: Optional[str]) -> Optional[Path]:
    """Explicit path, then the configured path. None means the packaged catalog."""
    configured = path or get_settings().CATALOG_PATH
    return Path(configured) if configured else None


def parse_catalog(data) -> GearmotorCatalog:
    """
    Build a catalog from decoded JSON.

    Raises:
        CatalogError: If the document does not have the catalog shape
    """
    if not isinstance(data, dict):
        raise CatalogError("Gearmotor catalog must be a JSON object.")
    try:
        return GearmotorCatalog(**data)
    except ValidationError as e:
        raise CatalogError(f"Invalid gearmotor catalog: {e}") from e


def load_catalog(path: Optional[str] = None) -> GearmotorCatalog:
    """
    Load the gearmotor catalog.

    Args:
        path: Path to a catalog JSON file. If None, uses the configured
            path or the packaged catalog.

    Returns:
        GearmotorCatalog

    Raises:
        CatalogError: If the file is missing, unreadable or malformed
    """
    file_path = _resolve_catalog_path(path)

    if file_path is None:
        text = _packaged_catalog_text(DEFAULT_CATALOG_NAME)
        source = f"conveyorcalc.data/{DEFAULT_CATALOG_NAME}"
    else:
        if not file_path.exists():
            raise CatalogError(f"Gearmotor catalog not found at {file_path}.")
        text = file_path.read_text(encoding="utf-8")
        source = str(file_path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Gearmotor catalog {source} is not valid JSON: {e}") from e

    catalog = parse_catalog(data)
    logger.debug(
        "Loaded %d performance points from %s", len(catalog.performance_points), source
    )
    return catalog


def catalog_exists(path: Optional[str] = None) -> bool:
    """True if the catalog that load_catalog would read is present."""
    file_path = _resolve_catalog_path(path)
    if file_path is None:
        return resources.files("conveyorcalc.data").joinpath(DEFAULT_CATALOG_NAME).is_file()
    return file_path.exists()

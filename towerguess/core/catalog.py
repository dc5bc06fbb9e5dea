"""
Catalog document loader
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from towerguess.models import Catalog


logger = logging.getLogger(__name__)


def load_catalog_file(catalog_path: str) -> Dict[str, Any]:
    """
    Read the raw catalog JSON document

    Args:
        catalog_path: Path to towers.json

    Returns:
        Parsed JSON document (not validated)

    Raises:
        FileNotFoundError: If the catalog file is absent
        ValueError: If the file is not valid JSON
    """
    path = Path(catalog_path)

    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Catalog file {catalog_path} is not valid JSON: {e}") from e


def parse_catalog(document: Any) -> Catalog:
    """
    Validate a catalog document, falling back to empty pools

    A document with the wrong shape yields an empty catalog so the quiz
    still reaches its menu. Missing pool keys are treated as empty pools.
    """
    if not isinstance(document, dict):
        logger.error(f"❌ Catalog document has unexpected type {type(document).__name__}, using empty pools")
        return Catalog()

    try:
        return Catalog.model_validate({
            "defaultImages": document.get("defaultImages") or [],
            "pomImages": document.get("pomImages") or [],
        })
    except ValidationError as e:
        logger.error(f"❌ Catalog document is malformed, using empty pools: {e}")
        return Catalog()


def read_catalog(catalog_path: str) -> Catalog:
    """Load and validate the catalog file; any failure gives empty pools"""
    try:
        document = load_catalog_file(catalog_path)
    except (OSError, ValueError) as e:
        logger.error(f"❌ Failed to load catalog: {e}")
        return Catalog()
    return parse_catalog(document)

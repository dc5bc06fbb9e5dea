"""
Tower name lookup from the spreadsheet CSV export
"""
import csv
import io
import logging
from typing import Dict

import requests


logger = logging.getLogger(__name__)


class CatalogBuildError(Exception):
    """Fatal error while building the catalog; nothing is written"""


def fetch_lookup_text(url: str, timeout: float = 30.0) -> str:
    """
    Download the spreadsheet export as text

    Args:
        url: CSV export URL
        timeout: Request timeout in seconds

    Returns:
        Response body

    Raises:
        CatalogBuildError: On connection errors, timeouts or non-2xx status
    """
    logger.info(f"Fetching tower names from {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise CatalogBuildError(f"Could not fetch tower names: {e}") from e

    return response.text


def parse_lookup(text: str) -> Dict[str, str]:
    """
    Parse the acronym -> full name CSV

    CSV format (row 0 is a header and is discarded):
        Acronym,Name
        ToM,Tower of Misery
        ToAST,Tower of Annoyingly Simple Trials

    Rows with an empty acronym or name are skipped. Duplicate acronyms keep
    the last row.

    Raises:
        CatalogBuildError: If the response is empty, is an HTML page, or
            cannot be read as CSV
    """
    stripped = text.lstrip()
    if not stripped:
        raise CatalogBuildError("Malformed tabular response: empty body")
    if stripped.startswith("<"):
        raise CatalogBuildError("Malformed tabular response: got HTML instead of CSV")

    try:
        rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    except csv.Error as e:
        raise CatalogBuildError(f"Malformed tabular response: {e}") from e

    if not rows:
        raise CatalogBuildError("Malformed tabular response: no rows")

    lookup = {}
    for row in rows[1:]:
        if len(row) < 2:
            continue
        acronym, full_name = row[0].strip(), row[1].strip()
        if acronym and full_name:
            lookup[acronym] = full_name

    logger.info(f"✅ Loaded {len(lookup)} tower names")
    return lookup

"""
Image directory scan
"""
import logging
from pathlib import Path
from typing import Iterable, List

from towerguess.core.lookup import CatalogBuildError


logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")


def scan_images(
    root: str,
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
    bonus_dir: str = "PoM",
) -> List[str]:
    """
    Recursively list image files under root

    Files below any directory named bonus_dir are skipped; the bonus pool is
    curated by hand instead.

    Args:
        root: Image root directory
        extensions: Allowed suffixes, matched case-insensitively
        bonus_dir: Reserved directory name excluded from the scan

    Returns:
        Sorted POSIX paths relative to root, e.g. ["Ring 1/ToM.png", "ToAST.jpg"]

    Raises:
        CatalogBuildError: If root is missing or not a directory
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise CatalogBuildError(f"Image folder not found: {root}")

    allowed = {ext.lower() for ext in extensions}
    files = []
    skipped = 0

    try:
        for path in sorted(root_path.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in allowed:
                continue
            relative = path.relative_to(root_path)
            if bonus_dir in relative.parts[:-1]:
                skipped += 1
                continue
            files.append(relative.as_posix())
    except OSError as e:
        raise CatalogBuildError(f"Could not scan {root}: {e}") from e

    logger.info(f"Scanned {len(files)} images under {root} ({skipped} in {bonus_dir}/ skipped)")
    return files

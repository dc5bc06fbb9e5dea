"""
Catalog builder

Joins the spreadsheet lookup with the image folder scan and writes the
catalog document served to the quiz:

    {
        "defaultImages": [{"url": "/images/ToM.png", "answers": ["ToM", "Tower of Misery"]}],
        "pomImages": [...]   # hardcoded, never scanned
    }
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List

from towerguess.core.lookup import CatalogBuildError, fetch_lookup_text, parse_lookup
from towerguess.core.scanner import scan_images
from towerguess.models import Catalog, CatalogEntry, Settings


logger = logging.getLogger(__name__)

# Pit of Misery towers, curated by hand
POM_IMAGES: List[CatalogEntry] = [
    CatalogEntry(url="/images/PoM/ToXIC.jpg", answers=["ToXIC", "Tower of Xerially Infuriating Calamity"]),
    CatalogEntry(url="/images/PoM/ToOLC.jpg", answers=["ToOLC", "Tower of Overthinking Life Choices"]),
    CatalogEntry(url="/images/PoM/ToVM.jpg", answers=["ToVM", "Tower of Vindinctive Maneuvers"]),
    CatalogEntry(url="/images/PoM/ToSE.jpg", answers=["ToSE", "Tower of Shunning Excursion"]),
    CatalogEntry(url="/images/PoM/ToVH.jpg", answers=["ToVH", "Tower of Vacant Hindrances"]),
    CatalogEntry(url="/images/PoM/ToWM.jpg", answers=["ToWM", "Tower of Water Melon"]),
    CatalogEntry(url="/images/PoM/TotRP.jpg", answers=["TotRP", "Tower of The Roof's Pique"]),
    CatalogEntry(url="/images/PoM/ToEV.jpg", answers=["ToEV", "Tower of Eternal Void"]),
    CatalogEntry(url="/images/PoM/ToBF.jpg", answers=["ToBF", "Tower of Blind Fate"]),
    CatalogEntry(url="/images/PoM/ToSF.jpg", answers=["ToSF", "Tower of Spiralling Fates"]),
    CatalogEntry(url="/images/PoM/ToMDC.jpg", answers=["ToMDC", "Tower of Modernistic Design Choices"]),
    CatalogEntry(url="/images/PoM/WaT.jpg", answers=["WaT", "Was A Tower"]),
    CatalogEntry(url="/images/PoM/CoIV.jpg", answers=["CoIV", "Citadel of Infinite Void"]),
]


def build_entries(files: List[str], lookup: Dict[str, str], url_prefix: str = "/images") -> List[CatalogEntry]:
    """
    Turn scanned image paths into catalog entries

    The acronym is the filename without extension; unknown acronyms are
    their own full name.

    Example:
        >>> build_entries(["ToM.png"], {"ToM": "Tower of Misery"})[0].answers
        ['ToM', 'Tower of Misery']
    """
    prefix = url_prefix.rstrip("/")
    entries = []
    for relpath in files:
        acronym = Path(relpath).stem
        full_name = lookup.get(acronym, acronym)
        if full_name == acronym:
            logger.debug(f"No name found for {acronym}")
        entries.append(CatalogEntry(url=f"{prefix}/{relpath}", answers=[acronym, full_name]))
    return entries


def build_catalog(settings: Settings) -> Catalog:
    """
    Build the full catalog in memory

    Raises:
        CatalogBuildError: If the lookup cannot be fetched/parsed or the
            image folder cannot be scanned
    """
    text = fetch_lookup_text(settings.sheet_url, timeout=settings.request_timeout)
    lookup = parse_lookup(text)

    files = scan_images(settings.images_dir, settings.image_extensions, settings.bonus_dir)
    towers = build_entries(files, lookup, settings.url_prefix)

    return Catalog(default_images=towers, pom_images=list(POM_IMAGES))


def write_catalog(catalog: Catalog, output_file: str) -> Path:
    """
    Write the catalog JSON atomically

    The document is written to a temp file next to the target and renamed
    into place, so readers never see a partial catalog.

    Raises:
        CatalogBuildError: If the file cannot be written
    """
    path = Path(output_file)
    payload = json.dumps(catalog.to_document(), indent=2, ensure_ascii=False)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise CatalogBuildError(f"Could not write {output_file}: {e}") from e

    logger.info(
        f"✅ Catalog written to {path} "
        f"({len(catalog.default_images)} default, {len(catalog.pom_images)} PoM)"
    )
    return path


def generate(settings: Settings) -> Path:
    """Build the catalog and persist it at settings.catalog_file"""
    catalog = build_catalog(settings)
    return write_catalog(catalog, settings.catalog_file)

"""
Catalog integrity check

Flags entries whose accepted answers repeat each other (e.g. ["ToM", "tom"]),
usually a tower missing from the name spreadsheet. These are content
warnings only; the catalog is still playable.
"""
import logging
from typing import Any, Dict, List

from towerguess.core.normalizer import repeated_answers


logger = logging.getLogger(__name__)

POOLS = ("defaultImages", "pomImages")


def find_duplicate_answers(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Collect suspect entries from both pools

    Args:
        document: Raw catalog document

    Returns:
        Findings in catalog order:
        {"pool": "defaultImages", "url": "/images/ToX.png",
         "answers": ["ToX", "ToX"], "reason": "duplicate"}
    """
    findings = []

    for pool in POOLS:
        towers = document.get(pool) or []
        if not isinstance(towers, list):
            findings.append({"pool": pool, "url": "?", "answers": [], "reason": "invalid"})
            continue

        for tower in towers:
            if not isinstance(tower, dict):
                findings.append({"pool": pool, "url": "?", "answers": [], "reason": "invalid"})
                continue
            url = str(tower.get("url", "?"))
            raw_answers = tower.get("answers") or []
            if not isinstance(raw_answers, list):
                findings.append({"pool": pool, "url": url, "answers": [], "reason": "invalid"})
                continue
            answers = [str(a) for a in raw_answers]

            if not answers:
                findings.append({"pool": pool, "url": url, "answers": [], "reason": "empty"})
            elif repeated_answers(answers):
                findings.append({"pool": pool, "url": url, "answers": answers, "reason": "duplicate"})

    if findings:
        logger.warning(f"⚠️ {len(findings)} suspect catalog entries")

    return findings

"""
Answer normalization for free-text guesses
"""
from typing import Iterable, List, Set
from towerguess.models import CatalogEntry


def normalize_answer(text: str) -> str:
    """
    Normalize a guess or accepted answer for comparison

    Leading/trailing whitespace is dropped and the text is case-folded,
    so "  tom  " and "ToM" compare equal.
    """
    return str(text).strip().casefold()


def accepted_answers(entry: CatalogEntry) -> Set[str]:
    """Normalized set of accepted answers for a catalog entry"""
    return {normalize_answer(a) for a in entry.answers}


def is_correct(guess: str, entry: CatalogEntry) -> bool:
    """Check a raw guess against an entry's accepted answers"""
    return normalize_answer(guess) in accepted_answers(entry)


def repeated_answers(answers: Iterable[str]) -> List[str]:
    """
    Find answers that repeat another answer of the same entry

    Args:
        answers: Accepted answers in catalog order

    Returns:
        Normalized forms seen more than once, in first-repeat order
    """
    seen = set()
    repeats = []
    for answer in answers:
        key = normalize_answer(answer)
        if key in seen and key not in repeats:
            repeats.append(key)
        seen.add(key)
    return repeats

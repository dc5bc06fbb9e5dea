"""
Utility functions
"""
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly shuffled copy of items

    Args:
        items: Items to permute, left untouched
        rng: Random source, injectable for reproducible tests

    Returns:
        New list with the same items in random order

    Example:
        >>> sorted(shuffled([3, 1, 2], random.Random(7)))
        [1, 2, 3]
    """
    result = list(items)
    (rng or random.Random()).shuffle(result)
    return result

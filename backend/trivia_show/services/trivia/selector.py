import random
from typing import List, Optional, Sequence, TypeVar

from .errors import InsufficientPoolError

T = TypeVar('T')


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``items``.

    The input sequence is left untouched. Pass ``rng`` to make the
    permutation reproducible.
    """
    rand = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rand.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def _sample(items: Sequence[T], n: int, rng: Optional[random.Random]) -> List[T]:
    if n < 0:
        raise ValueError(f"Sample size must be non-negative, got {n}")
    if len(items) < n:
        raise InsufficientPoolError(len(items), n)
    return shuffle(items, rng)[:n]


def select_categories(pool: Sequence[T], n: int, rng: Optional[random.Random] = None) -> List[T]:
    """Pick ``n`` distinct category ids uniformly at random from ``pool``.

    Repeated ids in the pool count once.
    """
    distinct = list(dict.fromkeys(pool))
    return _sample(distinct, n, rng)


def select_clues(clues: Sequence[T], n: int, rng: Optional[random.Random] = None) -> List[T]:
    """Pick ``n`` clues from a category's raw clue list, without replacement."""
    return _sample(list(clues), n, rng)

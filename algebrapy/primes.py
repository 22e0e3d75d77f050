from __future__ import annotations
from collections import deque
import itertools
from itertools import takewhile
from typing import Iterator, List

THRESHOLD_MARKER = "To "


def primes() -> Iterator[int]:
    """Lazily yield every prime, starting from 2.

    Each odd candidate is tried against the primes found so far whose square
    does not exceed it. Calling ``primes()`` again starts a fresh sequence.
    """
    found: List[int] = []
    yield 2
    for x in itertools.count(3, 2):
        if all(x % p != 0 for p in takewhile(lambda p: p * p <= x, found)):
            found.append(x)
            yield x


def primes_to(n: int) -> List[int]:
    return list(takewhile(lambda p: p <= n, primes()))


def last_primes(n: int, count: int = 10) -> List[int]:
    """The largest ``count`` primes that are ``<= n``, in ascending order."""
    return list(deque(takewhile(lambda p: p <= n, primes()), maxlen=count))


def parse_threshold(sentence: str) -> int:
    """Integer following the first ``"To "`` in ``sentence``.

    Raises:
        IndexError: If the marker is missing
        ValueError: If the text after it is not an integer
    """
    return int(sentence.split(THRESHOLD_MARKER)[1])

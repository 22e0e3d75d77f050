from __future__ import annotations
import itertools
from typing import Any, Callable, Optional, TextIO

from .algebra import IO, Monad
from .option import Option, Some
from .primes import last_primes, parse_threshold


class OptionMonad(Monad[Option[Any]]):
    """Sequencing for Option that prints every intermediate value.

    The step counter is per instance and only annotates the diagnostic line.
    """
    def __init__(self, out: Optional[TextIO] = None):
        self._steps = itertools.count(1)
        self._out = out

    def flat_map(self, p: Option[Any], f: Callable[[Any], Option[Any]]) -> Option[Any]:
        print(f"OptionMonad step {next(self._steps)} intermediate result: {p!r}", file=self._out)
        return p.flat_map(f)

    def returns(self, a: Any) -> Option[Any]:
        return Some(a)


class OptionIO(IO[Option[Any]]):
    SENTENCE = "getListOfPrimesTo 1000"

    def __init__(self, prime_count: int = 10, out: Optional[TextIO] = None):
        self.prime_count = prime_count
        self._out = out

    def read(self) -> Option[str]:
        return Some(self.SENTENCE)

    def log(self, input: str) -> Option[None]:
        print(f"OptionIO log: We will calculate: {input}", file=self._out)
        return Some(None)

    def calculate(self, sentence: str) -> Option[str]:
        # a missing or non-numeric threshold is fatal: IndexError / ValueError
        n = parse_threshold(sentence)
        return Some(str(last_primes(n, self.prime_count)))

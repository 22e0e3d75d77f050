from __future__ import annotations
from typing import Callable, Optional, TextIO, TypeVar

from .algebra import IO, Monad

A = TypeVar("A")
B = TypeVar("B")


class IdMonad(Monad[object]):
    """Identity sequencing: a carrier value is the plain value itself."""

    def flat_map(self, p: A, f: Callable[[A], B]) -> B:
        return f(p)

    def returns(self, a: A) -> A:
        return a


class ConsoleIO(IO[object]):
    """Synchronous IO with no wrapping; errors raise straight through."""

    def __init__(self, out: Optional[TextIO] = None):
        self._out = out

    def read(self) -> str:
        return "Id ok"

    def log(self, input: str) -> None:
        print(f"ConsoleIO log: {input}", file=self._out)

    def calculate(self, sentence: str) -> str:
        return sentence

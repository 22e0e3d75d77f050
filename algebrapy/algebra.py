"""The two interfaces every effect carrier implements.

Python has no higher-kinded types, so the carrier ``P[_]`` is only named in
docstrings: an ``IO`` for Option returns ``Option[str]`` from ``read``, one for
Effect returns ``Effect[..., str]``, and one for the identity carrier returns
a plain ``str``. Instances are passed explicitly to generic code; nothing is
looked up at runtime.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

A = TypeVar("A")
B = TypeVar("B")
# stands in for the applied carrier, e.g. Option[A] or Effect[Any, Any, A]
P = TypeVar("P")


class IO(ABC, Generic[P]):
    """Effect algebra: the operations a logged calculation needs."""

    @abstractmethod
    def read(self) -> P:
        """Obtain the input sentence, as ``P[str]``."""

    @abstractmethod
    def log(self, input: str) -> P:
        """Record ``input``; yields ``P[None]``."""

    @abstractmethod
    def calculate(self, sentence: str) -> P:
        """Derive a result from ``sentence``, as ``P[str]``."""


class Monad(ABC, Generic[P]):
    """Sequencing over a carrier.

    Instances must satisfy the monad laws:
    ``flat_map(returns(a), f) == f(a)``, ``flat_map(p, returns) == p`` and
    ``flat_map(flat_map(p, f), g) == flat_map(p, lambda a: flat_map(f(a), g))``.
    """

    @abstractmethod
    def flat_map(self, p: Any, f: Callable[[Any], Any]) -> Any:
        """Run ``f`` on the value inside ``p`` and return its carrier."""

    @abstractmethod
    def returns(self, a: A) -> Any:
        """Lift a plain value into the carrier with no added effect."""

    def map(self, p: Any, f: Callable[[A], B]) -> Any:
        return self.flat_map(p, lambda a: self.returns(f(a)))

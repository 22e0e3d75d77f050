from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Option(Generic[T]):
    """A value that may be absent.

    ``Some`` continues a chain, ``NONE`` short-circuits it: once absent, every
    later ``map``/``flat_map`` is skipped and the result stays absent.
    """
    def is_some(self) -> bool: raise NotImplementedError
    def is_none(self) -> bool: return not self.is_some()

    def map(self, f: Callable[[T], U]) -> "Option[U]":
        if self.is_some():
            return Some(f(self.value))  # type: ignore[attr-defined]
        return NONE

    def flat_map(self, f: Callable[[T], "Option[U]"]) -> "Option[U]":
        if self.is_some():
            return f(self.value)  # type: ignore[attr-defined]
        return NONE

    def get(self) -> T:
        if self.is_some():
            return self.value  # type: ignore[attr-defined]
        raise ValueError("get on an empty Option")

    def get_or_else(self, default: U) -> T | U:
        return self.value if self.is_some() else default  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Some(Option[T]):
    value: T
    def __repr__(self) -> str: return f"Some({self.value!r})"
    def is_some(self) -> bool: return True


class _None(Option[None]):
    __slots__ = ()
    def __repr__(self) -> str: return "None"
    def is_some(self) -> bool: return False


NONE: Option[None] = _None()

from __future__ import annotations
import asyncio
from dataclasses import dataclass, field
import traceback
from typing import Generic, Optional, TypeVar

E = TypeVar("E"); A = TypeVar("A")


class Failure(Exception, Generic[E]):
    """Typed failure raised through an Effect; ``error`` is the payload."""
    def __init__(self, error: E, annotations: Optional[list[str]] = None):
        super().__init__(repr(error)); self.error = error; self.annotations = list(annotations or [])


def _wrapped(ex: BaseException) -> Optional[BaseException]:
    if ex.__cause__ is not None:
        return ex.__cause__
    if isinstance(ex, Failure) and isinstance(ex.error, BaseException):
        return ex.error
    return None


def root_cause(ex: BaseException) -> BaseException:
    """Follow wrapped causes down to the innermost exception.

    An exception wraps another through ``raise ... from ...`` or, for a
    ``Failure``, by carrying an exception as its error. An exception that
    wraps nothing is its own root cause.
    """
    seen = {id(ex)}
    current = ex
    while True:
        nxt = _wrapped(current)
        if nxt is None or id(nxt) in seen:
            return current
        seen.add(id(nxt))
        current = nxt


def format_root_cause(ex: BaseException) -> str:
    root = root_cause(ex)
    return ''.join(traceback.format_exception(type(root), root, root.__traceback__))


@dataclass(frozen=True)
class Cause(Generic[E]):
    kind: str
    error: Optional[E] = None
    defect: Optional[BaseException] = None
    annotations: list[str] = field(default_factory=list)

    def root(self) -> Optional[BaseException]:
        """Innermost exception behind this cause, if there is one."""
        if self.kind == 'die' and self.defect is not None:
            return root_cause(self.defect)
        if self.kind == 'fail' and isinstance(self.error, BaseException):
            return root_cause(self.error)
        return None

    def render(self, indent: str = "", include_traces: bool = True) -> str:
        def line(s: str) -> str: return indent + s + "\n"
        notes = "".join(line("@ " + n) for n in self.annotations)
        if self.kind == 'fail': return notes + line(f"Fail({self.error!r})")
        if self.kind == 'die':
            s = notes + line(f"Die({self.defect!r})")
            if include_traces and self.defect is not None and self.defect.__traceback__:
                s += ''.join(indent + '  ' + l for l in format_root_cause(self.defect).splitlines(True))
            return s
        if self.kind == 'interrupt': return notes + line("Interrupt")
        return notes + line(f"Unknown({self.kind})")

    @staticmethod
    def fail(e: E) -> "Cause[E]": return Cause(kind='fail', error=e)
    @staticmethod
    def die(ex: BaseException) -> "Cause[E]": return Cause(kind='die', defect=ex)
    @staticmethod
    def interrupt() -> "Cause[E]": return Cause(kind='interrupt')


def annotate_cause(c: Cause[E], note: str) -> Cause[E]:
    return Cause(kind=c.kind, error=c.error, defect=c.defect, annotations=[*c.annotations, note])


@dataclass
class Exit(Generic[E, A]):
    success: bool
    value: Optional[A] = None
    cause: Optional[Cause[E]] = None

    @staticmethod
    def from_exception(ex: BaseException) -> "Exit[E, A]":
        if isinstance(ex, Failure):
            c: Cause[E] = Cause.fail(ex.error)
            for n in ex.annotations:
                c = annotate_cause(c, str(n))
            return Exit(success=False, cause=c)
        if isinstance(ex, asyncio.CancelledError):
            return Exit(success=False, cause=Cause.interrupt())
        return Exit(success=False, cause=Cause.die(ex))

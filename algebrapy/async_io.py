from __future__ import annotations
from typing import Any, Callable, Optional, TextIO

from .algebra import IO, Monad
from .core import Effect, succeed, sync


class EffectMonad(Monad[Effect[Any, Any, Any]]):
    """Sequencing for Effect; each continuation waits for the previous step."""

    def flat_map(self, p: Effect[Any, Any, Any], f: Callable[[Any], Effect[Any, Any, Any]]) -> Effect[Any, Any, Any]:
        return p.flat_map(f)

    def returns(self, a: Any) -> Effect[Any, Any, Any]:
        return succeed(a)


class AsyncIO(IO[Effect[Any, Any, Any]]):
    """IO over deferred asynchronous effects.

    ``read`` stands in for a web-service call and resolves immediately;
    ``calculate`` passes its input through unchanged.
    """
    RESPONSE = "read from web service"

    def __init__(self, out: Optional[TextIO] = None):
        self._out = out

    def read(self) -> Effect[Any, Any, str]:
        return succeed(self.RESPONSE)

    def log(self, input: str) -> Effect[Any, Any, None]:
        return sync(lambda: print(f"AsyncIO log: {input}", file=self._out))

    def calculate(self, sentence: str) -> Effect[Any, Any, str]:
        return succeed(sentence)

from __future__ import annotations
from typing import Awaitable, Callable, Generic, TypeVar, Any
from .cause import Failure
from .context import Context

R = TypeVar("R"); E = TypeVar("E"); A = TypeVar("A"); B = TypeVar("B")


class Effect(Generic[R, E, A]):
    """A deferred asynchronous computation.

    Nothing runs until the effect is awaited against a Context (directly via
    ``_run`` or through a ``Runtime``). Each ``flat_map`` continuation starts
    only after the previous step has completed, so chained steps keep their
    order even though the event loop decides where they are scheduled.
    """
    def __init__(self, run: Callable[[Context], Awaitable[A]]): self._run_impl = run
    async def _run(self, ctx: Context) -> A: return await self._run_impl(ctx)

    def map(self, f: Callable[[A], B]) -> "Effect[R, E, B]":
        async def mapped(ctx: Context) -> B:
            value = await self._run(ctx)
            return f(value)
        return Effect(mapped)

    def flat_map(self, f: Callable[[A], "Effect[R, E, B]"]) -> "Effect[R, E, B]":
        async def chained(ctx: Context) -> B:
            value = await self._run(ctx)
            # the continuation is built only once the previous step has a value
            return await f(value)._run(ctx)
        return Effect(chained)

    # notes attached here show up on the Cause reported by Fiber.await_
    def annotate(self, note: str) -> "Effect[R, E, A]":
        async def run(ctx: Context):
            try:
                return await self._run(ctx)
            except Failure as fe:
                raise Failure(fe.error, annotations=[*fe.annotations, note]) from fe.__cause__
        return Effect(run)


def succeed(a: A) -> Effect[Any, Any, A]:
    async def run(_: Context): return a
    return Effect(run)

def fail(e: E) -> Effect[Any, E, Any]:
    async def run(_: Context): raise Failure(e)
    return Effect(run)

def sync(thunk: Callable[[], A]) -> Effect[Any, Any, A]:
    async def run(_: Context): return thunk()
    return Effect(run)

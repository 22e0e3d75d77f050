from __future__ import annotations
import asyncio
from typing import Optional, TypeVar, Any, Generic, Callable, List
import uuid
from .context import Context
from .cause import Exit
from .core import Effect

E = TypeVar("E"); A = TypeVar("A")


class Fiber(Generic[E, A]):
    """A forked effect running as an asyncio task.

    Observers registered with ``on_complete`` are called with the fiber's
    ``Exit`` once the task settles, and always before ``await_``/``join``
    hand control back to the waiting caller.

    Example:
        ```python
        fiber = runtime.fork(logged_calculation(ASYNC_IO, EFFECT_MONAD))
        fiber.on_complete(lambda exit_: print(exit_.value))
        await fiber.await_()
        ```
    """
    def __init__(self, task: asyncio.Task, name: Optional[str] = None):
        self._task = task
        self.id: str = uuid.uuid4().hex
        self.name: Optional[str] = name
        self._status: str = "running"
        self._exit: Optional[Exit[E, A]] = None
        self._observers: List[Callable[[Exit[E, A]], None]] = []
        task.add_done_callback(self._settle)

    @property
    def status(self) -> str:
        return self._status

    def _settle(self, t: asyncio.Task) -> None:
        # reached from the done callback or from await_, whichever runs first
        if self._exit is not None:
            return
        if t.cancelled():
            self._status = "cancelled"
            self._exit = Exit.from_exception(asyncio.CancelledError())
        elif t.exception() is not None:
            self._status = "failed"
            self._exit = Exit.from_exception(t.exception())  # type: ignore[arg-type]
        else:
            self._status = "done"
            self._exit = Exit(success=True, value=t.result())
        observers, self._observers = self._observers, []
        for obs in observers:
            obs(self._exit)

    def on_complete(self, observer: Callable[[Exit[E, A]], None]) -> None:
        """Register ``observer``; it runs right away if the fiber already settled."""
        if self._task.done():
            self._settle(self._task)
        if self._exit is not None:
            observer(self._exit)
        else:
            self._observers.append(observer)

    async def await_(self) -> Exit[E, A]:
        """Wait for the fiber to settle and return its ``Exit``; never raises."""
        try:
            await self._task
        except BaseException:
            # only the fiber's own outcome is folded into the Exit
            if not self._task.done():
                raise
        self._settle(self._task)
        return self._exit  # type: ignore[return-value]

    async def join(self) -> A:
        """Wait for the fiber and return its value, re-raising any failure."""
        return await self._task

    def interrupt(self) -> None:
        self._task.cancel()


class Runtime:
    """Runs effects against a base Context, inline or as forked fibers."""
    def __init__(self, base: Optional[Context] = None):
        self.base = base or Context()

    def fork(self, eff: Effect[Any, E, A], name: Optional[str] = None) -> Fiber[E, A]:
        async def runner():
            return await eff._run(self.base)
        return Fiber(asyncio.create_task(runner()), name=name)

    async def run(self, eff: Effect[Any, E, A]) -> A:
        return await eff._run(self.base)

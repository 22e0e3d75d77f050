from __future__ import annotations
from typing import Optional, TypeVar, Generic, Any, Callable, List
import anyio
import anyio.abc
from .context import Context
from .cause import Exit
from .core import Effect

E = TypeVar('E'); A = TypeVar('A')


class AnyIOFiber(Generic[E, A]):
    """Fiber counterpart for effects forked into an anyio task group."""
    def __init__(self, cancel_scope: anyio.CancelScope):
        self._done = anyio.Event(); self._scope = cancel_scope
        self._exit: Optional[Exit[E, A]] = None
        self._observers: List[Callable[[Exit[E, A]], None]] = []

    def _settle(self, exit_: Exit[E, A]) -> None:
        self._exit = exit_
        observers, self._observers = self._observers, []
        for obs in observers: obs(exit_)
        self._done.set()

    def on_complete(self, observer: Callable[[Exit[E, A]], None]) -> None:
        if self._exit is not None: observer(self._exit)
        else: self._observers.append(observer)

    async def await_(self) -> Exit[E, A]:
        await self._done.wait()
        assert self._exit is not None
        return self._exit

    def interrupt(self) -> None: self._scope.cancel()


class AnyIORuntime:
    """Runtime that forks effects into an anyio task group.

    Use it as an async context manager; leaving the block waits for every
    forked fiber.

    Example:
        ```python
        async with AnyIORuntime(env) as rt:
            fiber = await rt.fork(logged_calculation(ASYNC_IO, EFFECT_MONAD))
            exit_ = await fiber.await_()
        ```
    """
    def __init__(self, base: Optional[Context] = None): self.base = base or Context(); self._tg: Optional[anyio.abc.TaskGroup] = None

    async def __aenter__(self) -> 'AnyIORuntime': self._tg = await anyio.create_task_group().__aenter__(); return self
    async def __aexit__(self, et, e, tb): assert self._tg is not None; await self._tg.__aexit__(et, e, tb); self._tg = None

    async def run(self, eff: Effect[Any, E, A]) -> A:
        return await eff._run(self.base)

    async def fork(self, eff: Effect[Any, E, A]) -> AnyIOFiber[E, A]:
        if self._tg is None: raise RuntimeError("Use AnyIORuntime in 'async with' context")
        holder: dict[str, AnyIOFiber[E, A]] = {}
        async def worker(task_status=anyio.TASK_STATUS_IGNORED):
            with anyio.CancelScope() as scope:
                fiber: AnyIOFiber[E, A] = AnyIOFiber(scope)
                holder['fiber'] = fiber
                task_status.started(scope)
                try:
                    v = await eff._run(self.base)
                except anyio.get_cancelled_exc_class() as ex:
                    fiber._settle(Exit.from_exception(ex))
                    raise
                except Exception as ex:
                    fiber._settle(Exit.from_exception(ex))
                else:
                    fiber._settle(Exit(success=True, value=v))
        await self._tg.start(worker)
        return holder['fiber']

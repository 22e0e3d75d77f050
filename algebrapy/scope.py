from __future__ import annotations
from typing import Awaitable, Callable, List


class Scope:
    """Collects async finalizers and runs them in LIFO order on ``close``.

    The demo driver opens one scope for the services it builds (logger,
    calendar, configuration) and closes it once every demo has finished.
    """

    def __init__(self):
        self._finalizers: List[Callable[[], Awaitable[None]]] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def add_finalizer(self, fin: Callable[[], Awaitable[None]]) -> None:
        # a closed scope runs late finalizers straight away
        if self._closed: await fin()
        else: self._finalizers.append(fin)

    async def close(self) -> None:
        if self._closed: return
        self._closed = True
        errors: List[BaseException] = []
        while self._finalizers:
            fin = self._finalizers.pop()
            try: await fin()
            except Exception as ex: errors.append(ex)
        if errors:
            raise errors[0]

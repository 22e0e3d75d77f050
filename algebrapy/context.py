from __future__ import annotations
from typing import Any, Dict, TypeVar

A = TypeVar("A")

class Context:
    """Immutable service container handed to every effect when it runs.

    Services are keyed by their type. The demos keep the logger, the calendar
    and the demo configuration here.

    Example:
        ```python
        ctx = Context().with_service(Calendar, TestCalendar(date(2024, 1, 10)))
        ctx.get(Calendar).today()
        ```
    """
    def __init__(self, values: Dict[type, Any] | None = None): self._values = dict(values or {})

    def get(self, t: type[A]) -> A:
        """Return the service registered under ``t``.

        Raises:
            KeyError: If no service of that type was provided
        """
        if t not in self._values: raise KeyError(f"Missing service: {t.__name__}")
        return self._values[t]

    def get_or(self, t: type[A], default: A) -> A:
        return self._values.get(t, default)

    def add(self, t: type[A], v: A) -> "Context":
        c = dict(self._values); c[t] = v; return Context(c)

    def with_service(self, t: type[A], v: A) -> "Context":
        return self.add(t, v)

    def merge(self, other: "Context") -> "Context":
        c = dict(self._values); c.update(other._values); return Context(c)

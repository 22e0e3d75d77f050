from __future__ import annotations
import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .context import Context
from .core import Effect
from .layer import from_resource, Layer


class Direction(Enum):
    AGO = "ago"
    FROM_NOW = "from_now"


class Calendar:
    def today(self) -> _dt.date:
        return _dt.date.today()


class TestCalendar(Calendar):
    """Calendar pinned to one day."""
    __test__ = False

    def __init__(self, fixed: _dt.date) -> None:
        self._fixed = fixed

    def today(self) -> _dt.date:  # type: ignore[override]
        return self._fixed


def offset(n: int, direction: Direction, today: _dt.date) -> _dt.date:
    if direction is Direction.AGO:
        return today - _dt.timedelta(days=n)
    if direction is Direction.FROM_NOW:
        return today + _dt.timedelta(days=n)
    raise ValueError(f"unknown direction: {direction!r}")


@dataclass(frozen=True)
class Days:
    """``Days(2).ago()`` / ``Days(5).from_now()``, relative to today."""
    n: int

    def ago(self, today: Optional[_dt.date] = None) -> _dt.date:
        return offset(self.n, Direction.AGO, today or _dt.date.today())

    def from_now(self, today: Optional[_dt.date] = None) -> _dt.date:
        return offset(self.n, Direction.FROM_NOW, today or _dt.date.today())


def days_ago(n: int, today: Optional[_dt.date] = None) -> _dt.date:
    return Days(n).ago(today)


def days_from_now(n: int, today: Optional[_dt.date] = None) -> _dt.date:
    return Days(n).from_now(today)


def format_short(date: _dt.date) -> str:
    """The date in the current locale's short date representation."""
    return date.strftime("%x")


async def _mk_calendar(_ctx: Context) -> Calendar:
    return Calendar()


async def _close_calendar(_c: Calendar) -> None:
    return None


CalendarLayer = from_resource(Calendar, _mk_calendar, _close_calendar)


def TestCalendarLayer(fixed: _dt.date) -> Layer:
    async def mk(_ctx: Context) -> Calendar:
        return TestCalendar(fixed)

    async def close(_c: Calendar) -> None:
        return None

    # registered under Calendar so consumers need not know it is pinned
    return from_resource(Calendar, mk, close)


# Effect helpers reading the Calendar service


def today() -> Effect[object, object, _dt.date]:
    async def run(ctx: Context) -> _dt.date:
        return ctx.get(Calendar).today()

    return Effect(run)


def days_ago_eff(n: int) -> Effect[object, object, _dt.date]:
    return today().map(lambda t: offset(n, Direction.AGO, t))


def days_from_now_eff(n: int) -> Effect[object, object, _dt.date]:
    return today().map(lambda t: offset(n, Direction.FROM_NOW, t))

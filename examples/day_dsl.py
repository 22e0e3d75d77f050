"""
Relative dates: "2 days ago" and "5 days from now".

Run: python examples/day_dsl.py
"""
import asyncio
import datetime as dt

from algebrapy import Context, Runtime, Days, format_short, TestCalendarLayer
from algebrapy.dates import days_ago_eff, days_from_now_eff


async def main():
    # plain functions against the real calendar
    print(format_short(Days(2).ago()))
    print(format_short(Days(5).from_now()))

    # the same as effects, against a pinned calendar
    env = await TestCalendarLayer(dt.date(2024, 2, 28)).build(Context())
    rt = Runtime(env)
    print("pinned:", format_short(await rt.run(days_ago_eff(2))), format_short(await rt.run(days_from_now_eff(5))))


if __name__ == "__main__":
    asyncio.run(main())

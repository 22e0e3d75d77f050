"""
Demo driver: one generic logged calculation run against three carriers, then
the relative-date DSL.

Run: python -m algebrapy [option|async|id|dates ...] [--backend anyio]
"""
from __future__ import annotations
import asyncio
import sys
from typing import Any, Callable, Optional, Sequence, TextIO

from .algebra import IO
from .anyio_runtime import AnyIORuntime
from .async_io import AsyncIO, EffectMonad
from .cause import Exit, format_root_cause
from .config import DemoConfig, config_layer, parse_config
from .console_io import ConsoleIO, IdMonad
from .context import Context
from .dates import CalendarLayer, days_ago_eff, days_from_now_eff, format_short
from .logger import ConsoleLogger, logger_layer
from .option import Option
from .option_io import OptionIO, OptionMonad
from .program import logged_calculation
from .runtime import Runtime
from .scope import Scope


def run_option(cfg: DemoConfig, out: Optional[TextIO] = None) -> Option[str]:
    print(file=out)
    result = logged_calculation(OptionIO(cfg.prime_count, out), OptionMonad(out))
    print(f"loggedCalculation[Option] = {result!r}", file=out)
    return result


def report_async(out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> Callable[[Exit[Any, str]], None]:
    """Completion observer for the async carrier."""
    def observer(exit_: Exit[Any, str]) -> None:
        if exit_.success:
            print(f"loggedCalculation[Effect] = {exit_.value}", file=out)
            return
        assert exit_.cause is not None
        print("An error has occurred: ", file=err or sys.stderr)
        root = exit_.cause.root()
        if root is not None:
            print(format_root_cause(root), end="", file=err or sys.stderr)
        else:
            print(exit_.cause.render(), end="", file=err or sys.stderr)
    return observer


async def run_async(env: Context, io: Optional[IO[Any]] = None,
                    out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> Exit[Any, str]:
    """Fork the async program, observe its completion and wait for it."""
    print(file=out)
    cfg = env.get_or(DemoConfig, DemoConfig())
    eff = logged_calculation(io or AsyncIO(out), EffectMonad())
    if cfg.backend == "anyio":
        async with AnyIORuntime(env) as rt:
            fiber = await rt.fork(eff)
            fiber.on_complete(report_async(out, err))
            return await fiber.await_()
    fiber = Runtime(env).fork(eff, name="loggedCalculation")
    fiber.on_complete(report_async(out, err))
    return await fiber.await_()


def run_identity(out: Optional[TextIO] = None) -> str:
    print(file=out)
    result = logged_calculation(ConsoleIO(out), IdMonad())
    print(f"loggedCalculation[Id] = {result}", file=out)
    return result


async def run_dates(env: Context, out: Optional[TextIO] = None) -> None:
    print(file=out)
    rt = Runtime(env)
    print(format_short(await rt.run(days_ago_eff(2))), file=out)
    print(format_short(await rt.run(days_from_now_eff(5))), file=out)


async def main_async(cfg: DemoConfig, out: Optional[TextIO] = None) -> None:
    scope = Scope()
    layer = logger_layer(cfg.log_level, cfg.json_logs) | CalendarLayer | config_layer(cfg)
    env = await layer.build_scoped(Context(), scope)
    logger = env.get(ConsoleLogger).bind(backend=cfg.backend)
    try:
        for demo in cfg.demos:
            await logger.debug("demo start", demo=demo)
            if demo == "option":
                run_option(cfg, out)
            elif demo == "async":
                exit_ = await run_async(env, out=out)
                if not exit_.success:
                    await logger.warn("async demo failed", demo=demo)
            elif demo == "id":
                run_identity(out)
            elif demo == "dates":
                await run_dates(env, out)
            await logger.info("demo done", demo=demo)
    finally:
        await scope.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    cfg = parse_config(argv)
    asyncio.run(main_async(cfg))
    return 0

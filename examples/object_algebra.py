"""
Object algebra: one logged calculation, three interpretations.

Run: python examples/object_algebra.py
"""
import asyncio

from algebrapy import (
    logged_calculation,
    OptionIO,
    OptionMonad,
    AsyncIO,
    EffectMonad,
    ConsoleIO,
    IdMonad,
    Runtime,
    Context,
    Scope,
    LoggerLayer,
    ConsoleLogger,
)
from algebrapy.demo import report_async


async def main():
    scope = Scope()
    env = await LoggerLayer.build_scoped(Context(), scope)
    logger = env.get(ConsoleLogger)

    # Option: prints every intermediate step, yields the largest primes <= 1000
    print("loggedCalculation[Option] =", logged_calculation(OptionIO(), OptionMonad()))

    # Effect: nothing happens until the fiber runs; the observer reports the outcome
    fiber = Runtime(env).fork(logged_calculation(AsyncIO(), EffectMonad()))
    fiber.on_complete(report_async())
    exit_ = await fiber.await_()
    await logger.info("async carrier settled", success=exit_.success)

    # Identity: plain values, no wrapping at all
    print("loggedCalculation[Id] =", logged_calculation(ConsoleIO(), IdMonad()))

    await scope.close()


if __name__ == "__main__":
    asyncio.run(main())

from __future__ import annotations
from typing import Any

from .algebra import IO, Monad


def logged_calculation(io: IO[Any], monad: Monad[Any]) -> Any:
    """Read an input, log it, then calculate from it.

    Written once against the two interfaces and interpreted by whichever
    carrier pair is passed in. ``calculate`` always receives the value that
    ``read`` produced; the value of ``log`` is discarded. The calculate step
    is the last link in the chain and is not lifted again.

    Example:
        ```python
        logged_calculation(ConsoleIO(), IdMonad())          # 'Id ok'
        logged_calculation(OptionIO(), OptionMonad())       # Some('[937, ..., 997]')
        await Runtime().run(logged_calculation(AsyncIO(), EffectMonad()))
        ```
    """
    return monad.flat_map(
        io.read(),
        lambda input: monad.flat_map(
            io.log(input),
            lambda _: io.calculate(input),
        ),
    )

from .algebra import IO, Monad
from .program import logged_calculation
from .option import Option, Some, NONE
from .option_io import OptionIO, OptionMonad
from .async_io import AsyncIO, EffectMonad
from .console_io import ConsoleIO, IdMonad
from .primes import primes, primes_to, last_primes, parse_threshold
from .cause import Failure, Cause, Exit, root_cause, format_root_cause
from .core import Effect, succeed, fail, sync
from .context import Context
from .scope import Scope
from .layer import Layer, from_resource, provide_service
from .runtime import Runtime, Fiber
from .anyio_runtime import AnyIORuntime, AnyIOFiber
from .logger import ConsoleLogger, LoggerLayer, logger_layer
from .config import DemoConfig, config_layer, parse_config
from .dates import (
    Direction,
    Days,
    Calendar,
    TestCalendar,
    CalendarLayer,
    TestCalendarLayer,
    days_ago,
    days_from_now,
    format_short,
)

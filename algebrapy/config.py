from __future__ import annotations
import argparse
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .layer import Layer, provide_service

DEMOS: Tuple[str, ...] = ("option", "async", "id", "dates")
BACKENDS: Tuple[str, ...] = ("asyncio", "anyio")


@dataclass(frozen=True)
class DemoConfig:
    """Settings for one run of the demo driver.

    Attributes:
        demos: Which demonstrations to run, in order
        log_level: Level for the stderr ConsoleLogger
        json_logs: Emit log records as JSON lines
        prime_count: How many of the largest primes the Option carrier reports
        backend: ``asyncio`` runs the async carrier on ``Runtime``, ``anyio`` on ``AnyIORuntime``
    """
    demos: Tuple[str, ...] = DEMOS
    log_level: str = "WARN"
    json_logs: bool = False
    prime_count: int = 10
    backend: str = "asyncio"

    def __post_init__(self) -> None:
        unknown = [d for d in self.demos if d not in DEMOS]
        if unknown:
            raise ValueError(f"unknown demo(s): {', '.join(unknown)}")
        if self.backend not in BACKENDS:
            raise ValueError(f"unknown backend: {self.backend}")
        if self.prime_count < 1:
            raise ValueError("prime_count must be positive")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="algebrapy",
        description="Run one generic logged calculation against several effect carriers, plus a relative-date DSL.",
    )
    p.add_argument("demos", nargs="*", metavar="DEMO",
                   help=f"demos to run (default: all of {', '.join(DEMOS)})")
    p.add_argument("--log-level", default="WARN", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    p.add_argument("--json-logs", action="store_true", help="write log records as JSON lines")
    p.add_argument("--prime-count", type=int, default=10, help="largest primes reported by the Option carrier")
    p.add_argument("--backend", default="asyncio", choices=BACKENDS)
    return p


def parse_config(argv: Optional[Sequence[str]] = None) -> DemoConfig:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return DemoConfig(
            demos=tuple(args.demos) or DEMOS,
            log_level=args.log_level,
            json_logs=args.json_logs,
            prime_count=args.prime_count,
            backend=args.backend,
        )
    except ValueError as ex:
        parser.error(str(ex))  # exits with status 2
        raise


def config_layer(cfg: DemoConfig) -> Layer:
    return provide_service(DemoConfig, cfg)

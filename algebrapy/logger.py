from __future__ import annotations
import sys, datetime as _dt, json
from typing import Optional, Dict, Any, TextIO
from .layer import from_resource, Layer
from .context import Context


_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


class ConsoleLogger:
    """Structured logger writing one line per record to stderr.

    Records are ``[ts] name LEVEL: msg k=v ...`` or, with ``json_output``, one
    compact JSON object per line. ``bind`` returns a child logger that adds
    fixed fields to every record.
    """
    def __init__(self, name: str = "algebrapy", level: str = "INFO", json_output: bool = False,
                 context: Optional[Dict[str, Any]] = None, stream: Optional[TextIO] = None):
        self.name = name
        self.level = _LEVELS.get(level.upper(), 20)
        self.json_output = json_output
        self.context = dict(context or {})
        self._stream = stream

    def set_level(self, level: str) -> None:
        self.level = _LEVELS.get(level.upper(), self.level)

    def bind(self, **fields: Any) -> "ConsoleLogger":
        ctx = dict(self.context); ctx.update(fields)
        return ConsoleLogger(self.name, level=self.level_name, json_output=self.json_output, context=ctx, stream=self._stream)

    @property
    def level_name(self) -> str:
        for k, v in _LEVELS.items():
            if v == self.level: return k
        return "INFO"

    def enabled(self, level: str) -> bool:
        return _LEVELS[level] >= self.level

    async def _log(self, level: str, msg: str, **fields: Any) -> None:
        if not self.enabled(level):
            return
        # resolved per call so redirect_stderr is honoured
        out = self._stream or sys.stderr
        ts = _dt.datetime.now(_dt.timezone.utc).isoformat()
        all_fields: Dict[str, Any] = {}
        all_fields.update(self.context)
        all_fields.update(fields)
        if self.json_output:
            data: Dict[str, Any] = {"ts": ts, "name": self.name, "level": level, "msg": msg}
            if all_fields:
                data["fields"] = all_fields
            print(json.dumps(data, separators=(",", ":"), default=str), file=out)
        else:
            extras = "".join([f" {k}={v}" for k, v in sorted(all_fields.items())])
            print(f"[{ts}] {self.name} {level}: {msg}{extras}", file=out)

    async def debug(self, msg: str, **fields: Any) -> None: await self._log("DEBUG", msg, **fields)
    async def info(self, msg: str, **fields: Any) -> None: await self._log("INFO", msg, **fields)
    async def warn(self, msg: str, **fields: Any) -> None: await self._log("WARN", msg, **fields)
    async def error(self, msg: str, **fields: Any) -> None: await self._log("ERROR", msg, **fields)


def logger_layer(level: str = "INFO", json_output: bool = False) -> Layer:
    async def mk(_ctx: Context) -> ConsoleLogger: return ConsoleLogger(level=level, json_output=json_output)
    async def close(_l: ConsoleLogger) -> None: return None
    return from_resource(ConsoleLogger, mk, close)


LoggerLayer = logger_layer()

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TextIO


class PipelineLogger:
    """Run logger with a console sink and optional info/trace files.

    - console   : INFO+ by default (``min_level``)
    - info_file : INFO+
    - trace_file: everything, including TRACE
    """

    LEVELS: dict[str, int] = {
        "TRACE": -1,
        "DEBUG": 0,
        "INFO": 1,
        "METRIC": 1,
        "WARN": 2,
        "ERROR": 3,
    }

    def __init__(
        self,
        log_file: str | Path | None = None,
        trace_file: str | Path | None = None,
        console: bool = True,
        min_level: str = "INFO",
    ) -> None:
        self.console = console
        self.min_level = self.LEVELS.get(min_level.upper(), 1)
        self._start = time.perf_counter()
        self._timers: dict[str, float] = {}
        self.metrics: dict[str, Any] = {}
        self._info_file = self._open(log_file, "FitTag Log")
        self._trace_file = self._open(trace_file, "FitTag Trace Log")

    @staticmethod
    def _open(path: str | Path | None, title: str) -> TextIO | None:
        if not path:
            return None
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(path, "w", encoding="utf-8", buffering=1)
        handle.write(f"{title} - {time.strftime('%Y-%m-%d %H:%M:%S')}\n\n")
        return handle

    def _write(self, line: str, level_int: int, force_console: bool = False) -> None:
        if self.console and (force_console or level_int >= self.min_level):
            print(line, flush=True)
        if self._info_file and level_int >= 1:
            self._info_file.write(line + "\n")
        if self._trace_file:
            self._trace_file.write(line + "\n")

    def _emit(self, level: str, msg: str) -> None:
        elapsed = time.perf_counter() - self._start
        line = f"[{time.strftime('%H:%M:%S')}] [{elapsed:7.2f}s] {level:6} | {msg}"
        self._write(line, self.LEVELS.get(level, 1))

    def trace(self, msg: str) -> None:
        self._emit("TRACE", msg)

    def debug(self, msg: str) -> None:
        self._emit("DEBUG", msg)

    def info(self, msg: str) -> None:
        self._emit("INFO", msg)

    def warn(self, msg: str) -> None:
        self._emit("WARN", msg)

    def error(self, msg: str) -> None:
        self._emit("ERROR", msg)

    def section(self, title: str, rule: str = "=") -> None:
        sep = rule * 72
        for line in ("", sep, f"  {title}", sep):
            self._write(line, 1, force_console=True)

    def subsection(self, title: str) -> None:
        self.section(title, rule="-")

    def metric(self, name: str, value: Any, unit: str = "") -> None:
        self.metrics[name] = value
        vstr = f"{value:.3f}" if isinstance(value, float) else str(value)
        self._emit("METRIC", f"{name} = {vstr}{' ' + unit if unit else ''}")

    @contextmanager
    def timer(self, name: str):
        self._timers[name] = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - self._timers.pop(name)
            self.metric(f"timer:{name}", elapsed, "s")

    def install_stdlib_bridge(self, root_logger: str = "", level: int = logging.INFO) -> None:
        """Route stdlib ``logging`` records under *root_logger* into this logger."""
        handler = _BridgeHandler(self)
        handler.setLevel(level)
        root = logging.getLogger(root_logger)
        root.setLevel(min(root.level or logging.DEBUG, level))
        # One bridge per logger: a newer run logger replaces the old one.
        for old in [h for h in root.handlers if isinstance(h, _BridgeHandler)]:
            root.removeHandler(old)
        root.addHandler(handler)

    def close(self) -> None:
        for handle in (self._info_file, self._trace_file):
            if handle:
                handle.close()
        self._info_file = self._trace_file = None

    def __enter__(self) -> "PipelineLogger":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


class _BridgeHandler(logging.Handler):
    _MAP = {
        logging.DEBUG: "debug",
        logging.INFO: "info",
        logging.WARNING: "warn",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def __init__(self, logger: PipelineLogger) -> None:
        super().__init__()
        self._target = logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            getattr(self._target, self._MAP.get(record.levelno, "info"))(
                f"[{record.name}] {msg}"
            )
        except Exception:
            self.handleError(record)


_default: PipelineLogger | None = None


def get_logger() -> PipelineLogger:
    global _default
    if _default is None:
        _default = PipelineLogger()
    return _default


def set_logger(logger: PipelineLogger) -> None:
    global _default
    _default = logger

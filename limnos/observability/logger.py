# limnos/observability/logger.py

"""Structured logging with trace/span propagation for engine computations."""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from functools import wraps
from typing import Optional, Union

_trace_id: ContextVar[str] = ContextVar("trace_id", default="")
_span_id: ContextVar[str] = ContextVar("span_id", default="")
_component: ContextVar[str] = ContextVar("component", default="")

_LEVELS = {"DEBUG": logging.DEBUG, "INFO": logging.INFO, "WARNING": logging.WARNING, "ERROR": logging.ERROR}


def new_trace_id() -> str:
    return uuid.uuid4().hex[:16]


def new_span_id() -> str:
    return uuid.uuid4().hex[:8]


def set_trace_context(trace_id: str, component: str = "") -> None:
    _trace_id.set(trace_id)
    _component.set(component)


def get_trace_id() -> str:
    return _trace_id.get()


class StructuredFormatter(logging.Formatter):
    """JSON log formatter carrying the active trace context."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "trace_id": _trace_id.get(""),
            "span_id": _span_id.get(""),
            "component": _component.get(""),
        }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        for key in ("duration_ms", "status", "lake_id", "error_type"):
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        return json.dumps(log_entry)


def setup_logging(level: Union[int, str] = logging.INFO, structured: bool = True) -> None:
    """Configure root logger with structured or human-readable output."""
    if isinstance(level, str):
        level = _LEVELS.get(level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
    root.addHandler(handler)


def traced(component: str):
    """Decorator that adds trace context and timing to an engine call."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not _trace_id.get():
                _trace_id.set(new_trace_id())
            _span_id.set(new_span_id())
            _component.set(component)
            logger = logging.getLogger(component)
            start = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                duration = (time.monotonic() - start) * 1000
                logger.error(
                    "Failed %s after %.0fms: %s",
                    func.__name__,
                    duration,
                    exc,
                    extra={
                        "status": "failed",
                        "duration_ms": round(duration),
                        "error_type": type(exc).__name__,
                    },
                    exc_info=True,
                )
                raise
            duration = (time.monotonic() - start) * 1000
            logger.debug(
                "Completed %s in %.1fms",
                func.__name__,
                duration,
                extra={"status": "completed", "duration_ms": round(duration)},
            )
            return result
        return wrapper
    return decorator


class SpanContext:
    """Context manager timing one section of a computation."""

    def __init__(self, name: str, component: str = "", lake_id: Optional[str] = None):
        self.name = name
        self.component = component
        self.lake_id = lake_id
        self.start_time = 0.0
        self.duration_ms = 0.0
        self.logger = logging.getLogger(component or "limnos")

    def _extra(self, status: str) -> dict:
        extra = {"status": status, "duration_ms": round(self.duration_ms)}
        if self.lake_id:
            extra["lake_id"] = self.lake_id
        return extra

    def __enter__(self):
        self.start_time = time.monotonic()
        _span_id.set(new_span_id())
        if not _trace_id.get():
            _trace_id.set(new_trace_id())
        if self.component:
            _component.set(self.component)
        self.logger.debug("Span started: %s", self.name, extra={"status": "started"})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.monotonic() - self.start_time) * 1000
        if exc_type:
            self.logger.error(
                "Span failed: %s (%.0fms)", self.name, self.duration_ms, extra=self._extra("failed")
            )
        else:
            self.logger.info(
                "Span completed: %s (%.0fms)", self.name, self.duration_ms, extra=self._extra("completed")
            )
        return False

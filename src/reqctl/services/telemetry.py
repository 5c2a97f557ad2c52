"""Timing spans for ``--verbose`` runs.

A service method decorated with :func:`traced` opens a root span; inside it,
``with trace_span("step"):`` opens nested spans.  When the method returns a
ServiceResult the span tree is attached as ``meta["telemetry"]`` and the
CLI prints it under the result.  With telemetry off (the default) both
helpers cost one ContextVar lookup and record nothing.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog

from reqctl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("reqctl_telemetry_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("reqctl_current_span", default=None)

_log = structlog.get_logger("reqctl.telemetry")


@dataclass
class Span:
    """One timed step.  Timestamps are ``perf_counter_ns`` readings."""

    name: str
    started: int = field(default_factory=time.perf_counter_ns)
    finished: int | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds; 0.0 while the span is still open."""
        return 0.0 if self.finished is None else (self.finished - self.started) / 1_000_000

    def end(self) -> None:
        if self.finished is None:
            self.finished = time.perf_counter_ns()

    def child(self, name: str) -> Span:
        span = Span(name=name)
        self.children.append(span)
        return span

    def annotate(self, key: str, value: Any) -> None:
        """Attach a small fact (counts, paths) shown next to the span."""
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [span.to_dict() for span in self.children]
        return data


def telemetry_enabled() -> bool:
    return _enabled.get()


def enable_telemetry() -> None:
    """Turn span recording on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """Innermost running span, for annotating from helper code; None when off."""
    return _current_span.get() if _enabled.get() else None


@contextmanager
def _running(span: Span) -> Iterator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time the enclosed block as a child of the running span.

    Yields None (and records nothing) unless telemetry is on and a
    :func:`traced` call is in progress.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return
    with _running(parent.child(name)) as span:
        yield span


def traced[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Run *func* inside a root span named after its qualified name."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        try:
            with _running(root):
                result = func(*args, **kwargs)
        except Exception:
            _log.debug("span.failed", span=root.name, duration_ms=round(root.duration_ms, 2))
            raise
        return _attach(result, root)

    return wrapper


def _attach[R](result: R, root: Span) -> R:
    """Log the finished root span and copy it into a ServiceResult's meta."""
    if not isinstance(result, ServiceResult):
        _log.debug("span.done", span=root.name, duration_ms=round(root.duration_ms, 2))
        return result

    _log.debug(
        "span.done",
        span=root.name,
        op=result.op,
        ok=result.ok,
        duration_ms=round(root.duration_ms, 2),
        steps=len(root.children),
    )
    meta = {**(result.meta or {}), "telemetry": root.to_dict()}
    return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

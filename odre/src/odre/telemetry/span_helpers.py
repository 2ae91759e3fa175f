"""Dispatch telemetry: OpenTelemetry spans, Prometheus counters and a local ledger.

Every span and counter sample is also appended to an in-process ledger so
hosts and tests can inspect what the engine did without a collector.
"""
from __future__ import annotations

import logging
import time
from collections import deque
from contextlib import contextmanager
from threading import Lock
from typing import Any, Callable, Deque, Dict, Iterator, Optional, Tuple

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from prometheus_client import Counter as PromCounter

logger = logging.getLogger(__name__)

TRACER_NAME = "odre.telemetry"

_LEDGER_LOCK = Lock()
DEFAULT_LEDGER_LIMIT = 1024

# Oldest spans are dropped once the ledger is full.
_LEDGER_SPANS: Deque[Dict[str, Any]] = deque(maxlen=DEFAULT_LEDGER_LIMIT)
_LEDGER_COUNTERS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float] = {}

_PROM_COUNTERS: Dict[Tuple[str, Tuple[str, ...]], Any] = {}


def _coerce_attributes(attributes: Optional[Dict[str, Any]]) -> Dict[str, str]:
    if not attributes:
        return {}
    coerced = {}
    for key, value in attributes.items():
        if value is None:
            continue
        coerced[str(key)] = str(value)
    return coerced


def _attribute_tuple(attributes: Dict[str, str]) -> Tuple[Tuple[str, str], ...]:
    return tuple(sorted(attributes.items()))


def _record_span_snapshot(name: str, duration: float, attributes: Dict[str, str], error: bool) -> None:
    snapshot = {
        "name": name,
        "duration_seconds": duration,
        "attributes": attributes,
        "error": error,
        "timestamp": time.time(),
    }
    with _LEDGER_LOCK:
        _LEDGER_SPANS.append(snapshot)


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
    """Run the body inside an OpenTelemetry span and record it in the ledger.

    Exceptions are recorded on the span and re-raised untouched.
    """

    coerced = _coerce_attributes(attributes)
    start_time = time.perf_counter()
    tracer = trace.get_tracer(TRACER_NAME)

    error = False
    try:
        with tracer.start_as_current_span(name, record_exception=False) as span:
            for key, value in coerced.items():
                span.set_attribute(key, value)
            try:
                yield span
            except Exception as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                raise
    except Exception:
        error = True
        raise
    finally:
        duration = time.perf_counter() - start_time
        _record_span_snapshot(name, duration, coerced, error)


def _get_prom_metric(collection: Dict[Tuple[str, Tuple[str, ...]], Any], factory: Callable[..., Any], name: str, attributes: Dict[str, str]) -> Any:
    label_names = tuple(sorted(attributes))
    key = (name, label_names)
    metric = collection.get(key)
    if metric is None:
        documentation = f"Operator dispatch metric {name}"
        metric = factory(name, documentation, labelnames=list(label_names)) if label_names else factory(name, documentation)
        collection[key] = metric
        logger.debug("created prometheus metric %s labels=%s", name, label_names)
    return metric


def increment_counter(name: str, value: float = 1.0, attributes: Optional[Dict[str, Any]] = None) -> None:
    """Increment a Prometheus counter and the matching ledger entry."""

    coerced = _coerce_attributes(attributes)
    key = (name, _attribute_tuple(coerced))
    with _LEDGER_LOCK:
        _LEDGER_COUNTERS[key] = _LEDGER_COUNTERS.get(key, 0.0) + float(value)

    counter = _get_prom_metric(_PROM_COUNTERS, PromCounter, name, coerced)
    if coerced:
        counter.labels(**coerced).inc(float(value))
    else:
        counter.inc(float(value))


def counter_value(name: str, attributes: Optional[Dict[str, Any]] = None) -> float:
    key = (name, _attribute_tuple(_coerce_attributes(attributes)))
    with _LEDGER_LOCK:
        return _LEDGER_COUNTERS.get(key, 0.0)


def get_recorded_metrics() -> Dict[str, Any]:
    """Return a snapshot of the local ledger."""

    with _LEDGER_LOCK:
        spans = list(_LEDGER_SPANS)
        counters = {key: value for key, value in _LEDGER_COUNTERS.items()}
    return {
        "spans": spans,
        "counters": counters,
    }


def set_ledger_limit(limit: int) -> None:
    """Change how many spans the ledger keeps, discarding the oldest first."""

    global _LEDGER_SPANS
    if limit < 1:
        raise ValueError("ledger limit must be positive")
    with _LEDGER_LOCK:
        _LEDGER_SPANS = deque(_LEDGER_SPANS, maxlen=limit)


def ledger_limit() -> int:
    with _LEDGER_LOCK:
        return _LEDGER_SPANS.maxlen or 0


def reset_recorded_metrics() -> None:
    """Clear the local ledger.  Prometheus collectors keep their totals."""

    with _LEDGER_LOCK:
        _LEDGER_SPANS.clear()
        _LEDGER_COUNTERS.clear()


__all__ = [
    "start_span",
    "increment_counter",
    "counter_value",
    "get_recorded_metrics",
    "reset_recorded_metrics",
    "set_ledger_limit",
    "ledger_limit",
    "DEFAULT_LEDGER_LIMIT",
]

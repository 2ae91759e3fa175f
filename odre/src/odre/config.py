"""Dispatcher settings."""
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import DEFAULT_LEDGER_LIMIT

_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSE_WORDS


@dataclass(frozen=True)
class DispatchConfig:
    """Knobs for a :class:`~odre.dispatch.Dispatcher`.

    ``trace_spans`` wraps each dispatch in a telemetry span,
    ``record_metrics`` counts dispatch outcomes and ``nan_sentinel`` is the
    value returned by the not-a-number default policy.  ``ledger_limit`` caps
    how many spans the in-process telemetry ledger keeps.
    """

    trace_spans: bool = True
    record_metrics: bool = True
    nan_sentinel: float = math.nan
    ledger_limit: int = DEFAULT_LEDGER_LIMIT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DispatchConfig":
        env = os.environ if environ is None else environ
        return cls(
            trace_spans=_flag(env, "ODRE_TRACE_SPANS", True),
            record_metrics=_flag(env, "ODRE_RECORD_METRICS", True),
            ledger_limit=_int(env, "ODRE_LEDGER_LIMIT", DEFAULT_LEDGER_LIMIT),
        )


__all__ = ["DispatchConfig"]

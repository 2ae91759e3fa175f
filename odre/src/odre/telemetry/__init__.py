from .span_helpers import (
    start_span,
    increment_counter,
    counter_value,
    get_recorded_metrics,
    reset_recorded_metrics,
    set_ledger_limit,
    ledger_limit,
    DEFAULT_LEDGER_LIMIT,
)

__all__ = [
    'start_span',
    'increment_counter',
    'counter_value',
    'get_recorded_metrics',
    'reset_recorded_metrics',
    'set_ledger_limit',
    'ledger_limit',
    'DEFAULT_LEDGER_LIMIT',
]

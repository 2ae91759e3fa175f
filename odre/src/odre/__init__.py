from .adapter import (
    COMPOUND_ASSIGNMENTS,
    Cell,
    assign_compound,
    configure,
    dispatch_binary,
    dispatch_unary,
    get_default_dispatcher,
    update,
)
from .config import DispatchConfig
from .dispatch import Dispatcher, Position
from .errors import (
    EngineError,
    InvalidOverrideConfiguration,
    OperatorNotDefined,
    RegistrySealedError,
    UnknownOperator,
)
from .operands import Primitive, Taggable, classify, resolve
from .selectors import OperatorCategory, Selector, lookup_selector
from .values import (
    Instance,
    TypeDefinition,
    define_type,
    record,
    register_instance_handler,
    register_type_handler,
)


def __getattr__(name):
    # Selectors are importable by identifier: ``from odre import strictEquals``.
    try:
        return Selector(name)
    except ValueError:
        raise AttributeError(name) from None


__all__ = [
    "COMPOUND_ASSIGNMENTS",
    "Cell",
    "DispatchConfig",
    "Dispatcher",
    "EngineError",
    "Instance",
    "InvalidOverrideConfiguration",
    "OperatorCategory",
    "OperatorNotDefined",
    "Position",
    "Primitive",
    "RegistrySealedError",
    "Selector",
    "Taggable",
    "TypeDefinition",
    "UnknownOperator",
    "assign_compound",
    "classify",
    "configure",
    "define_type",
    "dispatch_binary",
    "dispatch_unary",
    "get_default_dispatcher",
    "lookup_selector",
    "record",
    "register_instance_handler",
    "register_type_handler",
    "resolve",
    "update",
]

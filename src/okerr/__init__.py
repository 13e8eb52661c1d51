"""okerr: typed Results for failures you can see coming.

Public API:
    - ok(), err(), fail(): construct Success / Failure values
    - Success, Failure, Result: the two variants and their union
    - map, map_err, flat_map, unwrap, or_else, ...: free-function combinators
    - annotate(), cause(): layer context onto a failure as a cause chain
    - match(): dispatch on a Result, or on an error discriminant
    - result(): wrap a callable, an awaitable, or a plain record
    - dumps(), loads(), rehydrate(): the wire shape
"""

from __future__ import annotations

import logging

from okerr.adapter import (
    OperandKind,
    Pending,
    capture,
    capture_async,
    classify,
    from_awaitable,
    from_callable,
    result,
)
from okerr.annotation import cause
from okerr.combinators import (
    annotate,
    collect_values,
    flat_map,
    map,  # noqa: A004
    map_err,
    match,
    or_else,
    unwrap,
    unwrap_or_else,
    values,
)
from okerr.config import Config, current_config, use_config
from okerr.errors import (
    ConfigurationError,
    NotAFailureError,
    OkerrError,
    RehydrationError,
    UnmatchedCaseError,
    UnsupportedOperandError,
    UnwrapError,
)
from okerr.payload import ErrorPayload, cause_chain, root_cause
from okerr.serde import dumps, loads, rehydrate, to_record
from okerr.variants import Failure, Result, Success, err, fail, is_result, ok

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("okerr")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("okerr").addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "ConfigurationError",
    "ErrorPayload",
    "Failure",
    "NotAFailureError",
    "OkerrError",
    "OperandKind",
    "Pending",
    "RehydrationError",
    "Result",
    "Success",
    "UnmatchedCaseError",
    "UnsupportedOperandError",
    "UnwrapError",
    "annotate",
    "capture",
    "capture_async",
    "cause",
    "cause_chain",
    "classify",
    "collect_values",
    "current_config",
    "dumps",
    "err",
    "fail",
    "flat_map",
    "from_awaitable",
    "from_callable",
    "is_result",
    "loads",
    "map",
    "map_err",
    "match",
    "ok",
    "or_else",
    "rehydrate",
    "result",
    "root_cause",
    "to_record",
    "unwrap",
    "unwrap_or_else",
    "use_config",
    "values",
]

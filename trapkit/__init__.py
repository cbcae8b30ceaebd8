"""Stable public API surface for TrapKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from trappack.core import ERROR_DOMAIN, TRAPPED_EXCEPTION_CODE, ErrorValue, TrapOutcome
from trappack.trap import (
    CapturedException,
    RaisedException,
    TrapEndEvent,
    TrapHookManager,
    TrapPolicy,
    TrapStartEvent,
    capture_exception,
    error_value_from_exception,
    exception_name,
    protected,
    run_protected,
    run_protected_async,
    use_trap_hooks,
    use_trap_policy,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ERROR_DOMAIN",
    "TRAPPED_EXCEPTION_CODE",
    "ErrorValue",
    "TrapOutcome",
    "CapturedException",
    "RaisedException",
    "TrapPolicy",
    "TrapHookManager",
    "TrapStartEvent",
    "TrapEndEvent",
    "run_protected",
    "run_protected_async",
    "protected",
    "exception_name",
    "capture_exception",
    "error_value_from_exception",
    "use_trap_policy",
    "use_trap_hooks",
]

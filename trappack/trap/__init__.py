"""Trap subsystem for TrapKit."""

from trappack.trap.capture import CapturedException, capture_exception, error_value_from_exception
from trappack.trap.exceptions import (
    RaisedException,
    TrapConfigError,
    TrapError,
    TrapTargetError,
    TrapWarning,
)
from trappack.trap.hooks import (
    HookFailure,
    TrapEndEvent,
    TrapHook,
    TrapHookManager,
    TrapStartEvent,
    get_active_hook_manager,
    use_trap_hooks,
)
from trappack.trap.identity import exception_name
from trappack.trap.policy import (
    CAPTURE_TRACEBACK_ENV_VAR,
    DEFAULT_TRAP_POLICY,
    TRAP_BASE_EXCEPTIONS_ENV_VAR,
    TrapPolicy,
    get_active_policy,
    policy_from_env,
    use_trap_policy,
)
from trappack.trap.runner import protected, run_protected, run_protected_async

__all__ = [
    "TrapError",
    "TrapConfigError",
    "TrapTargetError",
    "TrapWarning",
    "RaisedException",
    "CapturedException",
    "capture_exception",
    "error_value_from_exception",
    "exception_name",
    "TrapPolicy",
    "DEFAULT_TRAP_POLICY",
    "CAPTURE_TRACEBACK_ENV_VAR",
    "TRAP_BASE_EXCEPTIONS_ENV_VAR",
    "get_active_policy",
    "policy_from_env",
    "use_trap_policy",
    "TrapHook",
    "TrapStartEvent",
    "TrapEndEvent",
    "HookFailure",
    "TrapHookManager",
    "get_active_hook_manager",
    "use_trap_hooks",
    "run_protected",
    "run_protected_async",
    "protected",
]

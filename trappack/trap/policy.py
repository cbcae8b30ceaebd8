"""Trap policy controls and environment configuration."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import os
from typing import Iterator

from trappack.trap.exceptions import TrapConfigError, emit_trap_warning

CAPTURE_TRACEBACK_ENV_VAR = "TRAPKIT_CAPTURE_TRACEBACK"
TRAP_BASE_EXCEPTIONS_ENV_VAR = "TRAPKIT_TRAP_BASE_EXCEPTIONS"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

_ACTIVE_TRAP_POLICY: ContextVar["TrapPolicy | None"] = ContextVar(
    "trappack_active_trap_policy",
    default=None,
)


@dataclass(frozen=True, slots=True)
class TrapPolicy:
    """Policy for what the trap catches and records."""

    capture_traceback: bool = False
    trap_base_exceptions: bool = False

    @property
    def trapped_types(self) -> tuple[type[BaseException], ...]:
        if self.trap_base_exceptions:
            return (BaseException,)
        return (Exception,)


DEFAULT_TRAP_POLICY = TrapPolicy()


def policy_from_env(environ: Mapping[str, str] | None = None) -> TrapPolicy:
    """Build a policy from ``TRAPKIT_*`` environment variables."""
    env = os.environ if environ is None else environ
    return TrapPolicy(
        capture_traceback=_read_bool(env, CAPTURE_TRACEBACK_ENV_VAR),
        trap_base_exceptions=_read_bool(env, TRAP_BASE_EXCEPTIONS_ENV_VAR),
    )


def get_active_policy() -> TrapPolicy:
    """Resolve active policy from context override or env config."""
    policy = _ACTIVE_TRAP_POLICY.get()
    if policy is not None:
        return policy
    return policy_from_env()


def resolve_policy(policy: TrapPolicy | None) -> TrapPolicy:
    """Resolve the policy for one protected call without raising.

    A malformed environment value falls back to ``DEFAULT_TRAP_POLICY`` with a
    ``TrapWarning``; ``get_active_policy`` and ``policy_from_env`` still raise.
    """
    if policy is not None:
        return policy
    try:
        return get_active_policy()
    except TrapConfigError as error:
        emit_trap_warning(f"{error} Using the default trap policy.", stacklevel=3)
        return DEFAULT_TRAP_POLICY


@contextmanager
def use_trap_policy(policy: TrapPolicy) -> Iterator[TrapPolicy]:
    """Activate a trap policy for current context."""
    token = _ACTIVE_TRAP_POLICY.set(policy)
    try:
        yield policy
    finally:
        _ACTIVE_TRAP_POLICY.reset(token)


def _read_bool(env: Mapping[str, str], name: str) -> bool:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return False
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise TrapConfigError(
        f"Invalid boolean for {name}: {raw!r}. "
        "Use one of 1/0, true/false, yes/no, on/off."
    )

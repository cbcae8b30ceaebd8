"""Observers notified around protected calls.

Hooks run inside the trap's no-escape guarantee: a failing hook is converted
into an ``ErrorValue`` the same way a trapped callback exception is, recorded
on the manager, and reported with a ``TrapWarning`` that cannot itself escape.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from typing import Any, Iterator, Protocol

from trappack.core.models import ErrorValue, TrapOutcome
from trappack.core.types import TrapStatus
from trappack.trap.capture import error_value_from_exception
from trappack.trap.exceptions import emit_trap_warning
from trappack.trap.policy import DEFAULT_TRAP_POLICY


@dataclass(frozen=True, slots=True)
class TrapStartEvent:
    callback_name: str
    mode: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class TrapEndEvent:
    callback_name: str
    mode: str
    status: TrapStatus
    exception_name: str | None = None
    reason: str | None = None

    @classmethod
    def from_outcome(cls, callback_name: str, mode: str, outcome: TrapOutcome) -> "TrapEndEvent":
        if outcome.error is None:
            return cls(callback_name=callback_name, mode=mode, status="ok")
        return cls(
            callback_name=callback_name,
            mode=mode,
            status="error",
            exception_name=outcome.error.exception_name,
            reason=outcome.error.reason,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class TrapHook(Protocol):
    """Observer notified around each protected call. Both methods are optional."""

    def on_trap_start(self, event: TrapStartEvent) -> None:
        ...

    def on_trap_end(self, event: TrapEndEvent) -> None:
        ...


@dataclass(frozen=True, slots=True)
class HookFailure:
    """A hook exception, kept as the error value the trap would have produced."""

    hook_name: str
    method: str
    error: ErrorValue

    def to_dict(self) -> dict[str, Any]:
        return {
            "hook_name": self.hook_name,
            "method": self.method,
            "error": self.error.to_dict(),
        }


@dataclass(slots=True)
class TrapHookManager:
    """Notifies hooks of trap start/end and absorbs their failures."""

    hooks: tuple[object, ...] = ()
    failures: list[HookFailure] = field(default_factory=list)

    def clear_failures(self) -> None:
        self.failures.clear()

    def notify_start(self, event: TrapStartEvent) -> None:
        self._notify("on_trap_start", event)

    def notify_end(self, event: TrapEndEvent) -> None:
        self._notify("on_trap_end", event)

    def _notify(self, method: str, event: object) -> None:
        for hook in self.hooks:
            try:
                handler = getattr(hook, method, None)
                if handler is None:
                    continue
                handler(event)
            except Exception as error:
                self._record_failure(hook, method, error)

    def _record_failure(self, hook: object, method: str, error: Exception) -> None:
        failure = HookFailure(
            hook_name=_describe_hook(hook),
            method=method,
            error=error_value_from_exception(error, policy=DEFAULT_TRAP_POLICY),
        )
        self.failures.append(failure)
        emit_trap_warning(
            (
                f"TrapKit hook {failure.hook_name}.{method} raised "
                f"{failure.error.exception_name}: {failure.error.reason}"
            ),
            stacklevel=4,
        )


_ACTIVE_HOOK_MANAGER: ContextVar[TrapHookManager | None] = ContextVar(
    "trappack_active_hook_manager",
    default=None,
)
_NO_HOOKS = TrapHookManager(hooks=())


def get_active_hook_manager() -> TrapHookManager:
    """Return the context hook manager, or a manager with no hooks."""
    manager = _ACTIVE_HOOK_MANAGER.get()
    if manager is not None:
        return manager
    return _NO_HOOKS


def resolve_hook_manager(hooks: TrapHookManager | None) -> TrapHookManager:
    if hooks is not None:
        return hooks
    return get_active_hook_manager()


@contextmanager
def use_trap_hooks(manager: TrapHookManager) -> Iterator[TrapHookManager]:
    """Notify ``manager`` for protected calls made in this context."""
    token = _ACTIVE_HOOK_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _ACTIVE_HOOK_MANAGER.reset(token)


def _describe_hook(hook: object) -> str:
    try:
        return str(getattr(hook, "name", hook.__class__.__name__))
    except Exception:
        return hook.__class__.__name__

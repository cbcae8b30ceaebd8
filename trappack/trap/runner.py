"""Protected-call runner that converts raised exceptions into error values."""

from __future__ import annotations

import asyncio
from functools import wraps
import inspect
from typing import Any, Awaitable, Callable

from trappack.core.models import TrapOutcome
from trappack.trap.capture import error_value_from_exception
from trappack.trap.hooks import (
    TrapEndEvent,
    TrapHookManager,
    TrapStartEvent,
    resolve_hook_manager,
)
from trappack.trap.policy import TrapPolicy, resolve_policy


def run_protected(
    callback: Callable[[], object],
    *,
    policy: TrapPolicy | None = None,
    hooks: TrapHookManager | None = None,
) -> TrapOutcome:
    """Run ``callback`` and return its outcome instead of letting exceptions escape.

    Args:
        callback: Zero-argument callable. Its return value is discarded.
        policy: Trap policy override. Defaults to the context/env policy.
        hooks: Hook manager override. Defaults to the context hook manager.

    Returns:
        ``TrapOutcome(succeeded=True)`` when the callback returns normally, or
        a failed outcome carrying an ``ErrorValue`` built from the exception.
    """
    active_policy = resolve_policy(policy)
    manager = resolve_hook_manager(hooks)
    callback_name = _callback_name(callback)
    manager.notify_start(TrapStartEvent(callback_name=callback_name, mode="sync"))

    try:
        callback()
    except active_policy.trapped_types as error:
        outcome = TrapOutcome.failure(error_value_from_exception(error, policy=active_policy))
    else:
        outcome = TrapOutcome.success()

    manager.notify_end(TrapEndEvent.from_outcome(callback_name, "sync", outcome))
    return outcome


async def run_protected_async(
    callback: Callable[[], Awaitable[object]],
    *,
    policy: TrapPolicy | None = None,
    hooks: TrapHookManager | None = None,
) -> TrapOutcome:
    """Async variant of ``run_protected``.

    ``asyncio.CancelledError`` always propagates so task cancellation is never
    reported as a trapped exception.
    """
    active_policy = resolve_policy(policy)
    manager = resolve_hook_manager(hooks)
    callback_name = _callback_name(callback)
    manager.notify_start(TrapStartEvent(callback_name=callback_name, mode="async"))

    try:
        await callback()
    except asyncio.CancelledError:
        raise
    except active_policy.trapped_types as error:
        outcome = TrapOutcome.failure(error_value_from_exception(error, policy=active_policy))
    else:
        outcome = TrapOutcome.success()

    manager.notify_end(TrapEndEvent.from_outcome(callback_name, "async", outcome))
    return outcome


def protected(
    func: Callable[[], Any] | None = None,
    *,
    policy: TrapPolicy | None = None,
) -> Any:
    """Decorator that makes a zero-argument function return a ``TrapOutcome``.

    Usable bare (``@protected``) or with options (``@protected(policy=...)``).
    Coroutine functions are wrapped with ``run_protected_async``.
    """

    def decorator(target: Callable[[], Any]) -> Callable[[], Any]:
        if inspect.iscoroutinefunction(target):

            @wraps(target)
            async def wrapped_async() -> TrapOutcome:
                return await run_protected_async(target, policy=policy)

            return wrapped_async

        @wraps(target)
        def wrapped() -> TrapOutcome:
            return run_protected(target, policy=policy)

        return wrapped

    if func is not None:
        return decorator(func)
    return decorator


def _callback_name(callback: object) -> str:
    try:
        name = getattr(callback, "__qualname__", None) or getattr(callback, "__name__", None)
    except Exception:
        name = None
    if isinstance(name, str) and name:
        return name
    return callback.__class__.__name__

"""Trap subsystem exceptions and warnings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
import warnings


class TrapError(Exception):
    """Base class for trap subsystem errors."""


class TrapConfigError(TrapError):
    """Raised when trap policy configuration is malformed."""


class TrapTargetError(TrapError):
    """Raised when a protected-call target cannot be resolved."""


class TrapWarning(RuntimeWarning):
    """Issued for problems the trap absorbs instead of raising."""


class RaisedException(Exception):
    """Exception carrying an explicit name, reason, and user info mapping.

    The trap records ``name`` as the exception name instead of the class name,
    so callers can raise distinct identities without defining a class for each.
    """

    def __init__(
        self,
        name: str,
        reason: str,
        user_info: Mapping[str, Any] | None = None,
    ) -> None:
        if not isinstance(name, str) or not name:
            raise TypeError(f"RaisedException name must be a non-empty str, got {name!r}")
        copied_info = dict(user_info) if user_info is not None else None
        super().__init__(name, reason, copied_info)
        self.name = name
        self.reason = reason
        self.user_info = copied_info

    def __str__(self) -> str:
        return str(self.reason)

    def __repr__(self) -> str:
        return f"RaisedException(name={self.name!r}, reason={self.reason!r})"


def emit_trap_warning(message: str, *, stacklevel: int = 2) -> None:
    """Warn without letting a warnings-as-errors filter escape a protected call."""
    try:
        warnings.warn(message, TrapWarning, stacklevel=stacklevel + 1)
    except Warning:
        # Filter turned the warning into an error; callers keep their own record.
        return

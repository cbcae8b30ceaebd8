"""Conversion of live exceptions into error values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import traceback as traceback_module
from typing import Any

from trappack.core.models import ErrorValue
from trappack.core.types import (
    ERROR_DOMAIN,
    EXCEPTION_NAME_KEY,
    EXCEPTION_TYPE_KEY,
    REASON_KEY,
    TRACEBACK_KEY,
    TRAPPED_EXCEPTION_CODE,
    USER_INFO_KEY,
)
from trappack.trap.exceptions import RaisedException
from trappack.trap.policy import TrapPolicy, resolve_policy


@dataclass(frozen=True, slots=True)
class CapturedException:
    """Identity of an exception at the moment it was trapped."""

    name: str
    reason: str
    user_info: dict[str, Any] = field(default_factory=dict)
    exception_type: str = ""
    traceback: str | None = None

    @classmethod
    def from_exception(
        cls,
        error: BaseException,
        *,
        include_traceback: bool = False,
    ) -> "CapturedException":
        error_class = error.__class__
        if isinstance(error, RaisedException):
            name = error.name
            reason = error.reason
        else:
            name = error_class.__name__
            reason = _safe_str(error)

        return cls(
            name=name,
            reason=reason,
            user_info=_extract_user_info(error),
            exception_type=f"{error_class.__module__}.{error_class.__qualname__}",
            traceback=_format_traceback(error) if include_traceback else None,
        )

    def to_error_value(self) -> ErrorValue:
        metadata: dict[str, Any] = {
            EXCEPTION_NAME_KEY: self.name,
            REASON_KEY: self.reason,
            USER_INFO_KEY: dict(self.user_info),
            EXCEPTION_TYPE_KEY: self.exception_type,
        }
        if self.traceback is not None:
            metadata[TRACEBACK_KEY] = self.traceback
        return ErrorValue(
            domain=ERROR_DOMAIN,
            code=TRAPPED_EXCEPTION_CODE,
            metadata=metadata,
        )


def capture_exception(
    error: BaseException,
    *,
    policy: TrapPolicy | None = None,
) -> CapturedException:
    active_policy = resolve_policy(policy)
    return CapturedException.from_exception(
        error,
        include_traceback=active_policy.capture_traceback,
    )


def error_value_from_exception(
    error: BaseException,
    *,
    policy: TrapPolicy | None = None,
) -> ErrorValue:
    """Convert an exception the caller already holds into a trapped ``ErrorValue``."""
    return capture_exception(error, policy=policy).to_error_value()


def _safe_str(error: BaseException) -> str:
    try:
        return str(error)
    except Exception:
        return f"<unprintable {error.__class__.__name__} object>"


def _extract_user_info(error: BaseException) -> dict[str, Any]:
    try:
        raw = getattr(error, "user_info", None)
        if not isinstance(raw, Mapping):
            return {}
        return {str(key): value for key, value in raw.items()}
    except Exception:
        return {}


def _format_traceback(error: BaseException) -> str | None:
    try:
        return "".join(
            traceback_module.format_exception(error.__class__, error, error.__traceback__)
        )
    except Exception:
        return None

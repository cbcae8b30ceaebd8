"""Core models and constants for TrapKit."""

from trappack.core.models import ErrorValue, TrapOutcome
from trappack.core.types import (
    ERROR_DOMAIN,
    EXCEPTION_NAME_KEY,
    EXCEPTION_TYPE_KEY,
    REASON_KEY,
    TRACEBACK_KEY,
    TRAPPED_EXCEPTION_CODE,
    USER_INFO_KEY,
    TrapStatus,
)

__all__ = [
    "ErrorValue",
    "TrapOutcome",
    "ERROR_DOMAIN",
    "TRAPPED_EXCEPTION_CODE",
    "EXCEPTION_NAME_KEY",
    "REASON_KEY",
    "USER_INFO_KEY",
    "EXCEPTION_TYPE_KEY",
    "TRACEBACK_KEY",
    "TrapStatus",
]

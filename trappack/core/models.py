"""Core data models for trapped exceptions and protected-call outcomes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterator

from trappack.core.types import (
    ERROR_DOMAIN,
    EXCEPTION_NAME_KEY,
    REASON_KEY,
    TRAPPED_EXCEPTION_CODE,
    USER_INFO_KEY,
)


@dataclass(frozen=True, slots=True)
class ErrorValue:
    """Structured error returned in place of a propagating exception.

    ``metadata`` is an open mapping. Values built by the trap always carry the
    exception name and reason, plus the exception's user info under its own key.
    Errors from other sources may use any domain and code, and may carry no
    metadata at all.
    """

    domain: str
    code: int
    metadata: dict[str, Any] | None = None

    @property
    def is_trapped_exception(self) -> bool:
        return self.domain == ERROR_DOMAIN and self.code == TRAPPED_EXCEPTION_CODE

    @property
    def exception_name(self) -> str | None:
        value = self._metadata_get(EXCEPTION_NAME_KEY)
        return value if isinstance(value, str) else None

    @property
    def reason(self) -> str | None:
        value = self._metadata_get(REASON_KEY)
        return value if isinstance(value, str) else None

    @property
    def user_info(self) -> dict[str, Any]:
        value = self._metadata_get(USER_INFO_KEY)
        if not isinstance(value, Mapping):
            return {}
        return dict(value)

    def _metadata_get(self, key: str) -> Any:
        if not isinstance(self.metadata, Mapping):
            return None
        return self.metadata.get(key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "code": self.code,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ErrorValue":
        metadata = raw.get("metadata")
        return cls(
            domain=str(raw["domain"]),
            code=int(raw["code"]),
            metadata=dict(metadata) if isinstance(metadata, Mapping) else None,
        )


@dataclass(frozen=True, slots=True)
class TrapOutcome:
    """Result of one protected call: success, or failure carrying an ``ErrorValue``."""

    succeeded: bool
    error: ErrorValue | None = None

    def __post_init__(self) -> None:
        if self.succeeded and self.error is not None:
            raise ValueError("A successful outcome cannot carry an error value")
        if not self.succeeded and self.error is None:
            raise ValueError("A failed outcome requires an error value")

    def __iter__(self) -> Iterator[Any]:
        yield self.succeeded
        yield self.error

    @classmethod
    def success(cls) -> "TrapOutcome":
        return cls(succeeded=True)

    @classmethod
    def failure(cls, error: ErrorValue) -> "TrapOutcome":
        return cls(succeeded=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "error": self.error.to_dict() if self.error is not None else None,
        }

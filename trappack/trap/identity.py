"""Exception identity lookup on error values."""

from __future__ import annotations

from collections.abc import Mapping

from trappack.core.types import EXCEPTION_NAME_KEY


def exception_name(error: object) -> str | None:
    """Return the trapped exception name recorded on ``error``, if any.

    Accepts an ``ErrorValue``, any object exposing a ``metadata`` mapping, or a
    plain dict in ``ErrorValue.to_dict()`` shape. Returns ``None`` instead of
    raising when the name is absent or not a string.
    """
    if error is None:
        return None
    if isinstance(error, Mapping):
        metadata = error.get("metadata")
    else:
        try:
            metadata = getattr(error, "metadata", None)
        except Exception:
            return None

    if not isinstance(metadata, Mapping):
        return None
    value = metadata.get(EXCEPTION_NAME_KEY)
    if not isinstance(value, str):
        return None
    return value

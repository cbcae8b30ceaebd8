"""Constants and type definitions for TrapKit core models."""

from typing import Literal

ERROR_DOMAIN = "trapkit.exception"
TRAPPED_EXCEPTION_CODE = 1

EXCEPTION_NAME_KEY = "exception_name"
REASON_KEY = "reason"
USER_INFO_KEY = "user_info"
EXCEPTION_TYPE_KEY = "exception_type"
TRACEBACK_KEY = "traceback"

TrapStatus = Literal["ok", "error"]

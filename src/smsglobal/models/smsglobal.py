from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    AUTHENTICATION = "authentication"
    APPLICATION = "application"
    PARSE = "parse"
    VALIDATION = "validation"
    # call refused while an earlier error is unacknowledged or no transport exists
    GATED = "gated"


class SmsGlobalResponse:
    """Outcome of a gateway operation.

    A failed response is falsy, so callers can write ``if not res: ...``.
    """

    def __init__(
        self,
        status: str,
        message: str | list[Any],
        data: dict[str, Any] | str | None = "",
        error: ErrorKind | None = None,
    ) -> None:
        self.status = status
        self.message = message
        self.data = data
        self.error = error

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def __bool__(self) -> bool:
        return self.ok

    def to_dict(self):
        return {
            "status": self.status,
            "message": self.message,
            "data": self.data,
            "error": self.error.value if self.error else None,
        }

    def __repr__(self) -> str:
        return f"<SmsGlobalResponse status={self.status} message={self.message}>"

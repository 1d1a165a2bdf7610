"""Error classification for request attempts.

Errors never cross the public boundary as exceptions. A failed attempt is
described by a RequestError carried inside the Result:

    - ErrorKind.UNDERLYING: the transport reported a failure (DNS, TLS,
      connection reset, transport-level timeout). The exception is kept
      verbatim in `cause`.
    - ErrorKind.TIMEOUT: the blocking wait gave up after the request
      timeout plus the grace period.

Malformed URLs have no error value at all; they produce the empty Result.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(StrEnum):
    """Terminal error variants of a request attempt."""
    UNDERLYING = "UNDERLYING"
    TIMEOUT = "TIMEOUT"


class ErrorCode(StrEnum):
    """Diagnostic category for an error.

    Purely informational: a transport-level timeout has code TIMEOUT but
    kind UNDERLYING.
    """
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    TLS_ERROR = "TLS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    TOO_MANY_REDIRECTS = "TOO_MANY_REDIRECTS"
    UNKNOWN = "UNKNOWN"


# Checked in order against the exception type name and message
_EXCEPTION_PATTERNS: tuple[tuple[str, ErrorCode], ...] = (
    ("timeout", ErrorCode.TIMEOUT),
    ("ssl", ErrorCode.TLS_ERROR),
    ("certificate", ErrorCode.TLS_ERROR),
    ("redirect", ErrorCode.TOO_MANY_REDIRECTS),
    ("protocol", ErrorCode.PROTOCOL_ERROR),
    ("connect", ErrorCode.NETWORK_ERROR),
    ("network", ErrorCode.NETWORK_ERROR),
    ("read", ErrorCode.NETWORK_ERROR),
    ("write", ErrorCode.NETWORK_ERROR),
)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map exception type to a diagnostic error code."""
    exc_name = type(exc).__name__.lower()
    exc_msg = str(exc).lower()

    for pattern, code in _EXCEPTION_PATTERNS:
        if pattern in exc_name or pattern in exc_msg:
            return code

    return ErrorCode.UNKNOWN


class RequestError(BaseModel):
    """Error outcome of a single request attempt.

    Example:
        >>> err = RequestError.timeout(50.0)
        >>> err.kind
        <ErrorKind.TIMEOUT: 'TIMEOUT'>
        >>> err.message
        'Request did not complete within 50.0s'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
        revalidate_instances="never",
    )

    kind: ErrorKind
    code: ErrorCode = ErrorCode.UNKNOWN
    message: str = ""
    cause: BaseException | None = Field(default=None, repr=False)

    @classmethod
    def underlying(cls, exc: BaseException) -> Self:
        """Wrap a transport-reported failure."""
        return cls(
            kind=ErrorKind.UNDERLYING,
            code=classify_exception(exc),
            message=str(exc) or type(exc).__name__,
            cause=exc,
        )

    @classmethod
    def timeout(cls, waited: float) -> Self:
        """Error for a blocking wait that hit its deadline."""
        return cls(
            kind=ErrorKind.TIMEOUT,
            code=ErrorCode.TIMEOUT,
            message=f"Request did not complete within {waited}s",
        )

    @property
    def is_timeout(self) -> bool:
        return self.kind == ErrorKind.TIMEOUT

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}" if self.message else str(self.kind)


def classify(exc: BaseException | None) -> RequestError | None:
    """Map a transport failure (or its absence) to a RequestError."""
    if exc is None:
        return None
    return RequestError.underlying(exc)

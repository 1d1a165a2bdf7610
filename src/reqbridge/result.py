"""Outcome of one request attempt."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from http.cookiejar import Cookie

from .errors import RequestError


@dataclass(slots=True, frozen=True)
class Result:
    """Terminal artifact of exactly one request attempt.

    Attributes:
        data: Raw response body, None when nothing was received
        cookies: Cookies parsed from the response (only when cookie
            handling was enabled on the request)
        error: Failure description, None on success

    Malformed input produces the empty Result (no data, no cookies, no
    error), which cannot be told apart from an empty successful response.
    """

    data: bytes | None = None
    cookies: tuple[Cookie, ...] = ()
    error: RequestError | None = None

    @classmethod
    def empty(cls) -> Result:
        return EMPTY_RESULT

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        return self.data is None and not self.cookies and self.error is None

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 (undecodable bytes replaced)."""
        return self.data.decode("utf-8", errors="replace") if self.data is not None else ""

    @property
    def cookie_dict(self) -> dict[str, str | None]:
        return {c.name: c.value for c in self.cookies}

    def with_cookies(self, cookies: Iterable[Cookie]) -> Result:
        """Copy of this Result carrying `cookies` in place of the current ones."""
        return replace(self, cookies=tuple(cookies))


EMPTY_RESULT = Result()

"""Declarative request descriptors.

A descriptor describes one HTTP request without performing any I/O. The
only required members are `host` and `api`; everything else has a default:

    method          "GET"
    cookie_string   None   (no Cookie header, no response cookie capture)
    header_fields   None
    body            None
    timeout         45 seconds

Any object exposing `host` and `api` works with `resolve_url` and
`build_request`. `Endpoint` is a pydantic base model declaring the same
members with their defaults, for descriptors written as classes:

    >>> class Profile(Endpoint):
    ...     host: str = "https://api.example.com/"
    ...     api: str = "users/me"
    >>>
    >>> Profile().url()
    'https://api.example.com/users/me'
    >>> Profile(cookie_string="sid=42").build_request().request.headers["Cookie"]
    'sid=42'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .urls import join_url, parse_url

# Type alias for HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]
ALL_METHODS: frozenset[HttpMethod] = frozenset(["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"])

DEFAULT_METHOD: HttpMethod = "GET"
DEFAULT_REQUEST_TIMEOUT: float = 45.0


@runtime_checkable
class RequestDescriptor(Protocol):
    """Minimal capability set of a descriptor: where to send the request."""

    @property
    def host(self) -> str: ...

    @property
    def api(self) -> str: ...


@dataclass(slots=True, frozen=True)
class PreparedRequest:
    """A transport request ready to be sent.

    Attributes:
        request: The httpx request (timeout carried in its extensions)
        timeout: Per-request transport timeout in seconds
        handle_cookies: Whether response cookies are captured into the Result
    """

    request: httpx.Request
    timeout: float
    handle_cookies: bool = False

    @classmethod
    def create(
        cls,
        method: str,
        url: httpx.URL | str,
        *,
        timeout: float,
        headers: httpx.Headers | None = None,
        content: bytes | None = None,
        handle_cookies: bool = False,
    ) -> PreparedRequest:
        request = httpx.Request(
            method,
            url,
            headers=headers,
            content=content,
            extensions={"timeout": httpx.Timeout(timeout).as_dict()},
        )
        return cls(request=request, timeout=timeout, handle_cookies=handle_cookies)

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def url(self) -> httpx.URL:
        return self.request.url


def resolve_url(descriptor: RequestDescriptor) -> str | None:
    """Joined URL of the descriptor, or None if it is not a valid URL."""
    url = join_url(descriptor.host, descriptor.api)
    return url if parse_url(url) is not None else None


def _apply_header_fields(headers: httpx.Headers, fields: Mapping[str, str | None]) -> None:
    # A None value removes the header, including a Cookie header set earlier
    for name, value in fields.items():
        if value is not None:
            headers[name] = value
        elif name in headers:
            del headers[name]


def build_request(descriptor: RequestDescriptor) -> PreparedRequest | None:
    """Build the transport request for a descriptor.

    Order of assembly: method and timeout, then the Cookie header (which
    also turns on response cookie capture), then `header_fields` (which may
    overwrite or remove the Cookie header), then the body.

    Returns:
        The prepared request, or None when the URL is malformed
    """
    url = resolve_url(descriptor)
    if url is None:
        return None

    method = str(getattr(descriptor, "method", None) or DEFAULT_METHOD).upper()
    timeout = float(getattr(descriptor, "timeout", None) or DEFAULT_REQUEST_TIMEOUT)
    headers = httpx.Headers()

    cookie_string: str | None = getattr(descriptor, "cookie_string", None)
    if cookie_string is not None:
        headers["Cookie"] = cookie_string

    if (fields := getattr(descriptor, "header_fields", None)) is not None:
        _apply_header_fields(headers, fields)

    return PreparedRequest.create(
        method,
        url,
        timeout=timeout,
        headers=headers,
        content=getattr(descriptor, "body", None),
        handle_cookies=cookie_string is not None,
    )


class Endpoint(BaseModel):
    """Base model for descriptors declared as classes.

    Subclasses override field defaults to describe a fixed endpoint, or
    instances are created directly:

        >>> Endpoint(host="https://example.com/", api="?x=1").url()
        'https://example.com?x=1'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        revalidate_instances="never",
    )

    host: str
    api: str
    method: HttpMethod = DEFAULT_METHOD
    cookie_string: str | None = Field(default=None, repr=False)
    header_fields: dict[str, str | None] | None = Field(default=None, repr=False)
    body: bytes | None = Field(default=None, repr=False)
    timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    def url(self) -> str | None:
        return resolve_url(self)

    def build_request(self) -> PreparedRequest | None:
        return build_request(self)

"""reqbridge - Declarative HTTP requests, sent with a callback or blocking.

Describe a request once, then send it either without blocking (the Result
arrives through a callback) or synchronously (the calling thread waits
until the request completes or its deadline passes). Built on httpx.

Quick Start:
    >>> from reqbridge import Endpoint, RequestExecutor
    >>>
    >>> class Search(Endpoint):
    ...     host: str = "https://api.example.com/"
    ...     api: str = "?q=python"
    >>>
    >>> executor = RequestExecutor()
    >>> result = executor.send_sync(Search())
    >>> if result.ok:
    ...     print(result.text)

Callbacks:
    >>> executor.send_async("https://example.com", lambda result: print(result.ok))

Cookies:
    >>> result = executor.send_sync(Search(cookie_string="session=abc"))
    >>> result.cookie_dict
    {'session': 'rotated'}

Errors are carried in `Result.error`, never raised:
    >>> from reqbridge import ErrorKind
    >>> result.error is None or result.error.kind in (ErrorKind.UNDERLYING, ErrorKind.TIMEOUT)
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

from .descriptor import (
    ALL_METHODS,
    DEFAULT_REQUEST_TIMEOUT,
    Endpoint,
    HttpMethod,
    PreparedRequest,
    RequestDescriptor,
    build_request,
    resolve_url,
)
from .errors import ErrorCode, ErrorKind, RequestError, classify, classify_exception
from .executor import Completion, RequestExecutor, extract_cookies
from .result import EMPTY_RESULT, Result
from .settings import (
    DEFAULT_GRACE_PERIOD,
    DEFAULT_URL_TIMEOUT,
    DEFAULT_WAIT_SLICE,
    ReqbridgeSettings,
    clear_settings_cache,
    get_settings,
)
from .urls import join_url, parse_url

__all__ = [
    # Descriptors
    "ALL_METHODS",
    "DEFAULT_REQUEST_TIMEOUT",
    "Endpoint",
    "HttpMethod",
    "PreparedRequest",
    "RequestDescriptor",
    "build_request",
    "resolve_url",
    # Errors
    "ErrorCode",
    "ErrorKind",
    "RequestError",
    "classify",
    "classify_exception",
    # Execution
    "Completion",
    "RequestExecutor",
    "extract_cookies",
    # Results
    "EMPTY_RESULT",
    "Result",
    # Settings
    "DEFAULT_GRACE_PERIOD",
    "DEFAULT_URL_TIMEOUT",
    "DEFAULT_WAIT_SLICE",
    "ReqbridgeSettings",
    "clear_settings_cache",
    "get_settings",
    # URLs
    "join_url",
    "parse_url",
]

"""Request execution: callback-driven, blocking and awaitable dispatch.

Every call gets its own ephemeral httpx.AsyncClient (fresh cookie jar, no
connection reuse across calls) and makes exactly one attempt. Failures are
reported inside the Result, never raised.

Blocking calls run the event loop on the calling thread in slices and give
up at `timeout + grace_period` after dispatch, cancelling the in-flight
request. Non-blocking calls run on a background thread and deliver the
Result to the callback from that thread.

Example:
    >>> executor = RequestExecutor()
    >>> result = executor.send_sync("https://example.com")
    >>> result.ok, len(result.data or b"")
    (True, 1256)

    >>> executor.send_async(Profile(cookie_string="sid=42"), lambda r: print(r.cookie_dict))
"""

from __future__ import annotations

import logging
import time
from http.cookiejar import Cookie
from typing import Callable, TypeAlias

import httpx

from .descriptor import PreparedRequest, RequestDescriptor, build_request
from .errors import RequestError, classify
from .interop import in_running_loop, run_in_thread, run_until_deadline, spawn
from .result import EMPTY_RESULT, Result
from .settings import ReqbridgeSettings, get_settings
from .urls import parse_url

logger = logging.getLogger("reqbridge.executor")

Target: TypeAlias = "str | RequestDescriptor"
Completion: TypeAlias = Callable[[Result], None]
TransportFactory: TypeAlias = Callable[[], httpx.AsyncBaseTransport]


def extract_cookies(response: httpx.Response) -> tuple[Cookie, ...]:
    """Cookies set by `response`, resolved against its final request URL."""
    jar = httpx.Cookies()
    jar.extract_cookies(response)
    return tuple(jar.jar)


class RequestExecutor:
    """Sends requests described by URL strings or descriptors.

    Args:
        settings: Timeouts and transport options (defaults to get_settings())
        transport_factory: Builds the transport for each ephemeral session;
            None uses httpx's default network transport

    Example:
        >>> executor = RequestExecutor(transport_factory=lambda: httpx.MockTransport(handler))
    """

    __slots__ = ("settings", "_transport_factory")

    def __init__(
        self,
        settings: ReqbridgeSettings | None = None,
        *,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport_factory = transport_factory

    # ─────────────────────────────────────────────────────────────────
    # Public entry points
    # ─────────────────────────────────────────────────────────────────

    def prepare(self, target: Target) -> PreparedRequest | None:
        """Build the transport request for a URL string or descriptor.

        URL strings become plain GET requests with the `url_timeout`
        transport timeout. Returns None for malformed input.
        """
        if isinstance(target, str):
            url = parse_url(target)
            if url is None:
                return None
            return PreparedRequest.create("GET", url, timeout=self.settings.url_timeout)
        return build_request(target)

    def send_async(self, target: Target, on_complete: Completion | None = None) -> Result:
        """Send without blocking; `on_complete` receives the Result exactly once.

        Malformed input completes immediately on the calling thread with the
        empty Result. Otherwise the callback runs on a background thread.
        The return value is always the empty Result and carries no outcome.
        """
        return self._dispatch(self.prepare(target), blocking=False, on_complete=on_complete)

    def send_sync(self, target: Target) -> Result:
        """Send and block until the Result is known or the deadline passes."""
        return self._dispatch(self.prepare(target), blocking=True)

    async def fetch(self, target: Target) -> Result:
        """Send from a coroutine running on the caller's event loop.

        No outer deadline applies; cancel the awaiting task to abandon the
        request.
        """
        prepared = self.prepare(target)
        if prepared is None:
            logger.debug(f"Malformed request target {target!r}; returning empty result")
            return EMPTY_RESULT
        return await self._perform(prepared)

    # ─────────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────────

    def _dispatch(
        self,
        prepared: PreparedRequest | None,
        *,
        blocking: bool,
        on_complete: Completion | None = None,
    ) -> Result:
        if prepared is None:
            logger.debug("Malformed request target; completing with empty result")
            if not blocking and on_complete is not None:
                on_complete(EMPTY_RESULT)
            return EMPTY_RESULT

        logger.debug(
            f"Dispatching {prepared.method} {prepared.url} "
            f"({'blocking' if blocking else 'non-blocking'}, timeout={prepared.timeout}s)"
        )

        if not blocking:
            spawn(self._complete(prepared, on_complete))
            return EMPTY_RESULT

        deadline = time.monotonic() + prepared.timeout + self.settings.grace_period
        if in_running_loop():
            return run_in_thread(self._wait, prepared, deadline)
        return self._wait(prepared, deadline)

    async def _complete(self, prepared: PreparedRequest, on_complete: Completion | None) -> None:
        result = await self._perform(prepared)
        if on_complete is not None:
            on_complete(result)

    def _wait(self, prepared: PreparedRequest, deadline: float) -> Result:
        result = run_until_deadline(
            self._perform(prepared),
            deadline=deadline,
            wait_slice=self.settings.wait_slice,
        )
        if result is None:
            waited = prepared.timeout + self.settings.grace_period
            logger.warning(f"{prepared.method} {prepared.url} cancelled after {waited}s without completing")
            return Result(data=None, error=RequestError.timeout(waited))
        return result

    # ─────────────────────────────────────────────────────────────────
    # Transport
    # ─────────────────────────────────────────────────────────────────

    def _open_session(self) -> httpx.AsyncClient:
        """Create a single-use client with its own cookie jar."""
        transport = self._transport_factory() if self._transport_factory is not None else None
        return httpx.AsyncClient(
            transport=transport,
            follow_redirects=self.settings.follow_redirects,
            verify=self.settings.verify_ssl,
        )

    async def _perform(self, prepared: PreparedRequest) -> Result:
        start = time.perf_counter()
        async with self._open_session() as session:
            try:
                response = await session.send(prepared.request)
            except httpx.HTTPError as exc:
                logger.warning(f"{prepared.method} {prepared.url} failed: {type(exc).__name__}: {exc}")
                return Result(data=None, error=classify(exc))

        result = Result(data=response.content)
        if prepared.handle_cookies:
            result = result.with_cookies(extract_cookies(response))

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"{prepared.method} {prepared.url} -> {response.status_code} "
            f"({len(response.content)} bytes, {len(result.cookies)} cookies, {elapsed_ms:.1f}ms)"
        )
        return result

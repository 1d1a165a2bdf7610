"""Shared fixtures: isolated settings and executors backed by httpx.MockTransport."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator

import httpx
import pytest

from reqbridge import ReqbridgeSettings, RequestExecutor, clear_settings_cache

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


@pytest.fixture(autouse=True)
def clean_settings() -> Iterator[None]:
    """Reset cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fast_settings() -> ReqbridgeSettings:
    """Short timeouts so deadline tests finish quickly."""
    return ReqbridgeSettings(url_timeout=0.2, grace_period=0.3, wait_slice=0.05)


@pytest.fixture
def make_executor() -> Callable[..., RequestExecutor]:
    """Build an executor whose ephemeral sessions use a mock transport."""

    def factory(handler: Handler, settings: ReqbridgeSettings | None = None) -> RequestExecutor:
        return RequestExecutor(
            settings or ReqbridgeSettings(),
            transport_factory=lambda: httpx.MockTransport(handler),
        )

    return factory

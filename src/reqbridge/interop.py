"""Sync/async interoperability utilities.

Bridges the asyncio-based transport into blocking and fire-and-forget calls:
    - run_until_deadline: Run a coroutine on the calling thread's own loop,
      in bounded slices, cancelling it once a deadline passes
    - run_in_thread: Run a blocking callable on a helper thread and wait
      (for callers that already have a running loop)
    - spawn: Run a coroutine to completion on a background daemon thread

Example:
    >>> deadline = time.monotonic() + 10
    >>> value = run_until_deadline(fetch(), deadline=deadline, wait_slice=1.0)
    >>> if value is None:
    ...     print("gave up")
"""

from __future__ import annotations

import asyncio
import contextvars
import functools
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Coroutine, TypeVar

T = TypeVar("T")


def in_running_loop() -> bool:
    """Whether the current thread is already running an event loop."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def run_until_deadline(
    coro: Coroutine[object, object, T],
    *,
    deadline: float,
    wait_slice: float,
) -> T | None:
    """Run `coro` on a fresh event loop owned by the calling thread.

    The loop runs for at most `wait_slice` seconds at a time. Between slices
    the task is checked for completion and `deadline` (a time.monotonic()
    value) is checked for expiry. On expiry the task is cancelled, given at
    most one more slice to unwind, and None is returned.

    The loop gets its own default executor, shut down without waiting, so
    blocking work handed to it (getaddrinfo lookups) never delays the return.

    Exceptions raised by `coro` propagate to the caller.
    """
    loop = asyncio.new_event_loop()
    executor = ThreadPoolExecutor(thread_name_prefix="reqbridge-loop-")
    loop.set_default_executor(executor)
    try:
        task = loop.create_task(coro)
        while True:
            remaining = deadline - time.monotonic()
            loop.run_until_complete(asyncio.wait({task}, timeout=max(0.0, min(wait_slice, remaining))))
            if task.done():
                return task.result()
            if time.monotonic() >= deadline:
                task.cancel()
                loop.run_until_complete(asyncio.wait({task}, timeout=wait_slice))
                return None
    finally:
        _close_loop(loop, executor, wait_slice)


def _close_loop(loop: asyncio.AbstractEventLoop, executor: ThreadPoolExecutor, grace: float) -> None:
    """Close `loop` without waiting on stragglers for longer than `grace`."""
    try:
        for task in asyncio.all_tasks(loop):
            task.cancel()
        loop.run_until_complete(asyncio.wait_for(loop.shutdown_asyncgens(), timeout=grace))
    except (asyncio.TimeoutError, asyncio.CancelledError):
        pass
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
        loop.close()


def run_in_thread(func: Callable[..., T], *args: object) -> T:
    """Run blocking `func` in a new thread and wait for it.

    Needed when the caller's thread is busy running an event loop, since
    a second loop cannot be started on it.
    """
    result: T | None = None
    error: BaseException | None = None
    done = threading.Event()
    ctx = contextvars.copy_context()

    def runner() -> None:
        nonlocal result, error
        try:
            result = ctx.run(func, *args)
        except BaseException as e:
            error = e
        finally:
            done.set()

    thread = threading.Thread(target=runner, name="reqbridge-sync", daemon=True)
    thread.start()
    done.wait()

    if error is not None:
        raise error
    return result  # type: ignore[return-value]


def spawn(coro: Coroutine[object, object, object], *, name: str = "reqbridge-async") -> threading.Thread:
    """Run `coro` to completion on a background daemon thread.

    Returns immediately. The thread owns its own event loop.
    """
    ctx = contextvars.copy_context()
    thread = threading.Thread(
        target=functools.partial(ctx.run, asyncio.run, coro),
        name=name,
        daemon=True,
    )
    thread.start()
    return thread

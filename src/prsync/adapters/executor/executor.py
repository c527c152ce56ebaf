"""Executor adapters implementing ExecutorPort."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable

    from prsync.core.ports import ExecutorPort


# Worker threads show up as prsync-stage_0, prsync-stage_1, ...
_THREAD_NAME_PREFIX = "prsync-stage"


class SynchronousExecutor:
    """Executor that runs each task immediately in the calling thread.

    Used when a single core is configured and in tests that need a
    deterministic staging order.
    """

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Run fn now and return a future that is already resolved."""
        future: Future[object] = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)
        return future

    def __enter__(self) -> SynchronousExecutor:
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        return None


class ThreadPoolExecutorAdapter:
    """Bounded worker pool for staging files.

    Wraps ThreadPoolExecutor so the core only sees ExecutorPort. Workers
    pull the next file as soon as they finish the current one; leaving
    the context waits for every submitted file. A fresh pool is started
    on each entry, so one adapter can serve several runs.
    """

    def __init__(self, max_workers: int) -> None:
        """Initialize the pool.

        Args:
            max_workers: Number of worker threads, usually the configured cores.

        Raises:
            ValueError: If max_workers is less than 1.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix=_THREAD_NAME_PREFIX,
            )
        return self._executor

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Queue fn for the next free worker."""
        return self._pool().submit(fn, *args, **kwargs)

    def __enter__(self) -> ThreadPoolExecutorAdapter:
        self._pool()
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        return None


def create_executor(cores: int) -> ExecutorPort:
    """Pick the executor for a core count: synchronous for 1, a thread pool otherwise."""
    if cores <= 1:
        return SynchronousExecutor()
    return ThreadPoolExecutorAdapter(max_workers=cores)

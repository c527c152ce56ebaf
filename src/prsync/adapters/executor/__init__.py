"""Executor adapters for parallel staging."""

from prsync.adapters.executor.executor import (
    SynchronousExecutor,
    ThreadPoolExecutorAdapter,
    create_executor,
)


__all__ = ["SynchronousExecutor", "ThreadPoolExecutorAdapter", "create_executor"]

"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future
    from pathlib import Path

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class ChangeDetector(Protocol):
    """Compares a source tree against a destination tree without modifying either."""

    def detect(
        self, source_dir: Path, dest_dir: Path, exclude_file: Path | None = None
    ) -> list[str]:
        """List files that are new in source or differ from the destination copy.

        Args:
            source_dir: Root of the tree to copy from.
            dest_dir: Root of the tree to compare against. Must exist.
            exclude_file: Optional pattern file of paths to ignore.

        Returns:
            Relative POSIX paths of regular files, directories excluded.

        Raises:
            ChangeDetectionError: If the comparison could not be performed.
        """
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports staging progress to the user.

    This protocol defines the contract for progress display adapters.
    The core domain uses this to report progress without depending
    on any specific UI library.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a task.

        Args:
            name: Human-readable name for the task.
            total: Total number of units (files) to process.

        Returns:
            A ProgressCallback to call with (completed, total).
        """
        ...

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Args:
            name: The task name passed to start_task().
        """
        ...


class NullProgressReporter:
    """A ProgressReporter that produces no output.

    Used as the default when no progress reporting is desired.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:  # noqa: ARG002
        """Return a no-op callback."""
        return lambda _completed, _total: None

    def finish_task(self, name: str) -> None:
        """Do nothing."""
        _ = name  # Unused but required by protocol


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for parallel task execution.

    Abstracts over concurrent.futures executors to allow dependency injection
    and testing. The core domain uses this protocol instead of directly
    importing ThreadPoolExecutor, keeping concurrency at the edges.
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution.

        Returns:
            Future representing the pending result.
        """
        ...

    def __enter__(self) -> ExecutorPort:
        """Enter context manager."""
        ...

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager."""
        ...

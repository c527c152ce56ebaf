"""Rich-based progress reporter for terminal output."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


if TYPE_CHECKING:
    from types import TracebackType

    from prsync.core.ports import ProgressCallback


class RichProgressReporter:
    """Transient files-staged bar rendered on stderr.

    The bar is drawn only while the reporter is entered as a context
    manager, so stdout keeps carrying the step messages undisturbed.
    Tasks started outside the context are counted but never displayed.

    Example:
        with RichProgressReporter() as reporter:
            report = stage_all(changes, src, dest, staging, progress=reporter)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the progress display.

        Args:
            console: Console to render on. Defaults to a stderr console.
        """
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console if console is not None else Console(stderr=True),
            transient=True,
        )
        # name -> (task id, total files)
        self._tasks: dict[str, tuple[TaskID, int]] = {}

    def __enter__(self) -> RichProgressReporter:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def _advance(self, task_id: TaskID, completed: int, _total: int) -> None:
        self._progress.update(task_id, completed=completed)

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Add a bar for name and return the callback that moves it."""
        task_id = self._progress.add_task(name, total=total)
        self._tasks[name] = (task_id, total)
        return partial(self._advance, task_id)

    def finish_task(self, name: str) -> None:
        """Fill the bar for name. Unknown or already finished names are ignored."""
        entry = self._tasks.pop(name, None)
        if entry is None:
            return
        task_id, total = entry
        self._progress.update(task_id, completed=total)

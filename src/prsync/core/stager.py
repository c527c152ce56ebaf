"""Per-file staging of changed files into the old/ and new/ snapshots.

stage_file() is the unit of work handed to the worker pool. It receives
every root it needs as an argument and touches only paths private to its
own relative path, so workers need no locking between them.
"""

from __future__ import annotations

import shutil
from concurrent.futures import as_completed
from typing import TYPE_CHECKING

from loguru import logger

from prsync.core.models import FileOutcome, StageReport
from prsync.core.ports import NullProgressReporter


if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Future
    from pathlib import Path

    from prsync.core.ports import ExecutorPort, ProgressReporter
    from prsync.core.staging import StagingArea


STAGE_TASK_NAME = "Staging"


def stage_file(
    path: str,
    source_dir: Path,
    dest_dir: Path,
    old_dir: Path,
    new_dir: Path,
) -> FileOutcome:
    """Back up the destination copy of one file and stage the source copy.

    Copies preserve modification time and permission bits. A failed backup
    is a warning and staging still proceeds; a failed stage is reported as
    an error for this file only.

    Args:
        path: Relative POSIX path of the changed file.
        source_dir: Source tree root.
        dest_dir: Destination tree root.
        old_dir: Staging subtree for pre-run destination copies.
        new_dir: Staging subtree for files to deploy.

    Returns:
        The FileOutcome for this path.
    """
    src = source_dir / path
    dest = dest_dir / path
    old = old_dir / path
    new = new_dir / path

    try:
        old.parent.mkdir(parents=True, exist_ok=True)
        new.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to stage {path}: {e}")
        return FileOutcome.STAGE_FAILED

    backup_failed = False
    backed_up = False
    if dest.is_file():
        try:
            shutil.copy2(dest, old)
        except OSError as e:
            logger.warning(f"Failed to backup {path}: {e}")
            backup_failed = True
        else:
            logger.info(f"Backed up old: {path}")
            backed_up = True

    try:
        shutil.copy2(src, new)
    except OSError as e:
        logger.error(f"Failed to stage {path}: {e}")
        # copy2 may fail after writing data, e.g. while copying permissions
        try:
            new.unlink(missing_ok=True)
        except OSError as cleanup_error:
            logger.error(f"Could not remove partial copy of {path}: {cleanup_error}")
        return FileOutcome.STAGE_FAILED

    logger.info(f"Staged new: {path}")
    if backup_failed:
        return FileOutcome.BACKUP_FAILED
    if backed_up:
        return FileOutcome.BACKED_UP_AND_STAGED
    return FileOutcome.STAGED_WITHOUT_BACKUP


def stage_all(
    changes: Sequence[str],
    source_dir: Path,
    dest_dir: Path,
    staging: StagingArea,
    executor: ExecutorPort | None = None,
    progress: ProgressReporter | None = None,
) -> StageReport:
    """Stage every changed file, in parallel when an executor is given.

    One file's failure never cancels its siblings. Completion order is
    unspecified; only the aggregate report matters.

    Args:
        changes: Relative paths from the change list.
        source_dir: Source tree root.
        dest_dir: Destination tree root.
        staging: A staging area that has already been reset.
        executor: Worker pool to fan out over. None stages sequentially.
        progress: Optional progress reporter, advanced once per file.

    Returns:
        StageReport with one outcome per path.
    """
    if progress is None:
        progress = NullProgressReporter()

    report = StageReport()
    total = len(changes)
    if not total:
        return report

    callback = progress.start_task(STAGE_TASK_NAME, total)
    old_dir, new_dir = staging.old_dir, staging.new_dir

    # Sequential execution when no executor provided
    if executor is None:
        for done, path in enumerate(changes, 1):
            outcome = stage_file(path, source_dir, dest_dir, old_dir, new_dir)
            report.record(path, outcome)
            callback(done, total)
        progress.finish_task(STAGE_TASK_NAME)
        return report

    with executor:
        futures: dict[Future[object], str] = {
            executor.submit(stage_file, path, source_dir, dest_dir, old_dir, new_dir): path
            for path in changes
        }
        for done, future in enumerate(as_completed(futures), 1):
            path = futures[future]
            try:
                result = future.result()
            except Exception as e:
                logger.error(f"Failed to stage {path}: {e}")
                result = FileOutcome.STAGE_FAILED
            assert isinstance(result, FileOutcome)
            report.record(path, result)
            callback(done, total)

    progress.finish_task(STAGE_TASK_NAME)
    return report

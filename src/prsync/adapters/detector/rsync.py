"""Change detector backed by an rsync dry run."""

from __future__ import annotations

import re
import subprocess
from typing import TYPE_CHECKING

from loguru import logger

from prsync.core.exceptions import ChangeDetectionError


if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


# Header and summary lines rsync prints around the file list, matched in
# full so files with look-alike names still pass through
_SIZE = r"[\d,.]+[KMGTP]?"
_META_LINES = tuple(
    re.compile(pattern)
    for pattern in (
        r"sending incremental file list",
        r"building file list \.\.\. done",
        rf"sent {_SIZE} bytes\s+received {_SIZE} bytes(\s+{_SIZE} bytes/sec)?",
        rf"total size is {_SIZE}\s+speedup is [\d,.]+( \(DRY RUN\))?",
        r"total: matches=\d+\s+hash_hits=\d+\s+false_alarms=\d+\s+data=\d+",
    )
)


def filter_rsync_output(lines: Iterable[str]) -> list[str]:
    """Reduce rsync's dry-run output to relative paths of changed files.

    Drops blank lines, directory entries (ending in "/") and the summary
    lines rsync prints before and after the file list.

    Examples:
        >>> filter_rsync_output(["sending incremental file list", "./",
        ...                      "a.txt", "sub/", "sub/b.txt", "",
        ...                      "sent 120 bytes  received 20 bytes",
        ...                      "total size is 2  speedup is 0.01 (DRY RUN)"])
        ['a.txt', 'sub/b.txt']
    """
    paths = []
    for line in lines:
        entry = line.rstrip("\r\n")
        if not entry.strip():
            continue
        if entry.endswith("/"):
            continue
        if any(meta.fullmatch(entry) for meta in _META_LINES):
            continue
        paths.append(entry)
    return paths


class RsyncChangeDetector:
    """ChangeDetector that shells out to rsync in dry-run mode.

    rsync walks both trees and applies its quick check (size and
    modification time). Only its file list is used; nothing is copied.
    """

    def __init__(self, binary: str = "rsync") -> None:
        """Initialize the detector.

        Args:
            binary: Name or path of the rsync executable.
        """
        self._binary = binary

    def build_command(
        self, source_dir: Path, dest_dir: Path, exclude_file: Path | None = None
    ) -> list[str]:
        """Build the rsync dry-run command line.

        Trailing slashes make rsync compare directory contents rather than
        nesting the source directory inside the destination.
        """
        command = [self._binary, "-aiv", "--dry-run"]
        if exclude_file is not None:
            if exclude_file.is_file():
                command.append(f"--exclude-from={exclude_file}")
            else:
                logger.warning(
                    f"Exclude file {exclude_file} not found, comparing without exclusions"
                )
        command.append("--out-format=%n")
        command.append(f"{str(source_dir).rstrip('/')}/")
        command.append(f"{str(dest_dir).rstrip('/')}/")
        return command

    def detect(
        self, source_dir: Path, dest_dir: Path, exclude_file: Path | None = None
    ) -> list[str]:
        """Run rsync --dry-run and return the relative paths it would transfer.

        Raises:
            ChangeDetectionError: If rsync is missing or exits non-zero.
        """
        command = self.build_command(source_dir, dest_dir, exclude_file)
        logger.debug(f"Running: {' '.join(command)}")
        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ChangeDetectionError(
                f"Could not run {self._binary}: executable not found",
                command=command,
                cause=e,
            ) from e

        if proc.returncode != 0:
            raise ChangeDetectionError(
                f"{self._binary} exited with status {proc.returncode}",
                command=command,
                returncode=proc.returncode,
                stderr=proc.stderr,
            )

        return filter_rsync_output(proc.stdout.splitlines())

"""Change detector that walks both trees in-process."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from loguru import logger

from prsync.core.exceptions import ChangeDetectionError
from prsync.core.patterns import ExcludePattern, is_excluded, parse_exclude_lines


def load_exclude_file(path: Path | None) -> list[ExcludePattern]:
    """Read exclusion patterns from a file.

    Returns no patterns when path is None or the file does not exist.
    """
    if path is None:
        return []
    if not path.is_file():
        logger.warning(f"Exclude file {path} not found, comparing without exclusions")
        return []
    with path.open("r", encoding="utf-8") as f:
        return parse_exclude_lines(f)


def _differs(src: os.stat_result, dest_path: Path) -> bool:
    """Apply rsync's quick check: missing, not a file, size or mtime changed.

    The destination is not followed through symlinks, so a link is never
    taken for the regular file it points to.
    """
    try:
        dest = dest_path.lstat()
    except (FileNotFoundError, NotADirectoryError):
        return True
    if not stat.S_ISREG(dest.st_mode):
        return True
    return src.st_size != dest.st_size or int(src.st_mtime) != int(dest.st_mtime)


class WalkChangeDetector:
    """ChangeDetector that compares trees with os.walk and stat().

    A source file is reported when the destination copy is missing, is
    not a regular file, or differs in size or whole-second modification
    time. Excluded directories are not descended into.
    """

    def detect(
        self, source_dir: Path, dest_dir: Path, exclude_file: Path | None = None
    ) -> list[str]:
        """Walk source_dir and return changed relative paths, sorted.

        Raises:
            ChangeDetectionError: If the source tree cannot be read.
        """
        if not source_dir.is_dir():
            raise ChangeDetectionError(f"Source directory not found: {source_dir}")

        patterns = load_exclude_file(exclude_file)
        errors: list[OSError] = []
        changes: list[str] = []

        for root, dirs, files in os.walk(source_dir, onerror=errors.append):
            relative_root = Path(root).relative_to(source_dir)

            kept_dirs = []
            for name in dirs:
                relative = (relative_root / name).as_posix()
                if is_excluded(relative, patterns, is_dir=True):
                    logger.debug(f"Excluded directory: {relative}")
                    continue
                kept_dirs.append(name)
            dirs[:] = sorted(kept_dirs)

            for name in files:
                src_path = Path(root) / name
                relative = (relative_root / name).as_posix()
                if is_excluded(relative, patterns):
                    continue
                try:
                    src_stat = src_path.stat()
                except OSError as e:
                    logger.warning(f"Skipping unreadable source entry {relative}: {e}")
                    continue
                if not stat.S_ISREG(src_stat.st_mode):
                    continue
                if _differs(src_stat, dest_dir / relative):
                    changes.append(relative)

        if errors:
            first = errors[0]
            raise ChangeDetectionError(
                f"Could not read source tree: {first}",
                cause=first,
            )

        return sorted(changes)

"""Staging area holding pre-change backups and ready-to-deploy copies.

Layout under the staging root:

    old/<relative path>      previous destination file, if there was one
    new/<relative path>      source file to deploy
    changed_files.txt        one relative path per line
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from prsync.core.exceptions import StagingSetupError


if TYPE_CHECKING:
    from collections.abc import Iterable


OLD_DIRNAME = "old"
NEW_DIRNAME = "new"
CHANGES_FILENAME = "changed_files.txt"


class StagingArea:
    """A staging root with old/ and new/ subtrees and a change-list file.

    The area is wiped and recreated by reset() at the start of every run
    and is left on disk afterwards as a rollback and audit artifact.

    Example:
        >>> area = StagingArea("staging")
        >>> area.reset()
        >>> area.write_changes(["a.txt", "sub/b.txt"])
        >>> area.new_path("sub/b.txt")
        PosixPath('staging/new/sub/b.txt')
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"StagingArea({str(self.root)!r})"

    @property
    def old_dir(self) -> Path:
        return self.root / OLD_DIRNAME

    @property
    def new_dir(self) -> Path:
        return self.root / NEW_DIRNAME

    @property
    def changes_file(self) -> Path:
        return self.root / CHANGES_FILENAME

    def old_path(self, relative: str) -> Path:
        """Backup location for a relative path."""
        return self.old_dir / relative

    def new_path(self, relative: str) -> Path:
        """Staged-copy location for a relative path."""
        return self.new_dir / relative

    def reset(self) -> None:
        """Delete any previous staging content and recreate empty old/ and new/.

        Raises:
            StagingSetupError: If the root cannot be removed or recreated.
        """
        logger.debug(f"Resetting staging area at {self.root}")
        try:
            if self.root.is_symlink() or self.root.is_file():
                self.root.unlink()
            elif self.root.exists():
                shutil.rmtree(self.root)
        except OSError as e:
            raise StagingSetupError(
                f"Could not remove previous staging area {self.root}: {e}",
                path=self.root,
                cause=e,
            ) from e

        try:
            self.old_dir.mkdir(parents=True, exist_ok=True)
            self.new_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StagingSetupError(
                f"Could not create staging area {self.root}: {e}",
                path=self.root,
                cause=e,
            ) from e

    def write_changes(self, paths: Iterable[str]) -> None:
        """Write the change list, one newline-terminated path per line."""
        text = "".join(f"{p}\n" for p in paths)
        self.changes_file.write_text(text, encoding="utf-8")

    def read_changes(self) -> list[str]:
        """Read the change list back, skipping blank lines.

        Returns an empty list when no change list has been written.
        """
        if not self.changes_file.exists():
            return []
        lines = self.changes_file.read_text(encoding="utf-8").splitlines()
        return [line for line in lines if line]

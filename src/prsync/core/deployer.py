"""Copy the staged new/ tree onto the destination."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from loguru import logger

from prsync.core.exceptions import DeployError


def _clear_target(target: Path) -> None:
    """Make target safe to replace with a regular file.

    A symlink is removed so the link itself is replaced rather than the
    file it points to. An empty directory is removed; rmdir() raises
    for a non-empty one.
    """
    if target.is_symlink():
        target.unlink()
    elif target.is_dir():
        target.rmdir()


def deploy(new_dir: Path, dest_dir: Path, backup_dir: Path | None = None) -> int:
    """Copy every file under new_dir to the same relative path under dest_dir.

    Existing destination files are overwritten and missing directories are
    created. A destination symlink is replaced by the file, not written
    through, and a non-empty directory where a file belongs is an error.
    Modification times and permission bits are preserved. This is the only
    step that mutates the destination and it is not transactional.

    Args:
        new_dir: The staging subtree holding files to deploy.
        dest_dir: Destination tree root.
        backup_dir: The staging subtree holding pre-run copies, named in
            the error raised when deployment fails. Defaults to the old/
            sibling of new_dir.

    Returns:
        Number of files deployed.

    Raises:
        DeployError: If a directory or file cannot be written. Files copied
            before the failure stay in place.
    """
    if backup_dir is None:
        backup_dir = new_dir.parent / "old"

    deployed = 0
    for root, _dirs, files in os.walk(new_dir):
        relative_root = Path(root).relative_to(new_dir)
        target_root = dest_dir / relative_root
        try:
            target_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DeployError(
                f"Could not create {target_root}: {e}",
                path=target_root,
                backup_dir=backup_dir,
                cause=e,
            ) from e

        for name in sorted(files):
            target = target_root / name
            try:
                _clear_target(target)
                shutil.copy2(Path(root) / name, target)
            except OSError as e:
                raise DeployError(
                    f"Could not deploy {target}: {e}",
                    path=target,
                    backup_dir=backup_dir,
                    cause=e,
                ) from e
            logger.debug(f"Deployed: {(relative_root / name).as_posix()}")
            deployed += 1

    return deployed

"""Domain exceptions for prsync.

All fatal errors inherit from PrsyncError, allowing callers to catch any
run-stopping failure with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.

Per-file backup and stage failures are not exceptions: they are recorded
in a StageReport and never abort a run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class PrsyncError(Exception):
    """Base class for all prsync exceptions.

    Catch this to handle any fatal error from a sync run.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class ConfigurationError(PrsyncError):
    """Raised when a sync configuration is invalid (empty paths, bad core count)."""

    pass


class StagingSetupError(PrsyncError):
    """Raised when the staging area cannot be deleted or recreated.

    Attributes:
        path: The staging path that could not be prepared.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions on the staging location."""
        return f"Check that {self.path} is writable and not in use"


class ChangeDetectionError(PrsyncError):
    """Raised when comparing source and destination trees fails.

    Attributes:
        command: The command line that was run, if any.
        returncode: Exit status of the comparison tool, if it ran.
        stderr: Error output captured from the comparison tool.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
        cause: Exception | None = None,
    ) -> None:
        self.command = list(command) if command is not None else []
        self.returncode = returncode
        self.stderr = stderr
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest installing rsync or checking its error output."""
        if isinstance(self.cause, FileNotFoundError):
            return "Install rsync or use --detector walk"
        if self.stderr:
            return f"rsync reported: {self.stderr.strip().splitlines()[-1]}"
        return "Verify the source and destination directories are readable"


class DeployError(PrsyncError):
    """Raised when copying staged files onto the destination fails midway.

    The destination may be partially updated. Backups of every overwritten
    file remain in the staging area.

    Attributes:
        path: The destination path being written when the failure occurred.
        backup_dir: The staging directory holding pre-run copies.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        backup_dir: Path,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.backup_dir = backup_dir
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Point at the retained backups for manual rollback."""
        return f"Previous versions of overwritten files are in {self.backup_dir}"

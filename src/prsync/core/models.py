"""Core domain models for prsync.

These models are pure Python dataclasses with no I/O dependencies.
They represent a sync run's configuration and the outcome of staging it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Self

from prsync.core.exceptions import ConfigurationError


if TYPE_CHECKING:
    from prsync.core.staging import StagingArea


_POSITIVE_INTEGER = re.compile(r"[0-9]+")


def strip_trailing_separators(path: str) -> str:
    """Remove trailing "/" from a path string, keeping a bare root intact.

    Examples:
        >>> strip_trailing_separators("/data/src/")
        '/data/src'
        >>> strip_trailing_separators("/")
        '/'
    """
    stripped = path.rstrip("/")
    if not stripped and path:
        return "/"
    return stripped


def parse_core_count(value: str) -> int:
    """Parse a worker count, accepting only plain digit strings >= 1.

    Raises:
        ConfigurationError: If value is not a positive integer.
    """
    if not _POSITIVE_INTEGER.fullmatch(value) or int(value) < 1:
        raise ConfigurationError(f"Cores must be a positive integer, got '{value}'")
    return int(value)


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Validated configuration for a single sync run.

    Attributes:
        source_dir: Root of the tree to copy from.
        dest_dir: Root of the tree to update.
        cores: Number of concurrent staging workers.
        staging_dir: Where old/, new/ and the change list are written.
        exclude_file: Pattern file listing paths the comparison ignores.

    Example:
        >>> config = SyncConfig.from_args("/srv/src/", "/srv/www/", cores=4)
        >>> str(config.source_dir)
        '/srv/src'
    """

    source_dir: Path
    dest_dir: Path
    cores: int = 1
    staging_dir: Path = Path("staging")
    exclude_file: Path = Path("exclude.txt")

    def __post_init__(self) -> None:
        """Validate worker count after initialization."""
        if isinstance(self.cores, bool) or not isinstance(self.cores, int):
            raise ConfigurationError("Cores must be a positive integer")
        if self.cores < 1:
            raise ConfigurationError(
                f"Cores must be a positive integer, got {self.cores}"
            )

    @classmethod
    def from_args(
        cls,
        source: str | None,
        destination: str | None,
        cores: int = 1,
        staging_dir: str | Path = "staging",
        exclude_file: str | Path = "exclude.txt",
    ) -> Self:
        """Build a config from raw command-line strings.

        Both directories must be non-empty. Trailing separators are
        stripped so relative-path joins never double a separator.

        Raises:
            ConfigurationError: If a directory is missing or cores is invalid.
        """
        if not source or not destination:
            raise ConfigurationError(
                "Both source and destination directories must be specified"
            )
        return cls(
            source_dir=Path(strip_trailing_separators(source)),
            dest_dir=Path(strip_trailing_separators(destination)),
            cores=cores,
            staging_dir=Path(staging_dir),
            exclude_file=Path(exclude_file),
        )


class FileOutcome(StrEnum):
    """Result of staging a single changed file."""

    BACKED_UP_AND_STAGED = "backed_up_and_staged"
    STAGED_WITHOUT_BACKUP = "staged_without_backup"
    BACKUP_FAILED = "backup_failed"
    STAGE_FAILED = "stage_failed"

    @property
    def staged(self) -> bool:
        """True when the file was placed in new/ and will be deployed."""
        return self is not FileOutcome.STAGE_FAILED


@dataclass(slots=True)
class StageReport:
    """Per-file outcomes of a staging pass.

    Attributes:
        outcomes: Mapping of relative path to its FileOutcome.
    """

    outcomes: dict[str, FileOutcome] = field(default_factory=dict)

    def record(self, path: str, outcome: FileOutcome) -> None:
        """Store the outcome for one path."""
        self.outcomes[path] = outcome

    @property
    def staged(self) -> list[str]:
        """Paths placed in new/, sorted."""
        return sorted(p for p, o in self.outcomes.items() if o.staged)

    @property
    def backed_up(self) -> list[str]:
        """Paths whose previous destination copy was saved in old/, sorted."""
        return sorted(
            p
            for p, o in self.outcomes.items()
            if o is FileOutcome.BACKED_UP_AND_STAGED
        )

    @property
    def backup_failures(self) -> list[str]:
        """Paths staged without the backup they needed, sorted."""
        return sorted(
            p for p, o in self.outcomes.items() if o is FileOutcome.BACKUP_FAILED
        )

    @property
    def failed(self) -> list[str]:
        """Paths that could not be staged, sorted."""
        return sorted(
            p for p, o in self.outcomes.items() if o is FileOutcome.STAGE_FAILED
        )

    @property
    def ok(self) -> bool:
        """True when every path was staged."""
        return not self.failed


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Summary of a completed sync run.

    Attributes:
        changes: Relative paths the detector reported as new or modified.
        staging: The staging area used for this run.
        report: Staging outcomes, or None when there was nothing to stage.
        deployed: Number of files copied onto the destination.
    """

    changes: list[str]
    staging: StagingArea
    report: StageReport | None = None
    deployed: int = 0

    @property
    def up_to_date(self) -> bool:
        """True when the destination already matched the source."""
        return not self.changes

"""Core domain services for prsync."""

from collections.abc import Callable

from loguru import logger

from prsync.core.deployer import deploy
from prsync.core.models import SyncConfig, SyncResult
from prsync.core.ports import (
    ChangeDetector,
    ExecutorPort,
    NullProgressReporter,
    ProgressReporter,
)
from prsync.core.stager import stage_all
from prsync.core.staging import StagingArea


Announce = Callable[[str], None]


def _silent(_message: str) -> None:
    return None


class Synchronizer:
    """Orchestrates a sync run: reset staging, detect, stage, deploy.

    Stages run strictly in sequence. Failures in reset, detection or
    deployment raise a PrsyncError subclass; per-file staging failures are
    collected in the returned SyncResult.report.
    """

    def __init__(
        self,
        config: SyncConfig,
        detector: ChangeDetector,
        executor: ExecutorPort | None = None,
        announce: Announce | None = None,
    ) -> None:
        """Wire a run together.

        Args:
            config: Validated run configuration.
            detector: Change detector used for the dry-run comparison.
            executor: Worker pool for staging. None stages sequentially.
            announce: Callback for step banners shown to the user.
        """
        self._config = config
        self._detector = detector
        self._executor = executor
        self._announce = announce if announce is not None else _silent
        self.staging = StagingArea(config.staging_dir)

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        detector: str = "rsync",
        announce: Announce | None = None,
    ) -> "Synchronizer":
        """Create a Synchronizer with default adapters for a configuration.

        Args:
            config: Validated run configuration.
            detector: Name of the change detector ("rsync" or "walk").
            announce: Callback for step banners shown to the user.

        Returns:
            Synchronizer with the named detector and a pool sized to config.cores.
        """
        from prsync.adapters.detector import DETECTORS
        from prsync.adapters.executor import create_executor

        if detector not in DETECTORS:
            raise ValueError(
                f"Unknown detector '{detector}', expected one of: {', '.join(sorted(DETECTORS))}"
            )

        return cls(
            config=config,
            detector=DETECTORS[detector](),
            executor=create_executor(config.cores),
            announce=announce,
        )

    @property
    def config(self) -> SyncConfig:
        return self._config

    def detect_changes(self) -> list[str]:
        """Compare source against destination and write the change list.

        The destination root is created first so a first sync to a missing
        destination reports every source file.
        """
        config = self._config
        self._announce("Detecting changes between:")
        self._announce(f"  Source:      {config.source_dir}/")
        self._announce(f"  Destination: {config.dest_dir}/")
        self._announce(f"  Using cores: {config.cores}")

        config.dest_dir.mkdir(parents=True, exist_ok=True)
        changes = self._detector.detect(
            config.source_dir, config.dest_dir, config.exclude_file
        )
        self.staging.write_changes(changes)
        logger.info(f"Found {len(changes)} changed file(s)")
        return changes

    def run(self, progress: ProgressReporter | None = None) -> SyncResult:
        """Perform one complete sync run.

        Args:
            progress: Optional progress reporter for the staging phase.

        Returns:
            SyncResult describing the changes, staging outcomes and deployment.

        Raises:
            StagingSetupError: If the staging area cannot be prepared.
            ChangeDetectionError: If the comparison fails.
            DeployError: If copying staged files onto the destination fails.
        """
        if progress is None:
            progress = NullProgressReporter()

        config = self._config

        self._announce("Cleaning up previous staging...")
        self.staging.reset()

        changes = self.detect_changes()
        if not changes:
            self._announce("No changes detected. Exiting.")
            return SyncResult(changes=[], staging=self.staging)

        self._announce(f"Staging files (using {config.cores} cores)...")
        report = stage_all(
            self.staging.read_changes(),
            config.source_dir,
            config.dest_dir,
            self.staging,
            executor=self._executor,
            progress=progress,
        )
        if not report.ok:
            logger.warning(f"{len(report.failed)} file(s) failed to stage")

        self._announce("Deploying staged files to destination...")
        deployed = deploy(
            self.staging.new_dir, config.dest_dir, backup_dir=self.staging.old_dir
        )

        return SyncResult(
            changes=changes,
            staging=self.staging,
            report=report,
            deployed=deployed,
        )

"""prsync - Parallel staged sync of a source tree onto a destination tree.

Changed files are detected with a dry-run comparison, staged into an
old/ (previous versions) and new/ (files to deploy) snapshot by a pool
of workers, and then copied onto the destination. The staging area is
kept afterwards so overwritten files can be restored by hand.

Example:
    >>> from prsync import SyncConfig, Synchronizer
    >>> config = SyncConfig.from_args("site/", "/var/www/site", cores=4)
    >>> result = Synchronizer.from_config(config).run()
    >>> result.report.failed
    []
"""

from prsync.adapters.detector import (
    RsyncChangeDetector,
    WalkChangeDetector,
    filter_rsync_output,
)
from prsync.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from prsync.config import default_cores
from prsync.core.deployer import deploy
from prsync.core.exceptions import (
    ChangeDetectionError,
    ConfigurationError,
    DeployError,
    PrsyncError,
    StagingSetupError,
)
from prsync.core.models import FileOutcome, StageReport, SyncConfig, SyncResult
from prsync.core.ports import (
    ChangeDetector,
    ExecutorPort,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
)
from prsync.core.services import Synchronizer
from prsync.core.stager import stage_all, stage_file
from prsync.core.staging import StagingArea
from prsync.progress import RichProgressReporter


__version__ = "0.1.0"

__all__ = [
    "ChangeDetectionError",
    "ChangeDetector",
    "ConfigurationError",
    "DeployError",
    "ExecutorPort",
    "FileOutcome",
    "NullProgressReporter",
    "PrsyncError",
    "ProgressCallback",
    "ProgressReporter",
    "RichProgressReporter",
    "RsyncChangeDetector",
    "StageReport",
    "StagingArea",
    "StagingSetupError",
    "SyncConfig",
    "SyncResult",
    "SynchronousExecutor",
    "Synchronizer",
    "ThreadPoolExecutorAdapter",
    "WalkChangeDetector",
    "__version__",
    "default_cores",
    "deploy",
    "filter_rsync_output",
    "stage_all",
    "stage_file",
]

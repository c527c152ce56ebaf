"""Core domain module for prsync.

This module contains the sync models, port definitions and the staging,
deployment and orchestration logic. Subprocess and thread-pool details
live in the adapters.
"""

from prsync.core.models import FileOutcome, StageReport, SyncConfig, SyncResult
from prsync.core.ports import ChangeDetector, ExecutorPort, ProgressReporter
from prsync.core.staging import StagingArea


__all__ = [
    "ChangeDetector",
    "ExecutorPort",
    "FileOutcome",
    "ProgressReporter",
    "StageReport",
    "StagingArea",
    "SyncConfig",
    "SyncResult",
]

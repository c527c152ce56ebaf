"""Progress display adapters."""

from prsync.progress.rich_progress import RichProgressReporter


__all__ = ["RichProgressReporter"]

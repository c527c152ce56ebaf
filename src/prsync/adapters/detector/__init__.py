"""Change detector adapters."""

from prsync.adapters.detector.rsync import RsyncChangeDetector, filter_rsync_output
from prsync.adapters.detector.walk import WalkChangeDetector


DETECTORS = {
    "rsync": RsyncChangeDetector,
    "walk": WalkChangeDetector,
}

__all__ = ["DETECTORS", "RsyncChangeDetector", "WalkChangeDetector", "filter_rsync_output"]

"""Handling fatal errors and per-file failures.

Fatal problems (staging area, change detection, deployment) raise a
PrsyncError subclass with a recovery_hint. Files that could not be
staged do not raise; they are listed in the run's StageReport.
"""

import sys

from prsync import ChangeDetectionError, PrsyncError, SyncConfig, Synchronizer


config = SyncConfig.from_args("./site", "./public", cores=2)
sync = Synchronizer.from_config(config)

try:
    result = sync.run()
except ChangeDetectionError as e:
    # rsync missing or failed: the walk detector needs no external binary
    print(f"Detection failed: {e}", file=sys.stderr)
    print(f"Hint: {e.recovery_hint}", file=sys.stderr)
    result = Synchronizer.from_config(config, detector="walk").run()
except PrsyncError as e:
    print(f"Sync failed: {e}", file=sys.stderr)
    if e.recovery_hint:
        print(f"Hint: {e.recovery_hint}", file=sys.stderr)
    sys.exit(1)

if result.report is not None and not result.report.ok:
    for path in result.report.failed:
        print(f"Not deployed: {path}", file=sys.stderr)
    sys.exit(1)

"""Basic library usage.

This example syncs a source tree onto a destination from Python instead
of the command line. Changed files are staged under ./staging and the
previous versions of overwritten files are kept in ./staging/old.
"""

from pathlib import Path

from prsync import SyncConfig, Synchronizer


config = SyncConfig.from_args(
    source="./site/",
    destination="./public/",
    cores=4,
    staging_dir="staging",
    exclude_file="exclude.txt",
)

# Option 1: Factory method (rsync dry run, pool sized to cores)
sync = Synchronizer.from_config(config, announce=print)

# Option 2: In-process tree walk, no rsync binary needed
# sync = Synchronizer.from_config(config, detector="walk", announce=print)

result = sync.run()

if result.up_to_date:
    print("Nothing to do")
else:
    print(f"Deployed {result.deployed} file(s)")
    print(f"Backups: {sorted(Path(result.staging.old_dir).rglob('*'))}")

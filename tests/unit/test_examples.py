"""Tests validating that example code patterns work correctly.

These tests ensure the examples in the examples/ directory represent
working, copy-pasteable code patterns.
"""

from pathlib import Path

import pytest

from prsync import (
    ChangeDetectionError,
    RsyncChangeDetector,
    SyncConfig,
    Synchronizer,
    WalkChangeDetector,
)


@pytest.mark.core
class TestBasicUsage:
    """Tests for basic_usage.py example pattern."""

    def test_library_sync(self, tmp_path: Path) -> None:
        """from_args() + from_config() runs a complete sync."""
        site = tmp_path / "site"
        site.mkdir()
        (site / "index.html").write_text("<h1>hi</h1>")

        config = SyncConfig.from_args(
            source=f"{site}/",
            destination=f"{tmp_path / 'public'}/",
            cores=4,
            staging_dir=tmp_path / "staging",
            exclude_file=tmp_path / "exclude.txt",
        )
        announced: list[str] = []
        result = Synchronizer.from_config(
            config, detector="walk", announce=announced.append
        ).run()

        assert not result.up_to_date
        assert result.deployed == 1
        assert (tmp_path / "public" / "index.html").read_text() == "<h1>hi</h1>"
        assert announced


@pytest.mark.core
class TestErrorHandling:
    """Tests for error_handling.py example pattern."""

    def test_fall_back_to_walk_detector(self, tmp_path: Path) -> None:
        """A failed rsync detection can be retried with the walk detector."""
        site = tmp_path / "site"
        site.mkdir()
        (site / "a.txt").write_text("a")
        config = SyncConfig.from_args(
            str(site),
            str(tmp_path / "public"),
            staging_dir=tmp_path / "staging",
        )

        broken = Synchronizer(config, detector=RsyncChangeDetector(binary="no-such-rsync"))
        with pytest.raises(ChangeDetectionError) as exc_info:
            broken.run()
        assert exc_info.value.recovery_hint

        result = Synchronizer(config, detector=WalkChangeDetector()).run()

        assert result.report is not None
        assert result.report.ok

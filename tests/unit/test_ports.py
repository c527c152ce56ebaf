"""Unit tests for port interfaces."""

from pathlib import Path

import pytest


@pytest.mark.core
@pytest.mark.tier(0)
def test_progress_callback_is_callable():
    """ProgressCallback should be a callable type alias."""
    from prsync.core.ports import ProgressCallback

    assert ProgressCallback is not None


@pytest.mark.core
@pytest.mark.tier(0)
def test_change_detector_has_detect_method():
    from prsync.core.ports import ChangeDetector

    assert hasattr(ChangeDetector, "detect")


@pytest.mark.core
@pytest.mark.tier(0)
def test_custom_detector_satisfies_protocol():
    """Any object with a detect() method is a ChangeDetector."""
    from prsync.core.ports import ChangeDetector

    class ListDetector:
        def detect(
            self, source_dir: Path, dest_dir: Path, exclude_file: Path | None = None
        ) -> list[str]:
            return []

    assert isinstance(ListDetector(), ChangeDetector)


@pytest.mark.core
@pytest.mark.tier(0)
def test_null_progress_reporter_satisfies_protocol():
    from prsync.core.ports import NullProgressReporter, ProgressReporter

    reporter = NullProgressReporter()
    callback = reporter.start_task("Staging", 5)
    callback(1, 5)
    reporter.finish_task("Staging")

    assert isinstance(reporter, ProgressReporter)


@pytest.mark.core
@pytest.mark.tier(0)
def test_executor_port_has_submit_and_context_methods():
    from prsync.core.ports import ExecutorPort

    assert hasattr(ExecutorPort, "submit")
    assert hasattr(ExecutorPort, "__enter__")
    assert hasattr(ExecutorPort, "__exit__")

"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for building source and destination trees.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from loguru import logger


TreeBuilder = Callable[[Path, dict[str, str]], Path]

requires_rsync = pytest.mark.skipif(
    shutil.which("rsync") is None, reason="rsync is not installed"
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, staging and services")
    config.addinivalue_line("markers", "detector: Change detector adapters")
    config.addinivalue_line("markers", "stager: Parallel staging and executors")
    config.addinivalue_line("markers", "progress: Rich progress integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop loguru sinks added during a test so they never outlive it."""
    yield
    logger.remove()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda msg: messages.append(msg.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)


def write_file(path: Path, content: str, mtime: float | None = None) -> Path:
    """Write content to path, creating parents, optionally pinning its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def make_tree() -> TreeBuilder:
    """Build a directory tree from a {relative path: content} mapping."""

    def build(root: Path, files: dict[str, str]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            write_file(root / relative, content)
        return root

    return build


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    return tmp_path / "dest"


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    return tmp_path / "staging"

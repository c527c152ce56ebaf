"""Unit tests for deploying the staged tree."""

from pathlib import Path

import pytest
from conftest import write_file

from prsync.core.deployer import deploy
from prsync.core.exceptions import DeployError


@pytest.mark.core
@pytest.mark.tier(1)
class TestDeploy:
    """Tests for deploy()."""

    def test_copies_tree_and_creates_directories(
        self, staging_dir: Path, dest_dir: Path, make_tree
    ) -> None:
        new_dir = make_tree(staging_dir / "new", {"a.txt": "X", "sub/deep/b.txt": "Y"})

        count = deploy(new_dir, dest_dir)

        assert count == 2
        assert (dest_dir / "a.txt").read_text() == "X"
        assert (dest_dir / "sub" / "deep" / "b.txt").read_text() == "Y"

    def test_overwrites_and_leaves_other_files(
        self, staging_dir: Path, dest_dir: Path, make_tree
    ) -> None:
        make_tree(dest_dir, {"a.txt": "old content", "untouched.txt": "keep"})
        new_dir = make_tree(staging_dir / "new", {"a.txt": "new content"})

        deploy(new_dir, dest_dir)

        assert (dest_dir / "a.txt").read_text() == "new content"
        assert (dest_dir / "untouched.txt").read_text() == "keep"

    def test_preserves_mtime(self, staging_dir: Path, dest_dir: Path) -> None:
        write_file(staging_dir / "new" / "a.txt", "X", mtime=1_650_000_000)

        deploy(staging_dir / "new", dest_dir)

        assert int((dest_dir / "a.txt").stat().st_mtime) == 1_650_000_000

    def test_empty_tree_deploys_nothing(self, staging_dir: Path, dest_dir: Path) -> None:
        (staging_dir / "new").mkdir(parents=True)

        assert deploy(staging_dir / "new", dest_dir) == 0

    def test_failure_names_backup_directory(
        self, staging_dir: Path, dest_dir: Path, make_tree
    ) -> None:
        """A destination file where a directory is needed stops the deploy."""
        new_dir = make_tree(staging_dir / "new", {"sub/b.txt": "Y"})
        write_file(dest_dir / "sub", "I am a file")

        with pytest.raises(DeployError) as exc_info:
            deploy(new_dir, dest_dir)

        assert exc_info.value.backup_dir == staging_dir / "old"
        assert str(staging_dir / "old") in exc_info.value.recovery_hint

    def test_explicit_backup_directory(
        self, tmp_path: Path, staging_dir: Path, dest_dir: Path, make_tree
    ) -> None:
        new_dir = make_tree(staging_dir / "new", {"sub/b.txt": "Y"})
        write_file(dest_dir / "sub", "I am a file")

        with pytest.raises(DeployError) as exc_info:
            deploy(new_dir, dest_dir, backup_dir=tmp_path / "elsewhere")

        assert exc_info.value.backup_dir == tmp_path / "elsewhere"

    def test_file_over_non_empty_directory_is_an_error(
        self, staging_dir: Path, dest_dir: Path, make_tree
    ) -> None:
        """A directory in the way is never deployed into."""
        new_dir = make_tree(staging_dir / "new", {"thing": "file content"})
        write_file(dest_dir / "thing" / "inner.txt", "keep")

        with pytest.raises(DeployError) as exc_info:
            deploy(new_dir, dest_dir)

        assert exc_info.value.path == dest_dir / "thing"
        assert not (dest_dir / "thing" / "thing").exists()
        assert (dest_dir / "thing" / "inner.txt").read_text() == "keep"

    def test_file_replaces_empty_directory(
        self, staging_dir: Path, dest_dir: Path, make_tree
    ) -> None:
        new_dir = make_tree(staging_dir / "new", {"thing": "file content"})
        (dest_dir / "thing").mkdir(parents=True)

        assert deploy(new_dir, dest_dir) == 1
        assert (dest_dir / "thing").is_file()
        assert (dest_dir / "thing").read_text() == "file content"

    def test_symlink_is_replaced_not_followed(
        self, tmp_path: Path, staging_dir: Path, dest_dir: Path, make_tree
    ) -> None:
        outside = write_file(tmp_path / "outside.txt", "outside")
        new_dir = make_tree(staging_dir / "new", {"link.txt": "deployed"})
        dest_dir.mkdir()
        (dest_dir / "link.txt").symlink_to(outside)

        deploy(new_dir, dest_dir)

        assert not (dest_dir / "link.txt").is_symlink()
        assert (dest_dir / "link.txt").read_text() == "deployed"
        assert outside.read_text() == "outside"

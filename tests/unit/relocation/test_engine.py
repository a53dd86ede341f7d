"""Unit tests for RelocationEngine.

Tests moving directories with symlinks left behind, idempotence,
collision renaming, cross-device moves and failure reporting.
"""

import errno
import os
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest
from ovlspace.relocation.engine import (
    DestinationError,
    RelocationEngine,
    RelocationError,
    RelocationStage,
)
from ovlspace.relocation.models import RelocationEntry

FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53)


def _fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Home directory with Downloads and Music populated."""
    root = tmp_path / "root"
    (root / "Downloads" / "iso").mkdir(parents=True)
    (root / "Downloads" / "iso" / "distro.iso").write_bytes(b"i" * 32)
    (root / "Music").mkdir()
    (root / "Music" / "song.ogg").write_bytes(b"m" * 16)
    return root


@pytest.fixture
def engine(home: Path) -> RelocationEngine:
    """Engine for Downloads, Music and an absent Videos folder."""
    return RelocationEngine.from_paths(
        [home / "Downloads", home / "Music", home / "Videos"], clock=_fixed_clock
    )


class TestRelocationEntry:
    """Tests for RelocationEntry validation."""

    def test_from_path_uses_base_name(self) -> None:
        """Entry name is the source's base name."""
        entry = RelocationEntry.from_path(Path("/root/Downloads"))

        assert entry.name == "Downloads"

    @pytest.mark.parametrize("bad", [Path("/"), Path(".")])
    def test_rejects_root_and_cwd(self, bad: Path) -> None:
        """Relocating / or . is refused."""
        with pytest.raises(ValueError, match="Invalid relocation source"):
            RelocationEntry.from_path(bad)


class TestRelocate:
    """Tests for the relocate operation."""

    def test_moves_and_links(self, engine: RelocationEngine, home: Path, tmp_path: Path) -> None:
        """Each present source is moved and replaced by a symlink."""
        dest = tmp_path / "ext" / "EasyData"

        records = engine.relocate(dest)

        assert [r.source for r in records] == [home / "Downloads", home / "Music"]
        for record in records:
            assert record.source.is_symlink()
            assert Path(os.readlink(record.source)) == record.destination
            assert not record.renamed
        assert (dest / "Downloads" / "iso" / "distro.iso").read_bytes() == b"i" * 32
        assert (home / "Music" / "song.ogg").read_bytes() == b"m" * 16

    def test_second_run_is_noop(self, engine: RelocationEngine, tmp_path: Path) -> None:
        """Already relocated sources are skipped on a second run."""
        dest = tmp_path / "ext"
        engine.relocate(dest)
        before = sorted(p.name for p in dest.iterdir())

        records = engine.relocate(dest)

        assert records == []
        assert sorted(p.name for p in dest.iterdir()) == before

    def test_absent_source_skipped(self, tmp_path: Path) -> None:
        """A source that does not exist produces no record and no error."""
        engine = RelocationEngine.from_paths([tmp_path / "nothing"])

        assert engine.relocate(tmp_path / "ext") == []

    def test_collision_gets_timestamp_suffix(
        self, engine: RelocationEngine, home: Path, tmp_path: Path
    ) -> None:
        """An existing destination name is kept and a timestamped one is used."""
        dest = tmp_path / "ext"
        (dest / "Music").mkdir(parents=True)
        (dest / "Music" / "old.ogg").write_text("old")

        records = engine.relocate(dest)

        music = records[1]
        assert music.renamed
        assert music.destination == dest / "Music-20250314-092653"
        assert (dest / "Music" / "old.ogg").read_text() == "old"
        assert os.readlink(home / "Music") == str(dest / "Music-20250314-092653")

    def test_collision_on_timestamp_gets_counter(
        self, engine: RelocationEngine, tmp_path: Path
    ) -> None:
        """When the timestamped name is also taken a numeric suffix is added."""
        dest = tmp_path / "ext"
        (dest / "Music").mkdir(parents=True)
        (dest / "Music-20250314-092653").mkdir()

        records = engine.relocate(dest)

        assert records[1].destination == dest / "Music-20250314-092653-1"

    def test_dangling_symlink_counts_as_collision(
        self, engine: RelocationEngine, tmp_path: Path
    ) -> None:
        """A dangling symlink at the destination is never overwritten."""
        dest = tmp_path / "ext"
        dest.mkdir()
        (dest / "Downloads").symlink_to(tmp_path / "gone")

        records = engine.relocate(dest)

        assert records[0].renamed
        assert (dest / "Downloads").is_symlink()

    def test_cross_device_move_uses_copy(
        self, engine: RelocationEngine, home: Path, tmp_path: Path
    ) -> None:
        """EXDEV from rename falls back to copy, rename into place, then delete."""
        real_rename = os.rename
        calls: list[tuple[str, str]] = []

        def fake_rename(src: object, dst: object) -> None:
            calls.append((str(src), str(dst)))
            if Path(str(src)).parent == home:
                raise OSError(errno.EXDEV, "Invalid cross-device link")
            real_rename(src, dst)  # type: ignore[arg-type]

        dest = tmp_path / "ext"
        with patch("ovlspace.relocation.engine.os.rename", side_effect=fake_rename):
            records = engine.relocate(dest)

        assert len(records) == 2
        assert (dest / "Downloads" / "iso" / "distro.iso").exists()
        assert (home / "Downloads").is_symlink()
        assert not any(p.name.startswith(".") for p in dest.iterdir())
        staged = [dst for src, dst in calls if ".partial-" in src]
        assert staged == [str(dest / "Downloads"), str(dest / "Music")]

    def test_failed_cross_device_copy_leaves_source(
        self, engine: RelocationEngine, home: Path, tmp_path: Path
    ) -> None:
        """A copy failure removes the staging tree and keeps the source intact."""
        dest = tmp_path / "ext"
        exdev = OSError(errno.EXDEV, "Invalid cross-device link")

        with (
            patch("ovlspace.relocation.engine.os.rename", side_effect=exdev),
            patch(
                "ovlspace.relocation.engine.shutil.copytree",
                side_effect=OSError(errno.ENOSPC, "No space left on device"),
            ),
            pytest.raises(RelocationError) as exc_info,
        ):
            engine.relocate(dest)

        assert exc_info.value.stage is RelocationStage.MOVE
        assert (home / "Downloads" / "iso" / "distro.iso").exists()
        assert not (home / "Downloads").is_symlink()
        assert list(dest.iterdir()) == []


class TestRelocationFailures:
    """Tests for aborting on the first failure."""

    def test_move_failure_aborts_with_completed(
        self, engine: RelocationEngine, home: Path, tmp_path: Path
    ) -> None:
        """A failed move stops the run and reports what already moved."""
        real_rename = os.rename

        def fake_rename(src: object, dst: object) -> None:
            if Path(str(src)).name == "Music":
                raise PermissionError(errno.EACCES, "Permission denied")
            real_rename(src, dst)  # type: ignore[arg-type]

        with (
            patch("ovlspace.relocation.engine.os.rename", side_effect=fake_rename),
            pytest.raises(RelocationError) as exc_info,
        ):
            engine.relocate(tmp_path / "ext")

        error = exc_info.value
        assert error.stage is RelocationStage.MOVE
        assert error.source == home / "Music"
        assert [r.source for r in error.completed] == [home / "Downloads"]
        assert (home / "Downloads").is_symlink()
        assert (home / "Music").is_dir()
        assert not (home / "Music").is_symlink()
        assert str(error).startswith("Move failed:")

    def test_link_failure_reports_restore_command(
        self, engine: RelocationEngine, home: Path, tmp_path: Path
    ) -> None:
        """A failed symlink names where the data went and how to restore it."""
        dest = tmp_path / "ext"

        with (
            patch.object(Path, "symlink_to", side_effect=OSError("read-only")),
            pytest.raises(RelocationError) as exc_info,
        ):
            engine.relocate(dest)

        error = exc_info.value
        assert error.stage is RelocationStage.LINK
        assert error.completed == []
        assert (dest / "Downloads" / "iso" / "distro.iso").exists()
        assert f"ln -s '{dest / 'Downloads'}' '{home / 'Downloads'}'" in str(error)
        assert (home / "Music").is_dir()

    def test_source_removal_failure_reports_finish_commands(
        self, engine: RelocationEngine, home: Path, tmp_path: Path
    ) -> None:
        """A copied tree whose source cannot be deleted says how to finish by hand."""
        real_rename = os.rename

        def fake_rename(src: object, dst: object) -> None:
            if Path(str(src)).parent == home:
                raise OSError(errno.EXDEV, "Invalid cross-device link")
            real_rename(src, dst)  # type: ignore[arg-type]

        dest = tmp_path / "ext"
        with (
            patch("ovlspace.relocation.engine.os.rename", side_effect=fake_rename),
            patch(
                "ovlspace.relocation.engine.shutil.rmtree",
                side_effect=PermissionError(errno.EACCES, "Permission denied"),
            ),
            pytest.raises(RelocationError) as exc_info,
        ):
            engine.relocate(dest)

        error = exc_info.value
        source = home / "Downloads"
        target = dest / "Downloads"
        assert error.stage is RelocationStage.REMOVE_SOURCE
        assert error.completed == []
        assert (target / "iso" / "distro.iso").exists()
        assert not source.is_symlink()
        assert str(error).startswith("Removing source failed:")
        assert f"rm -rf '{source}' && ln -s '{target}' '{source}'" in str(error)


class TestPrepareDestination:
    """Tests for destination root validation."""

    def test_creates_missing_parents(self, tmp_path: Path) -> None:
        """A missing destination is created with its parents."""
        root = RelocationEngine([]).prepare_destination(tmp_path / "a" / "b")

        assert root.is_dir()
        assert root.is_absolute()

    @pytest.mark.parametrize("empty", ["", "   "])
    def test_empty_destination(self, empty: str) -> None:
        """Empty destinations are refused."""
        with pytest.raises(DestinationError, match="Empty destination"):
            RelocationEngine([]).prepare_destination(empty)

    def test_file_destination(self, tmp_path: Path) -> None:
        """An existing regular file is not a usable destination."""
        target = tmp_path / "file"
        target.write_text("x")

        with pytest.raises(DestinationError, match="not a directory"):
            RelocationEngine([]).prepare_destination(target)

    def test_uncreatable_destination(self, tmp_path: Path) -> None:
        """A destination below a regular file cannot be created."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(DestinationError):
            RelocationEngine([]).prepare_destination(blocker / "sub")

    def test_destination_error_moves_nothing(self, engine: RelocationEngine, home: Path) -> None:
        """No source is touched when the destination is rejected."""
        with pytest.raises(DestinationError):
            engine.relocate("")

        assert not (home / "Downloads").is_symlink()

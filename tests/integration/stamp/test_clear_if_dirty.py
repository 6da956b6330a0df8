"""Integration tests for clear_if_dirty against a real filesystem."""

import logging
import os
import time
from pathlib import Path

import pytest

from buildstamp.builder import Builder
from buildstamp.config import BuildConfig
from buildstamp.stamp import BuildEnvironmentError, BuildStamp, clear_if_dirty

SECOND_NS = 1_000_000_000


def set_mtime(path: Path, mtime_ns: int) -> None:
    """Set both access and modification time of path."""
    os.utime(path, ns=(mtime_ns, mtime_ns))


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """Create an input file last modified well in the past."""
    path = tmp_path / "src" / "lib.rs"
    path.parent.mkdir()
    path.write_text("pub fn answer() -> u32 { 42 }")
    set_mtime(path, time.time_ns() - 1000 * SECOND_NS)
    return path


@pytest.mark.integration
class TestClearIfDirty:
    """Tests for clear_if_dirty."""

    def test_missing_directory_is_created_and_stamped(
        self, tmp_path: Path, input_file: Path, sink
    ) -> None:
        out = tmp_path / "out"

        cleared = clear_if_dirty(sink, out, input_file)

        assert cleared is True
        assert out.is_dir()
        assert (out / ".stamp").read_bytes() == b""

    def test_directory_without_stamp_is_wiped(
        self, tmp_path: Path, input_file: Path, sink
    ) -> None:
        out = tmp_path / "out"
        (out / "deps").mkdir(parents=True)
        (out / "deps" / "libfoo.rlib").write_text("stale")

        cleared = clear_if_dirty(sink, out, input_file)

        assert cleared is True
        assert not (out / "deps").exists()
        assert (out / ".stamp").exists()

    def test_second_call_is_fresh(self, tmp_path: Path, input_file: Path, sink) -> None:
        out = tmp_path / "out"
        clear_if_dirty(sink, out, input_file)
        (out / "artifact").write_text("kept")

        cleared = clear_if_dirty(sink, out, input_file)

        assert cleared is False
        assert (out / "artifact").read_text() == "kept"

    def test_fresh_stamp_left_untouched(self, tmp_path: Path, input_file: Path, sink) -> None:
        out = tmp_path / "out"
        out.mkdir()
        stamp = out / ".stamp"
        stamp.write_text("recorded")
        fresh = time.time_ns() - 10 * SECOND_NS
        set_mtime(stamp, fresh)

        assert clear_if_dirty(sink, out, input_file) is False
        assert stamp.read_text() == "recorded"
        assert stamp.stat().st_mtime_ns == fresh

    def test_newer_input_clears(self, tmp_path: Path, input_file: Path, sink) -> None:
        out = tmp_path / "out"
        clear_if_dirty(sink, out, input_file)
        (out / "artifact").write_text("old")
        set_mtime(out / ".stamp", time.time_ns() - 500 * SECOND_NS)
        set_mtime(input_file, time.time_ns() - 100 * SECOND_NS)

        cleared = clear_if_dirty(sink, out, input_file)

        assert cleared is True
        assert not (out / "artifact").exists()
        assert (out / ".stamp").exists()

    def test_touch_input_scenario(self, tmp_path: Path, input_file: Path, sink) -> None:
        """First call clears, touching the input clears again, then it settles."""
        out = tmp_path / "out"

        assert clear_if_dirty(sink, out, input_file) is True
        assert (out / ".stamp").exists()

        set_mtime(out / ".stamp", time.time_ns() - 500 * SECOND_NS)
        set_mtime(input_file, time.time_ns() - 100 * SECOND_NS)
        assert clear_if_dirty(sink, out, input_file) is True

        assert clear_if_dirty(sink, out, input_file) is False

    def test_equal_mtimes_are_fresh(self, tmp_path: Path, input_file: Path, sink) -> None:
        out = tmp_path / "out"
        out.mkdir()
        (out / ".stamp").write_text("")
        set_mtime(out / ".stamp", input_file.stat().st_mtime_ns)

        assert clear_if_dirty(sink, out, input_file) is False

    def test_missing_input_with_stamp_is_fresh(self, tmp_path: Path, sink) -> None:
        out = tmp_path / "out"
        out.mkdir()
        (out / ".stamp").write_text("")

        assert clear_if_dirty(sink, out, tmp_path / "missing.rs") is False

    def test_missing_input_and_stamp_restamps(self, tmp_path: Path, sink) -> None:
        """Nothing is dirty, but the directory and stamp are still ensured."""
        out = tmp_path / "out"
        (out / "artifact").parent.mkdir()
        (out / "artifact").write_text("kept")

        cleared = clear_if_dirty(sink, out, tmp_path / "missing.rs")

        assert cleared is False
        assert (out / "artifact").exists()
        assert (out / ".stamp").exists()

    def test_stamp_content_is_reset(self, tmp_path: Path, input_file: Path, sink) -> None:
        out = tmp_path / "out"
        out.mkdir()
        BuildStamp.from_dir(out).with_content("old state").write()
        set_mtime(out / ".stamp", time.time_ns() - 2000 * SECOND_NS)

        clear_if_dirty(sink, out, input_file)

        assert (out / ".stamp").read_bytes() == b""

    def test_dirty_notice(self, tmp_path: Path, input_file: Path, sink) -> None:
        out = tmp_path / "out"

        clear_if_dirty(sink, out, input_file)

        assert sink.messages == [f"Dirty - {out}"]

    def test_no_notice_when_fresh(self, tmp_path: Path, input_file: Path, sink) -> None:
        out = tmp_path / "out"
        clear_if_dirty(sink, out, input_file)
        sink.messages.clear()

        clear_if_dirty(sink, out, input_file)

        assert sink.messages == []

    def test_prefixed_stamps_ignored(self, tmp_path: Path, input_file: Path, sink) -> None:
        """Only the default '.stamp' drives invalidation."""
        out = tmp_path / "out"
        out.mkdir()
        BuildStamp.from_dir(out).with_prefix("libstd").write()

        assert clear_if_dirty(sink, out, input_file) is True
        assert not (out / ".libstd-stamp").exists()

    def test_uncreatable_directory_raises(self, tmp_path: Path, input_file: Path, sink) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(BuildEnvironmentError, match="failed to restamp"):
            clear_if_dirty(sink, blocker / "out", input_file)

    def test_symlinked_directory_is_replaced(
        self, tmp_path: Path, input_file: Path, sink
    ) -> None:
        """A dirty symlinked directory is unlinked and recreated empty."""
        real = tmp_path / "real"
        real.mkdir()
        (real / "stale.rlib").write_text("stale")
        out = tmp_path / "out"
        out.symlink_to(real, target_is_directory=True)

        cleared = clear_if_dirty(sink, out, input_file)

        assert cleared is True
        assert not out.is_symlink()
        assert out.is_dir()
        assert not (out / "stale.rlib").exists()
        assert (out / ".stamp").exists()
        # The link target is left alone
        assert (real / "stale.rlib").exists()

    def test_with_builder(
        self, tmp_path: Path, input_file: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        builder = Builder(BuildConfig(verbose=True, root_path=tmp_path))
        out = tmp_path / "out"

        with caplog.at_level(logging.INFO, logger="buildstamp.builder"):
            cleared = clear_if_dirty(builder, out, input_file)

        assert cleared is True
        assert f"Dirty - {out}" in caplog.text

    def test_with_quiet_builder(
        self, tmp_path: Path, input_file: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        builder = Builder(BuildConfig(root_path=tmp_path))

        with caplog.at_level(logging.INFO, logger="buildstamp.builder"):
            clear_if_dirty(builder, tmp_path / "out", input_file)

        assert "Dirty - " not in caplog.text

"""
Tests for the directory walker: depth limit, hidden entries, exclude patterns,
symlinks and error recording.
"""
import os
import sys
from unittest import mock
import pytest
from diranalyzer.core.models import ErrorType
from diranalyzer.core.scanner import DirectoryWalkerImpl


def _paths(result):
    return sorted(os.path.relpath(f.path, result.root) for f in result.files)


class TestBasicScan:

    def test_reference_tree(self, sample_tree):
        root = sample_tree["root"]
        result = DirectoryWalkerImpl(str(root)).scan()

        assert _paths(result) == sorted([
            os.path.join("a", "x.bin"), os.path.join("a", "y.bin"),
            os.path.join("b", "z.bin"), os.path.join("a", "b", "w.bin"),
        ])
        assert set(result.directories) == {
            str(root), str(root / "a"), str(root / "b"), str(root / "a" / "b")}
        assert result.total_size == 35
        assert result.errors == []

    def test_records_carry_metadata(self, sample_tree):
        result = DirectoryWalkerImpl(str(sample_tree["root"])).scan()
        record = next(f for f in result.files if f.path == str(sample_tree["w"]))
        assert record.size == 5
        assert record.depth == 3
        assert record.modified is not None
        assert not record.is_symlink

    def test_directory_depths(self, sample_tree):
        root = sample_tree["root"]
        result = DirectoryWalkerImpl(str(root)).scan()
        assert result.directories[str(root)].depth == 0
        assert result.directories[str(root / "a")].depth == 1
        assert result.directories[str(root / "a" / "b")].depth == 2

    def test_directory_records_start_empty(self, sample_tree):
        result = DirectoryWalkerImpl(str(sample_tree["root"])).scan()
        assert all(d.total_size == 0 and d.file_count == 0 for d in result.directories.values())

    def test_missing_root(self, temp_dir):
        with pytest.raises(RuntimeError, match="does not exist"):
            DirectoryWalkerImpl(str(temp_dir / "nope")).scan()

    def test_root_is_a_file(self, temp_dir):
        path = temp_dir / "file"
        path.write_text("x")
        with pytest.raises(RuntimeError, match="Not a directory"):
            DirectoryWalkerImpl(str(path)).scan()

    def test_progress_callback(self, sample_tree):
        callback = mock.Mock()
        DirectoryWalkerImpl(str(sample_tree["root"])).scan(progress_callback=callback)
        callback.assert_called_with("Scanning", 4, None)


class TestDepthLimit:

    def test_depth_one_keeps_only_root_files(self, sample_tree):
        (sample_tree["root"] / "top.txt").write_text("t")
        result = DirectoryWalkerImpl(str(sample_tree["root"]), max_depth=1).scan()

        assert _paths(result) == ["top.txt"]
        # Children of the root are recorded but not entered
        assert str(sample_tree["root"] / "a") in result.directories
        assert str(sample_tree["root"] / "a" / "b") not in result.directories

    def test_depth_two(self, sample_tree):
        result = DirectoryWalkerImpl(str(sample_tree["root"]), max_depth=2).scan()
        assert os.path.join("a", "b", "w.bin") not in _paths(result)
        assert os.path.join("a", "x.bin") in _paths(result)

    def test_depth_zero_records_only_root(self, sample_tree):
        result = DirectoryWalkerImpl(str(sample_tree["root"]), max_depth=0).scan()
        assert result.files == []
        assert list(result.directories) == [str(sample_tree["root"])]

    def test_negative_depth(self, temp_dir):
        with pytest.raises(ValueError):
            DirectoryWalkerImpl(str(temp_dir), max_depth=-1)


class TestFiltering:

    def test_hidden_entries_skipped_by_default(self, temp_dir):
        (temp_dir / ".hidden").write_text("h")
        (temp_dir / ".git").mkdir()
        (temp_dir / ".git" / "config").write_text("c")
        (temp_dir / "visible").write_text("v")

        result = DirectoryWalkerImpl(str(temp_dir)).scan()

        assert _paths(result) == ["visible"]
        assert str(temp_dir / ".git") not in result.directories

    def test_hidden_entries_included_on_request(self, temp_dir):
        (temp_dir / ".hidden").write_text("h")
        (temp_dir / ".git").mkdir()
        (temp_dir / ".git" / "config").write_text("c")

        result = DirectoryWalkerImpl(str(temp_dir), show_hidden=True).scan()

        assert _paths(result) == sorted([".hidden", os.path.join(".git", "config")])

    def test_exclude_pattern_matches_files(self, temp_dir):
        (temp_dir / "keep.txt").write_text("k")
        (temp_dir / "debug.log").write_text("d")
        result = DirectoryWalkerImpl(str(temp_dir), exclude_patterns=[r"\.log$"]).scan()
        assert _paths(result) == ["keep.txt"]

    def test_exclude_pattern_prunes_directory(self, temp_dir):
        (temp_dir / "node_modules" / "pkg").mkdir(parents=True)
        (temp_dir / "node_modules" / "pkg" / "index.js").write_text("x")
        (temp_dir / "src").mkdir()
        (temp_dir / "src" / "main.js").write_text("y")

        result = DirectoryWalkerImpl(str(temp_dir), exclude_patterns=["node_modules"]).scan()

        assert _paths(result) == [os.path.join("src", "main.js")]
        assert not any("node_modules" in d for d in result.directories)

    def test_malformed_pattern(self, temp_dir):
        with pytest.raises(ValueError, match="Failed to compile exclude pattern"):
            DirectoryWalkerImpl(str(temp_dir), exclude_patterns=["(unclosed"])


@pytest.mark.skipif(not hasattr(os, "symlink") or sys.platform == "win32", reason="POSIX symlinks required")
class TestSymlinks:

    def test_symlinks_skipped_by_default(self, temp_dir):
        (temp_dir / "real").mkdir()
        (temp_dir / "real" / "f.txt").write_text("data")
        os.symlink(temp_dir / "real" / "f.txt", temp_dir / "link.txt")
        os.symlink(temp_dir / "real", temp_dir / "linkdir")

        result = DirectoryWalkerImpl(str(temp_dir)).scan()

        assert _paths(result) == [os.path.join("real", "f.txt")]
        assert str(temp_dir / "linkdir") not in result.directories

    def test_symlinked_files_flagged_when_following(self, temp_dir):
        (temp_dir / "f.txt").write_text("data")
        os.symlink(temp_dir / "f.txt", temp_dir / "link.txt")

        result = DirectoryWalkerImpl(str(temp_dir), follow_symlinks=True).scan()

        flags = {os.path.basename(f.path): f.is_symlink for f in result.files}
        assert flags == {"f.txt": False, "link.txt": True}

    def test_directory_cycle_is_not_followed_forever(self, temp_dir):
        (temp_dir / "sub").mkdir()
        (temp_dir / "sub" / "f.txt").write_text("data")
        os.symlink(temp_dir, temp_dir / "sub" / "back")

        result = DirectoryWalkerImpl(str(temp_dir), follow_symlinks=True, max_depth=50).scan()

        assert _paths(result) == [os.path.join("sub", "f.txt")]

    def test_broken_symlink_recorded_as_error(self, temp_dir):
        os.symlink(temp_dir / "missing", temp_dir / "dangling")

        result = DirectoryWalkerImpl(str(temp_dir), follow_symlinks=True).scan()

        assert result.files == []
        assert len(result.errors) == 1
        assert result.errors[0].error_type == ErrorType.FILE_NOT_FOUND


class TestErrors:

    def test_stat_failure_is_recorded(self, temp_dir):
        (temp_dir / "ok").write_text("1")
        (temp_dir / "bad").write_text("2")
        real_stat = os.stat

        def fake_stat(path, *args, **kwargs):
            if str(path).endswith(os.sep + "bad"):
                raise PermissionError(13, "Permission denied", str(path))
            return real_stat(path, *args, **kwargs)

        with mock.patch("diranalyzer.core.scanner.os.stat", side_effect=fake_stat):
            result = DirectoryWalkerImpl(str(temp_dir)).scan()

        assert _paths(result) == ["ok"]
        assert [e.error_type for e in result.errors] == [ErrorType.PERMISSION_DENIED]
        assert result.errors[0].path.endswith("bad")

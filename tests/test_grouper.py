"""
Tests for candidate filtering, size buckets and digest grouping.
"""
import os
from diranalyzer.core.grouper import FileGrouperImpl
from diranalyzer.core.models import FileRecord


def _file(path, size, is_symlink=False):
    return FileRecord(path=path, size=size, is_symlink=is_symlink)


class TestFilterCandidates:

    def test_min_size_is_inclusive(self):
        files = [_file("/r/small", 99), _file("/r/exact", 100), _file("/r/big", 101)]
        result = FileGrouperImpl.filter_candidates(files, 100)
        assert [f.path for f in result] == ["/r/exact", "/r/big"]

    def test_symlinks_are_never_candidates(self):
        files = [_file("/r/real", 10), _file("/r/link", 10, is_symlink=True)]
        result = FileGrouperImpl.filter_candidates(files, 0)
        assert [f.path for f in result] == ["/r/real"]

    def test_repeated_path_counted_once(self):
        """The same file listed twice must not pair up with itself."""
        files = [_file("/r/a", 10), _file("/r/a", 10)]
        assert len(FileGrouperImpl.filter_candidates(files, 0)) == 1


class TestSizeBuckets:

    def test_unique_sizes_are_dropped(self):
        grouper = FileGrouperImpl()
        files = [_file("/r/a", 10), _file("/r/b", 20), _file("/r/c", 10)]
        groups = grouper.group_by_size(files)
        assert list(groups) == [10]
        assert [f.path for f in groups[10]] == ["/r/a", "/r/c"]

    def test_survivors_keep_input_order(self):
        grouper = FileGrouperImpl()
        files = [_file("/r/c", 5), _file("/r/x", 7), _file("/r/a", 5), _file("/r/b", 7), _file("/r/u", 9)]
        survivors = grouper.size_bucket_survivors(files)
        assert [f.path for f in survivors] == ["/r/c", "/r/x", "/r/a", "/r/b"]

    def test_empty_input(self):
        assert FileGrouperImpl().size_bucket_survivors([]) == []


class TestBuildDuplicateGroups:

    def test_singletons_are_discarded(self):
        groups = FileGrouperImpl.build_duplicate_groups(
            {"d1": ["/r/a"], "d2": ["/r/b", "/r/c"]},
            {"/r/a": 1, "/r/b": 2, "/r/c": 2},
        )
        assert len(groups) == 1
        assert groups[0].digest == "d2"
        assert groups[0].size == 2

    def test_sorted_by_wasted_space_descending(self):
        digest_map = {
            "small": ["/r/s1", "/r/s2"],
            "big": ["/r/b1", "/r/b2"],
            "many": ["/r/m1", "/r/m2", "/r/m3", "/r/m4"],
        }
        sizes = {"/r/s1": 10, "/r/s2": 10, "/r/b1": 100, "/r/b2": 100,
                 "/r/m1": 40, "/r/m2": 40, "/r/m3": 40, "/r/m4": 40}

        groups = FileGrouperImpl.build_duplicate_groups(digest_map, sizes)

        assert [g.digest for g in groups] == ["many", "big", "small"]
        assert [g.wasted_space for g in groups] == [120, 100, 10]

    def test_ties_keep_digest_map_order(self):
        digest_map = {"first": ["/r/a", "/r/b"], "second": ["/r/c", "/r/d"]}
        sizes = {p: 5 for p in ["/r/a", "/r/b", "/r/c", "/r/d"]}
        groups = FileGrouperImpl.build_duplicate_groups(digest_map, sizes)
        assert [g.digest for g in groups] == ["first", "second"]

    def test_members_sorted_shallowest_first(self):
        deep = os.path.join(os.sep, "r", "a", "b", "copy")
        shallow = os.path.join(os.sep, "r", "z")
        groups = FileGrouperImpl.build_duplicate_groups({"d": [deep, shallow]}, {deep: 3, shallow: 3})
        assert groups[0].files == (shallow, deep)

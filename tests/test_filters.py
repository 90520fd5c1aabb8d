"""Tests for filename predicates and entry selection."""

import pytest

from spatch.diff.metadata import classify_entry
from spatch.diff.models import FileMetadata, FileStatus
from spatch.diff.segmenter import segment
from spatch.split.filters import (
    EntryFilter,
    FilterCompileError,
    NameFilter,
    Selection,
    build_name_filter,
)


class TestNameFilter:
    def test_glob_full_path_and_basename(self):
        f = NameFilter.from_glob("*.c")
        assert f.matches("foo.c")
        assert f.matches("src/deep/foo.c")
        assert not f.matches("foo.h")

    def test_glob_with_directory(self):
        f = NameFilter.from_glob("src/*.py")
        assert f.matches("src/a.py")
        assert not f.matches("tests/a.py")

    def test_regex_searches(self):
        f = NameFilter.from_regex(r"^docs/")
        assert f.matches("docs/index.md")
        assert not f.matches("src/docs/x")

    def test_invalid_regex(self):
        with pytest.raises(FilterCompileError):
            NameFilter.from_regex("(unclosed")

    def test_empty_glob(self):
        with pytest.raises(FilterCompileError):
            NameFilter.from_glob("")

    def test_build_exclusive(self):
        with pytest.raises(FilterCompileError):
            build_name_filter("*.c", "x")
        assert build_name_filter() is None
        assert build_name_filter(glob="*.c").matches("a.c")


class TestEntryFilter:
    def test_deleted_falls_back_to_old_path(self, sample_diff_deleted):
        meta = classify_entry(segment(sample_diff_deleted)[0])
        assert EntryFilter(name_filter=NameFilter.from_glob("*.c")).accepts(meta)

    def test_selection(self, sample_diff_new_file, sample_diff_deleted, sample_diff_two_modified):
        new = classify_entry(segment(sample_diff_new_file)[0])
        gone = classify_entry(segment(sample_diff_deleted)[0])
        changed = classify_entry(segment(sample_diff_two_modified)[0])

        only_new = EntryFilter(selection=Selection.NEW)
        assert [only_new.accepts(m) for m in (new, gone, changed)] == [True, False, False]
        only_removed = EntryFilter(selection=Selection.REMOVED)
        assert [only_removed.accepts(m) for m in (new, gone, changed)] == [False, True, False]
        assert all(EntryFilter().accepts(m) for m in (new, gone, changed))

    def test_binary_new_file_counts_as_new(self):
        meta = FileMetadata(old_path=None, new_path="x.png", status=FileStatus.BINARY)
        assert EntryFilter(selection=Selection.NEW).accepts(meta)

    def test_filtering_keeps_order_and_is_idempotent(self):
        metas = [
            FileMetadata(old_path=p, new_path=p) for p in ("a.c", "b.h", "c.c", "d.txt", "e.c")
        ]
        f = EntryFilter(name_filter=NameFilter.from_glob("*.c"))
        once = [m for m in metas if f.accepts(m)]
        twice = [m for m in once if f.accepts(m)]
        assert [m.path for m in once] == ["a.c", "c.c", "e.c"]
        assert once == twice

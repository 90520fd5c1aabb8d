"""Entry selection — filename predicates and added/removed selection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatch, translate
from pathlib import PurePosixPath
from typing import Callable, Optional

from spatch.diff.models import FileMetadata


class FilterCompileError(ValueError):
    """Raised when a glob or regex filter cannot be compiled."""


class NameFilter:
    """Boolean predicate over a file path.

    Build one with :meth:`from_glob` or :meth:`from_regex`; callers only
    ever use :meth:`matches`.
    """

    def __init__(self, predicate: Callable[[str], bool], description: str) -> None:
        self._predicate = predicate
        self.description = description

    @classmethod
    def from_glob(cls, pattern: str) -> "NameFilter":
        """Glob matched against the full path or its basename."""
        if not pattern:
            raise FilterCompileError("empty glob pattern")
        try:
            re.compile(translate(pattern))
        except re.error as exc:
            raise FilterCompileError(f"invalid glob {pattern!r}: {exc}") from exc

        def predicate(path: str) -> bool:
            return fnmatch(path, pattern) or fnmatch(PurePosixPath(path).name, pattern)

        return cls(predicate, f"glob {pattern}")

    @classmethod
    def from_regex(cls, pattern: str) -> "NameFilter":
        """Regex searched anywhere in the path."""
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise FilterCompileError(f"invalid regex {pattern!r}: {exc}") from exc
        return cls(lambda path: compiled.search(path) is not None, f"regex {pattern}")

    def matches(self, path: str) -> bool:
        return self._predicate(path)

    def __repr__(self) -> str:
        return f"NameFilter({self.description})"


def build_name_filter(glob: str = "", regex: str = "") -> Optional[NameFilter]:
    """Return a NameFilter for whichever of *glob* / *regex* is set."""
    if glob and regex:
        raise FilterCompileError("--glob and --regex are mutually exclusive")
    if glob:
        return NameFilter.from_glob(glob)
    if regex:
        return NameFilter.from_regex(regex)
    return None


class Selection(str, Enum):
    ALL = "all"
    NEW = "new"
    REMOVED = "removed"


@dataclass(frozen=True)
class EntryFilter:
    """Decides which classified entries are emitted."""

    name_filter: Optional[NameFilter] = None
    selection: Selection = Selection.ALL

    def accepts(self, metadata: FileMetadata) -> bool:
        if self.selection == Selection.NEW and not metadata.is_new:
            return False
        if self.selection == Selection.REMOVED and not metadata.is_removed:
            return False
        if self.name_filter is None:
            return True
        # deletions have no new name; match the old one instead
        return self.name_filter.matches(metadata.path)

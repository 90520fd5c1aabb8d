"""Data models for parsed patches."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

DEV_NULL = "/dev/null"


class LineKind(str, Enum):
    ENTRY_BOUNDARY = "entry_boundary"
    OLD_FILE = "old_file"
    NEW_FILE = "new_file"
    RENAME_FROM = "rename_from"
    RENAME_TO = "rename_to"
    NEW_FILE_MODE = "new_file_mode"
    DELETED_FILE_MODE = "deleted_file_mode"
    INDEX = "index"
    HUNK_HEADER = "hunk_header"
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"
    BINARY = "binary"
    OTHER = "other"


BODY_KINDS = (LineKind.ADDED, LineKind.REMOVED, LineKind.CONTEXT)


class FileStatus(str, Enum):
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"
    BINARY = "binary"


@dataclass(frozen=True, slots=True)
class RawLine:
    """One input line, newline stripped, with its 1-based position."""

    line_no: int
    text: str


@dataclass(frozen=True, slots=True)
class HunkLine:
    """A body line of a hunk.

    ``text`` is the content without its one-character prefix. ``raw`` is the
    line exactly as it appeared (an empty context line stays empty).
    ``eol_marker`` holds the ``\\ No newline at end of file`` line that
    followed it, if any.
    """

    kind: LineKind
    text: str
    raw: str
    line_no: int = 0
    eol_marker: Optional[str] = None

    @property
    def has_newline(self) -> bool:
        return self.eol_marker is None


@dataclass(frozen=True)
class Hunk:
    """One ``@@ ... @@`` change block."""

    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: Tuple[HunkLine, ...] = ()

    def render(self) -> List[str]:
        out = [self.header]
        for line in self.lines:
            out.append(line.raw)
            if line.eol_marker is not None:
                out.append(line.eol_marker)
        return out


@dataclass(frozen=True)
class PatchEntry:
    """One file's worth of a diff."""

    header_lines: Tuple[str, ...]
    hunks: Tuple[Hunk, ...] = ()
    index: int = 0
    line_no: int = 0

    def render_lines(self) -> List[str]:
        out = list(self.header_lines)
        for hunk in self.hunks:
            out.extend(hunk.render())
        return out

    @property
    def text(self) -> str:
        """Original text of the entry, newline-terminated."""
        return "".join(f"{line}\n" for line in self.render_lines())

    def to_bytes(self) -> bytes:
        return self.text.encode("utf-8", "surrogateescape")


@dataclass(frozen=True)
class FileMetadata:
    """Paths and status derived from an entry's header lines.

    A path of ``None`` means the file does not exist on that side.
    """

    old_path: Optional[str]
    new_path: Optional[str]
    status: FileStatus = FileStatus.MODIFIED

    @property
    def path(self) -> str:
        """The new path, or the old one for deletions."""
        if self.new_path is not None:
            return self.new_path
        if self.old_path is not None:
            return self.old_path
        raise ValueError("file metadata has neither an old nor a new path")

    @property
    def is_new(self) -> bool:
        return self.old_path is None

    @property
    def is_removed(self) -> bool:
        return self.new_path is None

    @property
    def is_binary(self) -> bool:
        return self.status == FileStatus.BINARY


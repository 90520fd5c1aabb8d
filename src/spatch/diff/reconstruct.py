"""Content reconstructor — rebuilds whole files from added/deleted entries."""

from __future__ import annotations

from enum import Enum
from typing import List

from spatch.diff.errors import MalformedPatch
from spatch.diff.models import FileMetadata, LineKind, PatchEntry


class Side(str, Enum):
    NEW = "new"  # replay added + context lines (newly added files)
    OLD = "old"  # replay removed + context lines (deleted files)


def reconstruct(
    entry: PatchEntry,
    metadata: FileMetadata,
    side: Side = Side.NEW,
) -> bytes:
    """Return the exact bytes of the file an entry adds (or deletes).

    Every kept line is followed by ``\\n`` unless a "no newline at end of
    file" marker followed it in the entry. A line of the opposite kind is
    contradictory for a file that has no version on that side and raises
    MalformedPatch.
    """
    if metadata.is_binary:
        raise ValueError(f"cannot reconstruct binary entry {metadata.path}")
    if side == Side.NEW:
        if not metadata.is_new:
            raise ValueError(f"{metadata.path} is not a newly added file")
        forbidden, what = LineKind.REMOVED, "removed line in a newly added file"
    else:
        if not metadata.is_removed:
            raise ValueError(f"{metadata.path} is not a deleted file")
        forbidden, what = LineKind.ADDED, "added line in a deleted file"

    parts: List[str] = []
    for hunk in entry.hunks:
        for line in hunk.lines:
            if line.kind == forbidden:
                raise MalformedPatch(
                    f"{what}: {metadata.path}",
                    line_no=line.line_no,
                    entry_index=entry.index,
                )
            parts.append(line.text)
            if line.has_newline:
                parts.append("\n")
    return "".join(parts).encode("utf-8", "surrogateescape")

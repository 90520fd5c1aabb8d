"""Line classifier — tags the fixed set of unified diff line markers.

Pure functions, no state. Anything unrecognised is ``LineKind.OTHER``.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from spatch.diff.models import LineKind

GIT_DIFF_PREFIX = "diff --git "

_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$"
)
_BINARY_RE = re.compile(r"^Binary files (.+) and (.+) differ$")
_NO_NEWLINE = "\\ No newline at end of file"

# Checked in order; the first matching prefix wins.
_HEADER_PREFIXES = (
    (GIT_DIFF_PREFIX, LineKind.ENTRY_BOUNDARY),
    ("--- ", LineKind.OLD_FILE),
    ("+++ ", LineKind.NEW_FILE),
    ("rename from ", LineKind.RENAME_FROM),
    ("rename to ", LineKind.RENAME_TO),
    ("new file mode ", LineKind.NEW_FILE_MODE),
    ("deleted file mode ", LineKind.DELETED_FILE_MODE),
    ("index ", LineKind.INDEX),
    ("GIT binary patch", LineKind.BINARY),
)


class HunkRange(NamedTuple):
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    section: str


def parse_hunk_header(line: str) -> Optional[HunkRange]:
    """Parse ``@@ -S[,C] +S[,C] @@ section``; a missing count means 1."""
    m = _HUNK_HEADER_RE.match(line)
    if m is None:
        return None
    old_count = int(m.group(2)) if m.group(2) is not None else 1
    new_count = int(m.group(4)) if m.group(4) is not None else 1
    return HunkRange(
        int(m.group(1)), old_count, int(m.group(3)), new_count, m.group(5).strip()
    )


def parse_binary_line(line: str) -> Optional[tuple[str, str]]:
    """Return the two raw paths of a ``Binary files X and Y differ`` line."""
    m = _BINARY_RE.match(line)
    if m is None:
        return None
    return m.group(1), m.group(2)


def is_no_newline_marker(line: str) -> bool:
    """True for ``\\ No newline at end of file`` (and localised variants)."""
    return line.startswith("\\")


def classify(line: str, *, in_hunk: bool = False) -> LineKind:
    """Return the tag of *line*.

    Content tags (added/removed/context) are only produced when *in_hunk* is
    set, so ``--- a/x`` and ``+++ b/x`` headers can never be taken for body
    lines.
    """
    if in_hunk:
        if line.startswith("+"):
            return LineKind.ADDED
        if line.startswith("-"):
            return LineKind.REMOVED
        if line.startswith(" ") or line == "":
            # blank context lines lose their space in some editors
            return LineKind.CONTEXT
        return LineKind.OTHER

    if line == _NO_NEWLINE:
        return LineKind.OTHER
    if line.startswith("@@"):
        return LineKind.HUNK_HEADER if parse_hunk_header(line) else LineKind.OTHER
    for prefix, kind in _HEADER_PREFIXES:
        if line.startswith(prefix):
            return kind
    if _BINARY_RE.match(line):
        return LineKind.BINARY
    return LineKind.OTHER

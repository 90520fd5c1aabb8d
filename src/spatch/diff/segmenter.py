"""Patch segmenter — groups a stream of diff lines into per-file entries.

Hunk bodies are delimited by the line counts of their ``@@`` header, so
removed lines that look like file markers (``--- x``) or a mail signature
(``-- ``) are never mistaken for structure. Text between entries — mail
headers, commit messages, diffstat, footers — is skipped.
"""

from __future__ import annotations

import dataclasses
import re
from collections import deque
from typing import Deque, Generator, Iterable, Iterator, List, Optional

from spatch.diff.classifier import (
    GIT_DIFF_PREFIX,
    classify,
    is_no_newline_marker,
    parse_hunk_header,
)
from spatch.diff.errors import MalformedPatch
from spatch.diff.models import Hunk, HunkLine, LineKind, PatchEntry, RawLine

_MAIL_SIGNATURE = "-- "

# git extended header lines that may sit between `diff --git` and the first hunk
_EXTENDED_HEADER_PREFIXES = (
    "old mode ",
    "new mode ",
    "new file mode ",
    "deleted file mode ",
    "similarity index ",
    "dissimilarity index ",
    "rename from ",
    "rename to ",
    "copy from ",
    "copy to ",
    "index ",
    "Binary files ",
    "GIT binary patch",
)
_BINARY_HUNK_RE = re.compile(r"^(?:literal|delta) \d+$")
_BASE85_LINE_RE = re.compile(r"^[A-Za-z][0-9A-Za-z!#$%&()*+;<=>?@^_`{|}~-]+$")


def iter_lines(text: str) -> Iterator[RawLine]:
    """Yield the lines of *text* lazily, newline stripped, numbered from 1."""
    start = 0
    line_no = 0
    size = len(text)
    while start < size:
        end = text.find("\n", start)
        if end == -1:
            end = size
        line_no += 1
        yield RawLine(line_no, text[start:end])
        start = end + 1


class _Cursor:
    """Forward-only reader over RawLine values with bounded look-ahead."""

    def __init__(self, lines: Iterable[RawLine]) -> None:
        self._source = iter(lines)
        self._ahead: Deque[RawLine] = deque()

    def peek(self, offset: int = 0) -> Optional[RawLine]:
        while len(self._ahead) <= offset:
            nxt = next(self._source, None)
            if nxt is None:
                return None
            self._ahead.append(nxt)
        return self._ahead[offset]

    def advance(self) -> RawLine:
        """Consume the current line. Callers peek first; running dry is a bug."""
        self.peek()
        return self._ahead.popleft()


class PatchSegmenter:
    """Split unified diff text into PatchEntry values.

    Usage::

        for entry in PatchSegmenter(text).parse():
            ...

    Entries are yielded as soon as they are closed, so a ``MalformedPatch``
    raised late in the input does not affect entries already consumed.
    """

    def __init__(self, text: str) -> None:
        self._text = text

    def parse(self) -> Generator[PatchEntry, None, None]:
        cursor = _Cursor(iter_lines(self._text))
        index = 0
        while True:
            first = self._skip_to_boundary(cursor, index)
            if first is None:
                return
            yield self._read_entry(cursor, first, index)
            index += 1

    # ---- boundaries ----

    @staticmethod
    def _is_plain_pair(cursor: _Cursor) -> bool:
        """``--- x`` directly followed by ``+++ y`` (plain unified diff)."""
        line = cursor.peek()
        nxt = cursor.peek(1)
        return (
            line is not None
            and nxt is not None
            and line.text.startswith("--- ")
            and nxt.text.startswith("+++ ")
        )

    def _skip_to_boundary(self, cursor: _Cursor, index: int) -> Optional[RawLine]:
        while True:
            line = cursor.peek()
            if line is None:
                return None
            text = line.text
            if text.startswith(GIT_DIFF_PREFIX) or self._is_plain_pair(cursor):
                _check_structural(line, index)
                return cursor.advance()
            if text.startswith("@@") or (
                text.startswith("+") and not text.startswith("+++ ")
            ):
                where = (
                    "before any file header" if index == 0 else "outside of a file entry"
                )
                raise MalformedPatch(
                    f"diff content {where}: {text[:60]!r}",
                    line_no=line.line_no,
                    entry_index=index,
                )
            cursor.advance()

    # ---- entries ----

    def _read_entry(self, cursor: _Cursor, first: RawLine, index: int) -> PatchEntry:
        header: List[str] = [first.text]
        has_old_marker = first.text.startswith("--- ")
        has_new_marker = False
        in_binary_patch = False
        hunks: List[Hunk] = []

        # Extended header lines and file markers up to the first hunk
        while True:
            line = cursor.peek()
            if line is None or line.text == _MAIL_SIGNATURE:
                return _entry(header, hunks, index, first)
            text = line.text
            if text.startswith(GIT_DIFF_PREFIX):
                return _entry(header, hunks, index, first)
            if has_old_marker and self._is_plain_pair(cursor):
                return _entry(header, hunks, index, first)

            kind = classify(text)
            if kind == LineKind.HUNK_HEADER:
                break
            if text.startswith("@@"):
                raise MalformedPatch(
                    f"unparsable hunk header: {text[:60]!r}",
                    line_no=line.line_no,
                    entry_index=index,
                )
            if has_new_marker:
                raise MalformedPatch(
                    f"file markers are not followed by a hunk header: {text[:60]!r}",
                    line_no=line.line_no,
                    entry_index=index,
                )

            if kind in (LineKind.OLD_FILE, LineKind.NEW_FILE):
                _check_structural(line, index)
                if kind == LineKind.OLD_FILE:
                    has_old_marker = True
                else:
                    has_new_marker = True
            elif in_binary_patch and _is_binary_patch_line(text):
                pass
            elif text.startswith(_EXTENDED_HEADER_PREFIXES):
                in_binary_patch = in_binary_patch or text.startswith("GIT binary patch")
            elif text[:1] in ("+", "-", " "):
                raise MalformedPatch(
                    f"diff content before any hunk header: {text[:60]!r}",
                    line_no=line.line_no,
                    entry_index=index,
                )
            else:
                # commit headers of `git log -p`, trailers, ...
                return _entry(header, hunks, index, first)
            header.append(cursor.advance().text)

        # Hunks until the next boundary or trailing text
        while True:
            line = cursor.peek()
            if line is None:
                break
            text = line.text
            if text.startswith(GIT_DIFF_PREFIX) or self._is_plain_pair(cursor):
                break
            if classify(text) == LineKind.HUNK_HEADER:
                hunks.append(self._read_hunk(cursor, index))
                continue
            if text.startswith("@@"):
                raise MalformedPatch(
                    f"unparsable hunk header: {text[:60]!r}",
                    line_no=line.line_no,
                    entry_index=index,
                )
            if text != _MAIL_SIGNATURE and text[:1] in ("+", "-", " "):
                raise MalformedPatch(
                    "hunk body is longer than its header declares",
                    line_no=line.line_no,
                    entry_index=index,
                )
            break

        return _entry(header, hunks, index, first)

    def _read_hunk(self, cursor: _Cursor, index: int) -> Hunk:
        first = cursor.advance()
        _check_structural(first, index)
        rng = parse_hunk_header(first.text)
        if rng is None:
            raise MalformedPatch(
                f"unparsable hunk header: {first.text[:60]!r}",
                line_no=first.line_no,
                entry_index=index,
            )
        old_left, new_left = rng.old_count, rng.new_count
        body: List[HunkLine] = []

        while old_left > 0 or new_left > 0:
            line = cursor.peek()
            if line is None:
                raise MalformedPatch(
                    f"input ends inside hunk {first.text!r} "
                    f"({old_left} old / {new_left} new lines missing)",
                    line_no=first.line_no,
                    entry_index=index,
                )
            text = line.text
            if body and is_no_newline_marker(text):
                body[-1] = dataclasses.replace(body[-1], eol_marker=text)
                cursor.advance()
                continue

            kind = classify(text, in_hunk=True)
            if kind == LineKind.CONTEXT and old_left > 0 and new_left > 0:
                old_left -= 1
                new_left -= 1
            elif kind == LineKind.REMOVED and old_left > 0:
                old_left -= 1
            elif kind == LineKind.ADDED and new_left > 0:
                new_left -= 1
            else:
                raise MalformedPatch(
                    f"hunk body does not match header {first.text!r} "
                    f"({old_left} old / {new_left} new lines missing)",
                    line_no=line.line_no,
                    entry_index=index,
                )
            body.append(
                HunkLine(kind=kind, text=text[1:], raw=text, line_no=line.line_no)
            )
            cursor.advance()

        trailing = cursor.peek()
        if body and trailing is not None and is_no_newline_marker(trailing.text):
            body[-1] = dataclasses.replace(body[-1], eol_marker=trailing.text)
            cursor.advance()

        return Hunk(
            header=first.text,
            old_start=rng.old_start,
            old_count=rng.old_count,
            new_start=rng.new_start,
            new_count=rng.new_count,
            lines=tuple(body),
        )


def _entry(header: List[str], hunks: List[Hunk], index: int, first: RawLine) -> PatchEntry:
    return PatchEntry(
        header_lines=tuple(header),
        hunks=tuple(hunks),
        index=index,
        line_no=first.line_no,
    )


def _is_binary_patch_line(text: str) -> bool:
    """Lines of a `GIT binary patch` block: hunk headers, base85 data, blanks."""
    return text == "" or bool(_BINARY_HUNK_RE.match(text) or _BASE85_LINE_RE.match(text))


def _check_structural(line: RawLine, index: int) -> None:
    # CR on framing lines means the whole patch went through CRLF conversion;
    # CR on content lines is legitimate file content and is kept.
    if line.text.endswith("\r"):
        raise MalformedPatch(
            "CRLF line endings are not supported",
            line_no=line.line_no,
            entry_index=index,
        )


def segment(text: str) -> List[PatchEntry]:
    """Return every entry of *text* in input order."""
    return list(PatchSegmenter(text).parse())

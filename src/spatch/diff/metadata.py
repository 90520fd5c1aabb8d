"""Entry classifier — derives paths and status from an entry's header lines.

Path sources, weakest first: the ``diff --git a/X b/Y`` line, the
``---``/``+++`` markers, ``rename from``/``rename to``, and the
``Binary files X and Y differ`` line.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

from spatch.diff.classifier import GIT_DIFF_PREFIX, classify, parse_binary_line
from spatch.diff.errors import UnparsablePath
from spatch.diff.models import DEV_NULL, FileMetadata, FileStatus, LineKind, PatchEntry


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


_UNSET = _Unset()

_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
    '"': 0x22,
}


def unquote_path(token: str) -> str:
    """Undo git's C-style quoting (``"a/t\\303\\251st"`` → ``a/tést``)."""
    if len(token) < 2 or not (token.startswith('"') and token.endswith('"')):
        return token
    body = token[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 == len(body):
            out.extend(ch.encode("utf-8", "surrogateescape"))
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1:i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _C_ESCAPES:
            out.append(_C_ESCAPES[nxt])
            i += 2
        else:
            out.extend(nxt.encode("utf-8", "surrogateescape"))
            i += 2
    return out.decode("utf-8", "surrogateescape")


def _take_quoted(text: str) -> Optional[Tuple[str, str]]:
    """Split a leading quoted token off *text*."""
    i = 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return text[:i + 1], text[i + 1:]
        i += 1
    return None


def split_git_header(rest: str) -> Optional[Tuple[str, str]]:
    """Split the ``a/X b/Y`` part of a ``diff --git`` line.

    Unquoted paths may contain spaces, so the split where both sides name
    the same path is preferred, then the first `` b/``.
    """
    if rest.startswith('"'):
        taken = _take_quoted(rest)
        if taken is None:
            return None
        old, remainder = taken
        new = remainder.strip()
        return (old, new) if new else None

    if rest.endswith('"'):
        idx = rest.rfind(' "')
        if idx == -1:
            return None
        return rest[:idx], rest[idx + 1:]

    mid = len(rest) // 2
    if len(rest) % 2 == 1 and rest[mid] == " ":
        old, new = rest[:mid], rest[mid + 1:]
        if old[2:] == new[2:]:
            return old, new

    idx = rest.find(" b/")
    if idx == -1:
        idx = rest.find(" ")
    if idx == -1:
        return None
    return rest[:idx], rest[idx + 1:]


def clean_path(raw: str, prefix: Optional[str] = None) -> Optional[str]:
    """Normalise a raw header path. ``/dev/null`` becomes ``None``."""
    path = unquote_path(raw.strip())
    if path == DEV_NULL:
        return None
    if prefix and path.startswith(prefix):
        path = path[len(prefix):]
    if path.startswith("../"):
        path = path[3:]
    if path.startswith("./"):
        path = path[2:]
    return path.strip()


def _marker_path(line: str, prefix: str) -> Optional[str]:
    raw = line[4:]
    if not raw.startswith('"'):
        # plain diff: "--- a/file.c\t2024-01-01 10:00:00.000000000 +0100"
        raw = raw.split("\t", 1)[0]
    return clean_path(raw, prefix)


def classify_entry(entry: PatchEntry) -> FileMetadata:
    """Return the FileMetadata of a closed entry.

    Raises UnparsablePath when the header yields no usable path.
    """
    old_path: Union[Optional[str], _Unset] = _UNSET
    new_path: Union[Optional[str], _Unset] = _UNSET
    renamed_from: Optional[str] = None
    renamed_to: Optional[str] = None
    created = False
    deleted = False
    binary = False

    for line in entry.header_lines:
        kind = classify(line)
        if kind == LineKind.ENTRY_BOUNDARY:
            pair = split_git_header(line[len(GIT_DIFF_PREFIX):])
            if pair is not None:
                old_path = clean_path(pair[0], "a/")
                new_path = clean_path(pair[1], "b/")
        elif kind == LineKind.OLD_FILE:
            old_path = _marker_path(line, "a/")
        elif kind == LineKind.NEW_FILE:
            new_path = _marker_path(line, "b/")
        elif kind == LineKind.RENAME_FROM:
            renamed_from = clean_path(line[len("rename from "):])
        elif kind == LineKind.RENAME_TO:
            renamed_to = clean_path(line[len("rename to "):])
        elif kind == LineKind.NEW_FILE_MODE:
            created = True
        elif kind == LineKind.DELETED_FILE_MODE:
            deleted = True
        elif kind == LineKind.BINARY:
            binary = True
            pair = parse_binary_line(line)
            if pair is not None:
                old_path = clean_path(pair[0], "a/")
                new_path = clean_path(pair[1], "b/")

    if renamed_from is not None:
        old_path = renamed_from
    if renamed_to is not None:
        new_path = renamed_to
    if created:
        old_path = None
    if deleted:
        new_path = None

    if isinstance(old_path, _Unset):
        if isinstance(new_path, _Unset):
            raise UnparsablePath(
                "entry header names no file",
                line_no=entry.line_no,
                entry_index=entry.index,
            )
        old_path = new_path
    elif isinstance(new_path, _Unset):
        new_path = old_path

    if old_path is None and new_path is None:
        raise UnparsablePath(
            "both sides of the entry are /dev/null",
            line_no=entry.line_no,
            entry_index=entry.index,
        )
    if old_path == "" or new_path == "":
        raise UnparsablePath(
            "entry header has an empty path",
            line_no=entry.line_no,
            entry_index=entry.index,
        )

    if binary:
        status = FileStatus.BINARY
    elif old_path is None:
        status = FileStatus.ADDED
    elif new_path is None:
        status = FileStatus.DELETED
    elif (
        renamed_from is not None
        and renamed_to is not None
        and renamed_from != renamed_to
    ):
        status = FileStatus.RENAMED
    else:
        status = FileStatus.MODIFIED

    return FileMetadata(old_path=old_path, new_path=new_path, status=status)

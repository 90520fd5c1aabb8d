"""Diff engine — line classification, segmentation, metadata, reconstruction."""

from spatch.diff.classifier import classify, parse_hunk_header
from spatch.diff.errors import MalformedPatch, PatchError, UnparsablePath
from spatch.diff.metadata import classify_entry
from spatch.diff.models import (
    FileMetadata,
    FileStatus,
    Hunk,
    HunkLine,
    LineKind,
    PatchEntry,
    RawLine,
)
from spatch.diff.reconstruct import Side, reconstruct
from spatch.diff.segmenter import PatchSegmenter, segment

__all__ = [
    "FileMetadata",
    "FileStatus",
    "Hunk",
    "HunkLine",
    "LineKind",
    "MalformedPatch",
    "PatchEntry",
    "PatchError",
    "PatchSegmenter",
    "RawLine",
    "Side",
    "UnparsablePath",
    "classify",
    "classify_entry",
    "parse_hunk_header",
    "reconstruct",
    "segment",
]

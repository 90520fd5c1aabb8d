"""Split engine — runs one input source through the whole pipeline.

segment → classify → filter → (patch text | reconstructed file) → sink

Error policy: an UnparsablePath skips its entry only. MalformedPatch and
SinkError abort the rest of the current source; entries emitted before the
error stay written. Neither escapes: both are recorded on the SourceResult.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from spatch.diff.errors import MalformedPatch, UnparsablePath
from spatch.diff.metadata import classify_entry
from spatch.diff.reconstruct import Side, reconstruct
from spatch.diff.segmenter import PatchSegmenter
from spatch.split.filters import EntryFilter, Selection
from spatch.split.models import SkippedEntry, SourceError, SourceResult, WrittenArtifact
from spatch.split.sink import DirectorySink, SinkError

STDIN_SOURCE = "<stdin>"


class Mode(str, Enum):
    PATCH = "patch"
    FILE = "file"


@dataclass(frozen=True)
class SplitOptions:
    mode: Mode = Mode.PATCH
    entry_filter: EntryFilter = field(default_factory=EntryFilter)

    def __post_init__(self) -> None:
        if self.mode == Mode.FILE and self.entry_filter.selection == Selection.ALL:
            raise ValueError("file extraction needs a new-only or removed-only selection")


def decode_patch(data: bytes) -> str:
    """Decode patch bytes so that every byte survives a round trip."""
    return data.decode("utf-8", "surrogateescape")


def split_text(
    text: str,
    sink: DirectorySink,
    options: SplitOptions,
    *,
    source: str = STDIN_SOURCE,
    tag: str = "",
) -> SourceResult:
    """Split *text* and hand every selected entry to *sink*."""
    start = time.perf_counter()
    result = SourceResult(source=source)
    entry_filter = options.entry_filter

    try:
        for entry in PatchSegmenter(text).parse():
            result.entries += 1
            try:
                meta = classify_entry(entry)
            except UnparsablePath as exc:
                result.skipped.append(
                    SkippedEntry(
                        entry_index=entry.index,
                        line_no=entry.line_no,
                        reason=exc.message,
                    )
                )
                continue

            if not entry_filter.accepts(meta):
                result.filtered += 1
                continue

            if options.mode == Mode.FILE:
                if meta.is_binary:
                    result.skipped.append(
                        SkippedEntry(
                            entry_index=entry.index,
                            line_no=entry.line_no,
                            reason="binary content cannot be extracted",
                            path=meta.path,
                        )
                    )
                    continue
                side = Side.NEW if entry_filter.selection == Selection.NEW else Side.OLD
                data = reconstruct(entry, meta, side)
                # the one existing side of an added or deleted file
                destination = sink.write_file(meta.path, data)
                kind = "file"
            else:
                data = entry.to_bytes()
                destination = sink.write_patch(meta.path, data, tag=tag)
                kind = "patch"

            result.written.append(
                WrittenArtifact(
                    entry_index=entry.index,
                    path=meta.path,
                    status=meta.status.value,
                    destination=destination,
                    kind=kind,
                    size=len(data),
                )
            )
    except MalformedPatch as exc:
        result.error = SourceError(
            kind="malformed",
            message=exc.message,
            line_no=exc.line_no,
            entry_index=exc.entry_index,
        )
    except SinkError as exc:
        result.error = SourceError(
            kind="io",
            message=str(exc),
            destination=exc.path,
        )

    result.duration_ms = round((time.perf_counter() - start) * 1000, 2)
    return result


def split_bytes(
    data: bytes,
    sink: DirectorySink,
    options: SplitOptions,
    *,
    source: str = STDIN_SOURCE,
    tag: str = "",
) -> SourceResult:
    return split_text(decode_patch(data), sink, options, source=source, tag=tag)


def split_file(path: Path, sink: DirectorySink, options: SplitOptions) -> SourceResult:
    """Split a named patch file; its stem tags the patch names."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        return SourceResult(
            source=str(path),
            error=SourceError(kind="io", message=f"{path}: {exc.strerror or exc}"),
        )
    return split_bytes(data, sink, options, source=str(path), tag=Path(path).stem)

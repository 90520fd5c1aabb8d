"""Split pipeline — filters, sink, engine, results."""

from spatch.split.engine import (
    Mode,
    SplitOptions,
    split_bytes,
    split_file,
    split_text,
)
from spatch.split.filters import (
    EntryFilter,
    FilterCompileError,
    NameFilter,
    Selection,
    build_name_filter,
)
from spatch.split.models import SourceResult, SplitRun
from spatch.split.sink import Collision, DirectorySink, SinkError

__all__ = [
    "Collision",
    "DirectorySink",
    "EntryFilter",
    "FilterCompileError",
    "Mode",
    "NameFilter",
    "Selection",
    "SinkError",
    "SourceResult",
    "SplitOptions",
    "SplitRun",
    "build_name_filter",
    "split_bytes",
    "split_file",
    "split_text",
]

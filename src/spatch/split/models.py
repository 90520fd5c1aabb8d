"""Result models for a split run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class WrittenArtifact:
    """One patch or extracted file handed to the sink."""

    entry_index: int
    path: str
    status: str
    destination: Path
    kind: str  # 'patch' | 'file'
    size: int


@dataclass
class SkippedEntry:
    """An entry that was reported and not emitted."""

    entry_index: int
    line_no: int
    reason: str
    path: Optional[str] = None


@dataclass
class SourceError:
    """The error that aborted a source."""

    kind: str  # 'malformed' | 'io'
    message: str
    line_no: Optional[int] = None
    entry_index: Optional[int] = None
    destination: Optional[Path] = None

    def __str__(self) -> str:
        where = []
        if self.line_no is not None:
            where.append(f"line {self.line_no}")
        if self.entry_index is not None:
            where.append(f"entry #{self.entry_index}")
        return f"{self.message} ({', '.join(where)})" if where else self.message


@dataclass
class SourceResult:
    """Outcome of splitting one input source."""

    source: str
    entries: int = 0
    filtered: int = 0
    written: List[WrittenArtifact] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)
    error: Optional[SourceError] = None
    duration_ms: float = 0.0

    @property
    def aborted(self) -> bool:
        return self.error is not None

    @property
    def clean(self) -> bool:
        return self.error is None and not self.skipped


@dataclass
class SplitRun:
    """All sources of one invocation, in the order processed."""

    sources: List[SourceResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total_written(self) -> int:
        return sum(len(s.written) for s in self.sources)

    @property
    def failed(self) -> bool:
        return any(not s.clean for s in self.sources)

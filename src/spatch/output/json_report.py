"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from spatch.split.models import SourceResult, SplitRun


def _source_dict(src: SourceResult) -> Dict[str, Any]:
    written: List[Dict[str, Any]] = []
    for art in src.written:
        written.append({
            "entry": art.entry_index,
            "path": art.path,
            "status": art.status,
            "kind": art.kind,
            "destination": str(art.destination),
            "bytes": art.size,
        })

    skipped: List[Dict[str, Any]] = []
    for s in src.skipped:
        skipped.append({
            "entry": s.entry_index,
            "line": s.line_no,
            "reason": s.reason,
            **({"path": s.path} if s.path else {}),
        })

    error = None
    if src.error is not None:
        error = {
            "kind": src.error.kind,
            "message": src.error.message,
            "line": src.error.line_no,
            "entry": src.error.entry_index,
            **({"destination": str(src.error.destination)} if src.error.destination else {}),
        }

    return {
        "source": src.source,
        "entries": src.entries,
        "filtered": src.filtered,
        "written": written,
        "skipped": skipped,
        "error": error,
        "duration_ms": src.duration_ms,
    }


def to_dict(run: SplitRun) -> Dict[str, Any]:
    """Convert a SplitRun to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "dry_run": run.dry_run,
        "total_written": run.total_written,
        "errors": sum(1 for s in run.sources if s.aborted),
        "sources": [_source_dict(s) for s in run.sources],
    }


def render(run: SplitRun) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(run), indent=2)

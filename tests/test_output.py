"""Tests for output reporters."""

import json
from pathlib import Path

from spatch.output import json_report, terminal
from spatch.split.models import (
    SkippedEntry,
    SourceError,
    SourceResult,
    SplitRun,
    WrittenArtifact,
)


def _make_run() -> SplitRun:
    """Build a SplitRun with one clean and one aborted source."""
    clean = SourceResult(
        source="series.patch",
        entries=2,
        filtered=1,
        written=[
            WrittenArtifact(
                entry_index=0,
                path="src/main.c",
                status="modified",
                destination=Path("out/src-main.c+series.patch"),
                kind="patch",
                size=120,
            ),
        ],
        duration_ms=1.5,
    )
    broken = SourceResult(
        source="<stdin>",
        entries=1,
        skipped=[SkippedEntry(entry_index=0, line_no=1, reason="entry header names no file")],
        error=SourceError(kind="malformed", message="unparsable hunk header", line_no=9, entry_index=1),
    )
    return SplitRun(sources=[clean, broken])


class TestJsonReport:
    def test_valid_json(self):
        data = json.loads(json_report.render(_make_run()))
        assert data["version"] == "1.0"
        assert data["total_written"] == 1
        assert data["errors"] == 1
        assert data["dry_run"] is False

    def test_written_fields(self):
        data = json_report.to_dict(_make_run())
        art = data["sources"][0]["written"][0]
        assert art["path"] == "src/main.c"
        assert art["status"] == "modified"
        assert art["destination"] == str(Path("out/src-main.c+series.patch"))
        assert data["sources"][0]["error"] is None

    def test_error_and_skips(self):
        data = json_report.to_dict(_make_run())
        broken = data["sources"][1]
        assert broken["error"]["kind"] == "malformed"
        assert broken["error"]["line"] == 9
        assert broken["skipped"][0]["reason"] == "entry header names no file"
        assert "path" not in broken["skipped"][0]


class TestModels:
    def test_error_str(self):
        err = SourceError(kind="malformed", message="bad", line_no=3, entry_index=0)
        assert str(err) == "bad (line 3, entry #0)"

    def test_run_failed(self):
        run = _make_run()
        assert run.failed
        assert not SplitRun(sources=[run.sources[0]]).failed


class TestTerminal:
    def test_render_smoke(self, capsys):
        terminal.render(_make_run())
        err = capsys.readouterr().err
        assert "series.patch" in err
        assert "Malformed patch" in err

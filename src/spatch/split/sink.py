"""Directory sink — writes split patches and extracted files to disk."""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional, Set


class Collision(str, Enum):
    OVERWRITE = "overwrite"
    ERROR = "error"
    SUFFIX = "suffix"


class SinkError(Exception):
    """Raised when an artifact cannot be written. Carries the destination."""

    def __init__(self, path: Path, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.cause = cause


def patch_filename(path: str, tag: str = "") -> str:
    """``src/main.c`` + tag ``fix`` → ``src-main.c+fix.patch``."""
    name = path.replace("/", "-")
    if tag:
        name = f"{name}+{tag}"
    return f"{name}.patch"


class DirectorySink:
    """Writes artifacts under *root*.

    Destinations claimed during this sink's lifetime are tracked so that
    name collisions follow *on_collision*. With *dry_run* the destinations
    are computed and claimed but nothing touches the filesystem.
    """

    def __init__(
        self,
        root: Path,
        *,
        on_collision: Collision = Collision.OVERWRITE,
        dry_run: bool = False,
    ) -> None:
        self.root = Path(root)
        self.on_collision = Collision(on_collision)
        self.dry_run = dry_run
        self._claimed: Set[Path] = set()

    # ---- public API ----

    def write_patch(self, path: str, text: bytes, *, tag: str = "") -> Path:
        """Write one entry's patch text to ``<root>/<flattened path>.patch``."""
        dest = self._claim(self.root / patch_filename(path, tag), suffix=".patch")
        self._write(dest, text)
        return dest

    def write_file(self, path: str, content: bytes) -> Path:
        """Write reconstructed file bytes to ``<root>/<path>``."""
        rel = PurePosixPath(path)
        if rel.is_absolute() or ".." in rel.parts:
            raise SinkError(self.root / path, "path escapes the output directory")
        dest = self._claim(self.root.joinpath(*rel.parts), suffix="")
        self._write(dest, content)
        return dest

    # ---- internals ----

    def _claim(self, dest: Path, *, suffix: str) -> Path:
        if dest in self._claimed:
            if self.on_collision == Collision.ERROR:
                raise SinkError(dest, "already written by an earlier entry")
            if self.on_collision == Collision.SUFFIX:
                dest = self._next_free(dest, suffix)
        self._claimed.add(dest)
        return dest

    def _next_free(self, dest: Path, suffix: str) -> Path:
        base = dest.name[: -len(suffix)] if suffix and dest.name.endswith(suffix) else dest.name
        n = 1
        while True:
            candidate = dest.with_name(f"{base}.{n}{suffix}")
            if candidate not in self._claimed:
                return candidate
            n += 1

    def _write(self, dest: Path, data: bytes) -> None:
        if self.dry_run:
            return
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(data)
        except OSError as exc:
            raise SinkError(dest, exc.strerror or str(exc), exc) from exc

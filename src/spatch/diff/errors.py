"""Parse and classification errors raised by the diff engine."""

from __future__ import annotations

from typing import Optional


class PatchError(Exception):
    """Base class for errors raised while reading a patch."""

    def __init__(
        self,
        message: str,
        *,
        line_no: Optional[int] = None,
        entry_index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line_no = line_no
        self.entry_index = entry_index

    def __str__(self) -> str:
        where = []
        if self.line_no is not None:
            where.append(f"line {self.line_no}")
        if self.entry_index is not None:
            where.append(f"entry #{self.entry_index}")
        if not where:
            return self.message
        return f"{self.message} ({', '.join(where)})"


class MalformedPatch(PatchError):
    """Structural violation; the rest of the input cannot be trusted."""


class UnparsablePath(PatchError):
    """An entry header carries no recoverable file path."""

"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

SplitMode = Literal["patch", "file"]
Only = Literal["all", "new", "removed"]
OnCollision = Literal["overwrite", "error", "suffix"]
OutputFormat = Literal["terminal", "json"]

SPLIT_MODES = ("patch", "file")
ONLY_CHOICES = ("all", "new", "removed")
COLLISION_CHOICES = ("overwrite", "error", "suffix")
FORMAT_CHOICES = ("terminal", "json")


@dataclass
class SplitConfig:
    mode: SplitMode = "patch"  # 'file' writes reconstructed file contents
    only: Only = "all"


@dataclass
class FilterConfig:
    glob: str = ""
    regex: str = ""  # mutually exclusive with glob


@dataclass
class OutputConfig:
    directory: str = "."
    on_collision: OnCollision = "overwrite"
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class SpatchConfig:
    version: str = "1.0"
    split: SplitConfig = field(default_factory=SplitConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

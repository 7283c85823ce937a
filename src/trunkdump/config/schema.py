"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutputFormat = Literal["terminal", "json"]
IOErrorPolicy = Literal["raise", "drop"]


@dataclass
class ParseConfig:
    root: str = "trunk/"
    verbosity: int = 1  # 0 quiet | 1 per revision | 2 per node
    tz_offset_minutes: Optional[int] = None  # None = local offset at parse time
    on_io_error: IOErrorPolicy = "raise"
    drop_top_level_adds: bool = False


@dataclass
class FilterConfig:
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    file: Optional[str] = None  # YAML file with include/exclude lists


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_nodes: bool = True
    show_log: bool = False


@dataclass
class TrunkDumpConfig:
    version: str = "1.0"
    parse: ParseConfig = field(default_factory=ParseConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

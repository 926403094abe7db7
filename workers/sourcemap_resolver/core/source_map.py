"""
Source map model — immutable result of building one map document.

A SourceMap keeps at most one LineMapping per generated line: the
original position with the smallest (source_line, source_column).
Column-level detail of the underlying format is deliberately collapsed.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class LineMapping:
    """Best original position for a single generated line (1-based)."""
    source_index: int
    source_line: int
    source_column: int


@dataclass(frozen=True)
class SourceLocation:
    """A resolved location.  ``column`` is None when only the line is known."""
    file: str
    line: int
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.column is None:
            return f"{self.file}:{self.line}"
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceMap:
    """
    Decoded source map for one generated file.

    ``sources`` holds absolute paths; a LineMapping's ``source_index``
    indexes into it.  ``line_mappings`` is keyed by generated line and may
    have gaps.  Both are read-only after construction.
    """

    sources: Tuple[str, ...]
    line_mappings: Mapping[int, LineMapping] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(
            self, "line_mappings", MappingProxyType(dict(self.line_mappings))
        )

    @property
    def source_count(self) -> int:
        return len(self.sources)

    @property
    def mapped_lines(self) -> Tuple[int, ...]:
        return tuple(sorted(self.line_mappings))

    def lookup(self, line: int) -> Optional[LineMapping]:
        """Return the mapping for generated *line*, or None."""
        return self.line_mappings.get(line)

    def resolve(self, line: int) -> Optional[SourceLocation]:
        """Translate generated *line* to its original file/line/column."""
        mapping = self.lookup(line)
        if mapping is None:
            return None
        return SourceLocation(
            file=self.sources[mapping.source_index],
            line=mapping.source_line,
            column=mapping.source_column,
        )

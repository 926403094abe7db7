"""
Schema — Pydantic models for resolver JSON outputs.

One output per generated file: sourcemap_report.json, holding the map
verdict, the decoded sources and the requested line lookups.

Runtime contract fields (present in every output):
  package_name, resolver_version, profile_id, schema_version.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from sourcemap_resolver import PACKAGE_NAME, RESOLVER_VERSION, SCHEMA_VERSION


class LocationEntry(BaseModel):
    """Lookup result for one generated line."""

    generated_line: int
    verdict: str                  # MAPPED | UNMAPPED
    reasons: List[str] = Field(default_factory=list)

    source_index: Optional[int] = None
    source_file: Optional[str] = None
    source_line: Optional[int] = None
    source_column: Optional[int] = None


class SourceMapReport(BaseModel):
    """Per-file report — sourcemap_report.json."""

    package_name: str = PACKAGE_NAME
    resolver_version: str = RESOLVER_VERSION
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    generated_file: str
    origin: str                   # EXTERNAL | INLINE | NONE | NATIVE
    verdict: str                  # PRESENT | ABSENT | DECODE_ERROR
    reasons: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    sources: List[str] = Field(default_factory=list)
    n_mapped_lines: int = 0
    locations: List[LocationEntry] = Field(default_factory=list)

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

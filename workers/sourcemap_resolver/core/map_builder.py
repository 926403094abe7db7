"""
Map builder — source-map document text → SourceMap.

Responsibilities:
  - Extract ``sources``, ``mappings`` and the optional ``sourceRoot`` by
    targeted pattern search.  The document is never parsed as a whole, so
    unknown fields, odd formatting and trailing garbage are tolerated.
  - Resolve every source entry (prefixed with ``sourceRoot`` when present)
    to an absolute path, preserving array order.
  - Replay the ``mappings`` string and keep, per generated line, the
    smallest (source_line, source_column) position.

Mapping state (source index / line / column) runs across the whole
string and is never reset at a ``;``.  Only generated lines change there.
"""
import logging
import re
from typing import Dict, List, Optional

from sourcemap_resolver.core.errors import DecodeError
from sourcemap_resolver.core.paths import LocalPathResolver, PathResolver
from sourcemap_resolver.core.source_map import LineMapping, SourceMap
from sourcemap_resolver.core.vlq import decode_vlq_segment

logger = logging.getLogger(__name__)

_SOURCES_OPEN = re.compile(r'"sources"\s*:\s*\[')
_MAPPINGS = re.compile(r'"mappings"\s*:\s*"([^"]+)"')
_SOURCE_ROOT = re.compile(r'"sourceRoot"\s*:\s*"([^"]+)"')
_STRING = re.compile(r'"([^"]+)"')


def _balanced_brackets(text: str, start: int) -> Optional[str]:
    """
    Return the ``[...]`` block opening at *start*, brackets included.

    Nested brackets are counted; quotes are not special.  None if the
    block never closes.
    """
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def extract_fields(document: str) -> Dict[str, Optional[str]]:
    """
    Scan *document* for the three fields the builder needs.

    Returns a dict with keys ``sources`` (raw bracket block),
    ``mappings`` and ``sourceRoot``; missing or empty fields are None.
    """
    sources = None
    m = _SOURCES_OPEN.search(document)
    if m:
        sources = _balanced_brackets(document, m.end() - 1)

    m = _MAPPINGS.search(document)
    mappings = m.group(1) if m else None

    m = _SOURCE_ROOT.search(document)
    source_root = m.group(1) if m else None

    return {"sources": sources, "mappings": mappings, "sourceRoot": source_root}


def _resolve_sources(
    raw_sources: str,
    source_root: Optional[str],
    path_resolver: PathResolver,
) -> List[str]:
    resolved: List[str] = []
    for entry in _STRING.findall(raw_sources):
        if source_root:
            entry = f"{source_root}{path_resolver.separator}{entry}"
        resolved.append(path_resolver.to_absolute(entry))
    return resolved


def parse_mappings(mappings: str, n_sources: int) -> Dict[int, LineMapping]:
    """
    Replay *mappings* into ``{generated_line: LineMapping}``.

    Segments hold 1, 4 or 5 values.  One-value segments only advance the
    generated column, which is not tracked, and never touch a line.  The
    fifth value (name index) is ignored.  Any other arity, or a running
    position outside ``[0, n_sources)`` / below line or column 1, raises
    DecodeError.
    """
    line_mappings: Dict[int, LineMapping] = {}

    source_index = 0
    source_line = 1
    source_column = 1

    for line, group in enumerate(mappings.split(";"), start=1):
        for segment in group.split(","):
            if not segment:
                continue

            values = decode_vlq_segment(segment)
            if len(values) == 1:
                continue
            if len(values) not in (4, 5):
                raise DecodeError(
                    f"segment {segment!r} on generated line {line} has "
                    f"{len(values)} values, expected 1, 4 or 5",
                    text=segment,
                )

            source_index += values[1]
            source_line += values[2]
            source_column += values[3]

            if not 0 <= source_index < n_sources:
                raise DecodeError(
                    f"segment {segment!r} on generated line {line} references "
                    f"source {source_index}, map has {n_sources}",
                    text=segment,
                )
            if source_line < 1 or source_column < 1:
                raise DecodeError(
                    f"segment {segment!r} on generated line {line} moves to "
                    f"{source_line}:{source_column}",
                    text=segment,
                )

            current = line_mappings.get(line)
            if current is None or (source_line, source_column) < (
                current.source_line,
                current.source_column,
            ):
                line_mappings[line] = LineMapping(
                    source_index=source_index,
                    source_line=source_line,
                    source_column=source_column,
                )

    return line_mappings


def build_source_map(
    document: str,
    path_resolver: Optional[PathResolver] = None,
) -> Optional[SourceMap]:
    """
    Build a SourceMap from the text of a source-map document.

    Returns None when ``sources`` or ``mappings`` is missing: the document
    is not a usable map.  Raises DecodeError on malformed mappings; no
    partial map is ever returned.
    """
    if path_resolver is None:
        path_resolver = LocalPathResolver()

    fields = extract_fields(document)
    if fields["sources"] is None or fields["mappings"] is None:
        logger.debug(
            "Document lacks %s, not a usable map",
            "sources" if fields["sources"] is None else "mappings",
        )
        return None

    sources = _resolve_sources(fields["sources"], fields["sourceRoot"], path_resolver)
    line_mappings = parse_mappings(fields["mappings"], len(sources))

    return SourceMap(sources=tuple(sources), line_mappings=line_mappings)

"""
Location remapping — translate generated locations for error reporting.

``map_location`` answers a single (file, line) query.  ``remap_traceback``
rewrites every ``<path>:<line>:`` occurrence in a traceback or error
message.  Anything without a map is left exactly as it was.
"""
import logging
import re

from sourcemap_resolver.core.errors import DecodeError
from sourcemap_resolver.core.resolver import MapResolver
from sourcemap_resolver.core.source_map import SourceLocation

logger = logging.getLogger(__name__)

# "path:line:" with an optional drive letter; the path stops at whitespace,
# quotes, brackets and colons, and must contain a "." or a separator so
# that "12:30:" in a timestamp is not taken for a file.
_PATH_CHAR = r"""[^\s:"'()\[\]]"""
_LOCATION = re.compile(
    rf"((?:[A-Za-z]:)?{_PATH_CHAR}*[./\\]{_PATH_CHAR}*):(\d+):"
)


def map_location(resolver: MapResolver, file: str, line: int) -> SourceLocation:
    """
    Original location of generated *file*:*line*.

    Falls back to the generated location (column None) when no map or no
    mapping for the line exists.  DecodeError propagates.
    """
    source_map = resolver.get(file)
    if source_map is not None:
        location = source_map.resolve(line)
        if location is not None:
            return location
    return SourceLocation(file=file, line=line)


def remap_traceback(text: str, resolver: MapResolver) -> str:
    """Rewrite generated ``path:line:`` locations in *text*."""

    def _replace(m: "re.Match[str]") -> str:
        file, line = m.group(1), int(m.group(2))
        try:
            location = map_location(resolver, file, line)
        except DecodeError as e:
            logger.error("Malformed source map for %s: %s", file, e, exc_info=True)
            return m.group(0)
        return f"{location.file}:{location.line}:"

    return _LOCATION.sub(_replace, text)

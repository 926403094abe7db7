"""
Map resolver — generated file path → SourceMap, memoized per file.

Resolution order for a generated file ``F``:
  1. ``F + profile.map_suffix`` — if it can be read, its text is the map.
  2. ``F`` itself — if its content ends with the inline marker comment
     (trailing whitespace tolerated), the base64 payload is decoded and
     its text is the map.
  3. Otherwise no map.

Unreadable files mean "no map", never an error.  Malformed map content
raises DecodeError and is not cached, so a later call tries again.

Results, present or absent, are cached for the lifetime of the resolver.
Nothing invalidates an entry when the file changes on disk; ``clear()``
is the only way to force a re-read.
"""
import logging
import re
import threading
from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, Optional, Pattern, Protocol

from sourcemap_resolver.core.base64_decoder import decode_base64
from sourcemap_resolver.core.map_builder import build_source_map
from sourcemap_resolver.core.paths import LocalPathResolver, PathResolver
from sourcemap_resolver.core.source_map import SourceMap
from sourcemap_resolver.policy.profile import ResolverProfile

logger = logging.getLogger(__name__)


class FileReader(Protocol):
    def read(self, path: str) -> Optional[str]:
        ...


class LocalFileReader:
    """
    Read whole files from disk; None when the file cannot be read.

    Paths the OS refuses to open (e.g. containing NUL) count as unreadable.
    """

    def read(self, path: str) -> Optional[str]:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except (OSError, ValueError) as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None


@unique
class CacheState(str, Enum):
    UNRESOLVED = "UNRESOLVED"
    ABSENT = "ABSENT"
    PRESENT = "PRESENT"


@unique
class MapOrigin(str, Enum):
    """Where a resolution looked and what it found."""
    EXTERNAL = "EXTERNAL"   # <file>.map was read
    INLINE = "INLINE"       # inline payload found in <file>
    NONE = "NONE"           # neither source yielded a document
    NATIVE = "NATIVE"       # the "no source file" sentinel


@dataclass(frozen=True)
class CacheEntry:
    state: CacheState
    origin: MapOrigin
    source_map: Optional[SourceMap] = None


_UNRESOLVED = CacheEntry(CacheState.UNRESOLVED, MapOrigin.NONE)
_NATIVE = CacheEntry(CacheState.ABSENT, MapOrigin.NATIVE)


def inline_map_pattern(profile: ResolverProfile) -> Pattern[str]:
    """Inline marker comment anchored at the very end of the content."""
    return re.compile(re.escape(profile.inline_marker) + r"([A-Za-z0-9+/=]+)\s*\Z")


class MapResolver:
    """
    Resolve and cache source maps for generated files.

    Usage::

        resolver = MapResolver()
        source_map = resolver.get("out/main.lua")
        if source_map is not None:
            location = source_map.resolve(42)

    One instance owns one cache; share the instance rather than creating
    module-level state.  Safe to call from several threads.
    """

    def __init__(
        self,
        profile: Optional[ResolverProfile] = None,
        path_resolver: Optional[PathResolver] = None,
        reader: Optional[FileReader] = None,
    ):
        self.profile = profile or ResolverProfile.v0()
        self._path_resolver = path_resolver or LocalPathResolver()
        self._reader = reader or LocalFileReader()
        self._inline = inline_map_pattern(self.profile)
        self._cache: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    # -- public API ------------------------------------------------------------

    def get(self, file: str) -> Optional[SourceMap]:
        """Return the SourceMap for *file*, or None if it has none."""
        return self.inspect(file).source_map

    def inspect(self, file: str) -> CacheEntry:
        """Like get(), but also report where the map came from."""
        if file == self.profile.native_sentinel:
            return _NATIVE

        with self._lock:
            entry = self._cache.get(file, _UNRESOLVED)
            if entry.state != CacheState.UNRESOLVED:
                logger.debug("Cache hit for %s: %s", file, entry.state.value)
                return entry

            entry = self._resolve(file)
            self._cache[file] = entry
            return entry

    def cache_state(self, file: str) -> CacheState:
        """Current cache state for *file*; never triggers I/O."""
        if file == self.profile.native_sentinel:
            return CacheState.ABSENT
        with self._lock:
            return self._cache.get(file, _UNRESOLVED).state

    def clear(self) -> None:
        """Forget every cached result."""
        with self._lock:
            self._cache.clear()

    # -- internals -------------------------------------------------------------

    def _resolve(self, file: str) -> CacheEntry:
        document = self._reader.read(file + self.profile.map_suffix)
        if document is not None:
            origin = MapOrigin.EXTERNAL
        else:
            document = self._read_inline(file)
            origin = MapOrigin.INLINE if document is not None else MapOrigin.NONE

        if document is None:
            logger.debug("No source map for %s", file)
            return CacheEntry(CacheState.ABSENT, origin)

        source_map = build_source_map(document, self._path_resolver)
        if source_map is None:
            logger.debug("Unusable %s source map for %s", origin.value.lower(), file)
            return CacheEntry(CacheState.ABSENT, origin)

        logger.debug(
            "Loaded %s source map for %s (%d sources, %d lines)",
            origin.value.lower(), file,
            source_map.source_count, len(source_map.line_mappings),
        )
        return CacheEntry(CacheState.PRESENT, origin, source_map)

    def _read_inline(self, file: str) -> Optional[str]:
        content = self._reader.read(file)
        if content is None:
            return None
        m = self._inline.search(content)
        if m is None:
            return None
        return decode_base64(m.group(1)).decode("utf-8", errors="replace")

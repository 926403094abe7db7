"""
Verdict — structured outcome of a resolution, with reason enums.

Map level:       PRESENT | ABSENT | DECODE_ERROR
Location level:  MAPPED  | UNMAPPED
"""
from enum import Enum, unique
from typing import List, Optional, Tuple

from sourcemap_resolver.core.resolver import MapOrigin
from sourcemap_resolver.core.source_map import SourceMap, SourceLocation


@unique
class MapVerdict(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    DECODE_ERROR = "DECODE_ERROR"


@unique
class AbsentReason(str, Enum):
    NATIVE_SENTINEL = "NATIVE_SENTINEL"
    NO_MAP_SOURCE = "NO_MAP_SOURCE"
    MISSING_FIELDS = "MISSING_FIELDS"


@unique
class LocationVerdict(str, Enum):
    MAPPED = "MAPPED"
    UNMAPPED = "UNMAPPED"


@unique
class UnmappedReason(str, Enum):
    NO_MAP = "NO_MAP"
    NO_LINE_MAPPING = "NO_LINE_MAPPING"


def judge_map(
    source_map: Optional[SourceMap],
    origin: MapOrigin,
) -> Tuple[MapVerdict, List[str]]:
    """Classify a resolver result.  Returns (MapVerdict, reasons)."""
    if source_map is not None:
        return MapVerdict.PRESENT, []
    if origin == MapOrigin.NATIVE:
        return MapVerdict.ABSENT, [AbsentReason.NATIVE_SENTINEL.value]
    if origin == MapOrigin.NONE:
        return MapVerdict.ABSENT, [AbsentReason.NO_MAP_SOURCE.value]
    # a map file or inline payload was found but did not hold a usable map
    return MapVerdict.ABSENT, [AbsentReason.MISSING_FIELDS.value]


def judge_location(
    source_map: Optional[SourceMap],
    location: Optional[SourceLocation],
) -> Tuple[LocationVerdict, List[str]]:
    """Classify the lookup of a single generated line."""
    if source_map is None:
        return LocationVerdict.UNMAPPED, [UnmappedReason.NO_MAP.value]
    if location is None:
        return LocationVerdict.UNMAPPED, [UnmappedReason.NO_LINE_MAPPING.value]
    return LocationVerdict.MAPPED, []

"""
Sourcemap Router
Translate locations in generated files back to their original sources.

Wraps the sourcemap_resolver package.  A single MapResolver (and so a
single map cache) is shared by every request of the process.
"""
import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.config import settings
from sourcemap_resolver.core.paths import LocalPathResolver  # type: ignore
from sourcemap_resolver.core.remap import remap_traceback  # type: ignore
from sourcemap_resolver.core.resolver import MapResolver  # type: ignore
from sourcemap_resolver.io.schema import SourceMapReport  # type: ignore
from sourcemap_resolver.policy.profile import ResolverProfile  # type: ignore
from sourcemap_resolver.policy.verdict import MapVerdict  # type: ignore
from sourcemap_resolver.runner import run_resolver  # type: ignore

logger = logging.getLogger(__name__)


# =============================================================================
# Shared resolver
# =============================================================================

@lru_cache(maxsize=1)
def get_resolver() -> MapResolver:
    """Process-wide resolver built from settings."""
    profile = ResolverProfile(
        profile_id=settings.SOURCEMAP_PROFILE_ID,
        map_suffix=settings.SOURCEMAP_MAP_SUFFIX,
        comment_prefix=settings.SOURCEMAP_COMMENT_PREFIX,
        native_sentinel=settings.SOURCEMAP_NATIVE_SENTINEL,
    )
    return MapResolver(
        profile=profile,
        path_resolver=LocalPathResolver(cwd=settings.SOURCEMAP_SOURCE_BASE),
    )


# =============================================================================
# Request/Response Models
# =============================================================================

class ResolveRequest(BaseModel):
    """Request to resolve generated lines of one file."""
    file: str = Field(..., min_length=1, description="Path of the generated file")
    lines: Optional[List[int]] = Field(
        None,
        description="Generated lines to look up; all mapped lines if omitted",
    )


class RemapRequest(BaseModel):
    """Traceback or error message to rewrite."""
    text: str


class RemapResponse(BaseModel):
    text: str


# =============================================================================
# Router
# =============================================================================

router = APIRouter()


@router.post(
    "/resolve",
    response_model=SourceMapReport,
    status_code=status.HTTP_200_OK,
    summary="Resolve the source map of a generated file",
)
async def resolve_endpoint(
    request: ResolveRequest,
    resolver: MapResolver = Depends(get_resolver),
):
    """
    Locate the source map of ``file`` (``<file>.map`` first, then an
    inline map in its trailing comment) and look up the requested lines.

    A file without a map is not an error: the report verdict is ABSENT.
    A malformed map returns 422.
    """
    report = run_resolver(request.file, lines=request.lines, resolver=resolver)
    if report.verdict == MapVerdict.DECODE_ERROR.value:
        raise HTTPException(
            status_code=422,
            detail=f"Malformed source map for {request.file}: {report.error}",
        )
    return report


@router.post(
    "/remap",
    response_model=RemapResponse,
    status_code=status.HTTP_200_OK,
    summary="Rewrite generated locations in a traceback",
)
async def remap_endpoint(
    request: RemapRequest,
    resolver: MapResolver = Depends(get_resolver),
):
    """Replace every ``path:line:`` with its original location when mapped."""
    return RemapResponse(text=remap_traceback(request.text, resolver))


@router.delete(
    "/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Forget every cached source map",
)
async def clear_cache_endpoint(resolver: MapResolver = Depends(get_resolver)):
    """Maps are never re-read on their own; this forces a re-read."""
    resolver.clear()
    logger.info("Source map cache cleared")

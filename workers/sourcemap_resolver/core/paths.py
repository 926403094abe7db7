"""
Path collaborator — absolute-path normalization for map ``sources``.

The resolver only needs two things from the platform: the path separator
used to join ``sourceRoot`` with an entry, and a way to make a path
absolute.  Both sit behind the PathResolver protocol so callers (and
tests) can supply their own.
"""
import os
from typing import Optional, Protocol


class PathResolver(Protocol):
    separator: str

    def to_absolute(self, path: str, base: Optional[str] = None) -> str:
        ...


class LocalPathResolver:
    """
    PathResolver for the local filesystem.

    Relative paths are anchored at *base*, else at the configured *cwd*,
    else at the process working directory.  The result is normalized but
    symlinks are not followed and the file need not exist.
    """

    separator = os.sep

    def __init__(self, cwd: Optional[str] = None):
        self._cwd = cwd

    def to_absolute(self, path: str, base: Optional[str] = None) -> str:
        if not os.path.isabs(path):
            anchor = base or self._cwd or os.getcwd()
            path = os.path.join(anchor, path)
        return os.path.normpath(path)

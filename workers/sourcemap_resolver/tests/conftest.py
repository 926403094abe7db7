"""
Shared pytest fixtures for sourcemap_resolver tests.

Provides a reference base64-VLQ encoder, helpers that write generated
files with external or inline maps into ``tmp_path``, and a reader stub
that records every path it is asked to read.
"""
import base64
import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from sourcemap_resolver.core.base64_decoder import ALPHABET
from sourcemap_resolver.core.paths import LocalPathResolver
from sourcemap_resolver.core.resolver import MapResolver

INLINE_PREFIX = "--# sourceMappingURL=data:application/json;base64,"

GENERATED_LUA = "local x = 1\nprint(x)\nreturn x\n"


def vlq_encode(*values: int) -> str:
    """Reference base64-VLQ encoder."""
    out = []
    for value in values:
        v = ((-value) << 1) | 1 if value < 0 else value << 1
        while True:
            digit = v & 0b11111
            v >>= 5
            if v:
                digit |= 0b100000
            out.append(ALPHABET[digit])
            if not v:
                break
    return "".join(out)


def map_document(sources, mappings, source_root: Optional[str] = None, **extra) -> str:
    doc = {"version": 3, "file": "main.lua", "sources": sources, "names": []}
    if source_root is not None:
        doc["sourceRoot"] = source_root
    doc["mappings"] = mappings
    doc.update(extra)
    return json.dumps(doc)


def inline_comment(document: str) -> str:
    payload = base64.b64encode(document.encode("utf-8")).decode("ascii")
    return INLINE_PREFIX + payload


class CountingReader:
    """In-memory FileReader that records each read."""

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files: Dict[str, str] = dict(files or {})
        self.calls: List[str] = []

    def read(self, path: str) -> Optional[str]:
        self.calls.append(path)
        return self.files.get(path)


@pytest.fixture
def path_resolver(tmp_path) -> LocalPathResolver:
    """Resolve relative map sources against tmp_path."""
    return LocalPathResolver(cwd=str(tmp_path))


@pytest.fixture
def resolver(path_resolver) -> MapResolver:
    return MapResolver(path_resolver=path_resolver)


@pytest.fixture
def simple_document() -> str:
    """Two sources; line 1 → a.ts:1:1, line 3 → b.ts:3:5."""
    return map_document(["a.ts", "b.ts"], "AAAA;;ACEI")


@pytest.fixture
def external_map_file(tmp_path, simple_document) -> Path:
    """Generated file with a sibling .map file."""
    gen = tmp_path / "external.lua"
    gen.write_text(GENERATED_LUA)
    (tmp_path / "external.lua.map").write_text(simple_document)
    return gen


@pytest.fixture
def inline_map_file(tmp_path, simple_document) -> Path:
    """Generated file carrying its map in the trailing comment."""
    gen = tmp_path / "inline.lua"
    gen.write_text(GENERATED_LUA + inline_comment(simple_document) + "\n  \n")
    return gen


@pytest.fixture
def unmapped_file(tmp_path) -> Path:
    """Generated file with neither a .map file nor an inline map."""
    gen = tmp_path / "plain.lua"
    gen.write_text(GENERATED_LUA)
    return gen


@pytest.fixture
def malformed_map_file(tmp_path) -> Path:
    """Generated file whose .map has a character outside the VLQ alphabet."""
    gen = tmp_path / "broken.lua"
    gen.write_text(GENERATED_LUA)
    (tmp_path / "broken.lua.map").write_text(map_document(["a.ts"], "AA!A"))
    return gen


# ── helper fixtures ─────────────────────────────────────────────────

@pytest.fixture
def vlq():
    """The reference encoder, for building mappings strings in tests."""
    return vlq_encode


@pytest.fixture
def make_document():
    return map_document


@pytest.fixture
def make_inline():
    return inline_comment


@pytest.fixture
def make_counting_reader():
    return CountingReader

"""
sourcemap_resolver — source-map lookup for generated (compiled) files.

Given a generated file, locate its source map (sibling ``.map`` file or an
inline base64 payload in the trailing comment), decode it, and translate a
generated line number back to the original source file, line and column.
"""

__version__ = "0.1.0"
RESOLVER_VERSION = "v0"
PACKAGE_NAME = "sourcemap_resolver"
SCHEMA_VERSION = "0.1"

"""
Profile — resolver knobs for one family of generated files.

The profile holds every convention the resolver depends on (map file
suffix, inline comment syntax, the "no source" marker) so that core
logic carries no opinions about the target language.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ResolverProfile:
    """Describes where maps live and how inline maps are spelled."""

    profile_id: str

    # External map: <generated file><map_suffix>
    map_suffix: str = ".map"

    # Inline map: <comment_prefix># sourceMappingURL=data:<mime>;base64,<payload>
    comment_prefix: str = "--"
    inline_mime: str = "application/json"

    # File identifier for code that has no source file (native/builtin)
    native_sentinel: str = "[C]"

    @property
    def inline_marker(self) -> str:
        return (
            f"{self.comment_prefix}# sourceMappingURL="
            f"data:{self.inline_mime};base64,"
        )

    @classmethod
    def v0(cls) -> "ResolverProfile":
        """The v0 profile: Lua output with ``--#`` inline comments."""
        return cls(profile_id="lua-inline-v0")

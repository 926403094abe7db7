"""
Resolver runner — top-level orchestration: generated file → report.

Ties the resolver, policy verdicts and IO together into a single
``run_resolver`` function that can be called from the API endpoint or
from the CLI.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from sourcemap_resolver.core.errors import DecodeError
from sourcemap_resolver.core.resolver import MapOrigin, MapResolver
from sourcemap_resolver.io.schema import LocationEntry, SourceMapReport
from sourcemap_resolver.io.writer import write_report
from sourcemap_resolver.policy.profile import ResolverProfile
from sourcemap_resolver.policy.verdict import (
    LocationVerdict,
    MapVerdict,
    judge_location,
    judge_map,
)

logger = logging.getLogger(__name__)


def run_resolver(
    generated_file: str,
    lines: Optional[Iterable[int]] = None,
    profile: Optional[ResolverProfile] = None,
    resolver: Optional[MapResolver] = None,
    output_dir: Optional[Path] = None,
) -> SourceMapReport:
    """
    Resolve the source map of a single generated file.

    Parameters
    ----------
    generated_file : str
        Path of the generated (compiled) file.
    lines : iterable of int, optional
        Generated lines to look up.  Defaults to every mapped line.
    profile : ResolverProfile, optional
        Profile for a freshly built resolver; ignored when *resolver* is
        given.  Defaults to ResolverProfile.v0().
    resolver : MapResolver, optional
        Shared resolver (and cache).  A fresh one is built if omitted.
    output_dir : Path, optional
        Directory to write sourcemap_report.json.  If None, nothing is
        written to disk.
    """
    if resolver is None:
        resolver = MapResolver(profile=profile)
    profile = resolver.profile

    # ── Step 1: resolve the map ──────────────────────────────────────
    try:
        entry = resolver.inspect(generated_file)
    except DecodeError as e:
        logger.error("Malformed source map for %s: %s", generated_file, e, exc_info=True)
        report = SourceMapReport(
            profile_id=profile.profile_id,
            generated_file=generated_file,
            origin=MapOrigin.NONE.value,
            verdict=MapVerdict.DECODE_ERROR.value,
            reasons=[MapVerdict.DECODE_ERROR.value],
            error=str(e),
        )
        if output_dir:
            write_report(report, output_dir)
        return report

    source_map = entry.source_map
    verdict, reasons = judge_map(source_map, entry.origin)

    # ── Step 2: per-line lookups ─────────────────────────────────────
    if lines is None:
        lines = source_map.mapped_lines if source_map is not None else ()

    locations: List[LocationEntry] = []
    for line in lines:
        location = source_map.resolve(line) if source_map is not None else None
        lv, lreasons = judge_location(source_map, location)
        if lv == LocationVerdict.MAPPED:
            mapping = source_map.lookup(line)
            locations.append(LocationEntry(
                generated_line=line,
                verdict=lv.value,
                source_index=mapping.source_index,
                source_file=location.file,
                source_line=location.line,
                source_column=location.column,
            ))
        else:
            locations.append(LocationEntry(
                generated_line=line,
                verdict=lv.value,
                reasons=lreasons,
            ))

    # ── Step 3: assemble output ──────────────────────────────────────
    report = SourceMapReport(
        profile_id=profile.profile_id,
        generated_file=generated_file,
        origin=entry.origin.value,
        verdict=verdict.value,
        reasons=reasons,
        sources=list(source_map.sources) if source_map is not None else [],
        n_mapped_lines=len(source_map.line_mappings) if source_map is not None else 0,
        locations=locations,
    )

    if output_dir:
        write_report(report, output_dir)

    return report


# ── CLI ──────────────────────────────────────────────────────────────────────

def main():
    """CLI entry point for sourcemap_resolver."""
    parser = argparse.ArgumentParser(
        description="sourcemap_resolver — map generated lines back to original sources",
    )
    parser.add_argument(
        "file",
        help="Path to the generated file",
    )
    parser.add_argument(
        "-l", "--line",
        type=int,
        action="append",
        dest="lines",
        help="Generated line to look up (repeatable; default: all mapped lines)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=None,
        help="Directory to write sourcemap_report.json",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    report = run_resolver(
        generated_file=args.file,
        lines=args.lines,
        output_dir=args.output_dir,
    )

    print(f"Map: {report.verdict} ({report.origin})")
    if report.reasons:
        print(f"Reasons: {', '.join(report.reasons)}")
    print(f"Sources: {len(report.sources)}, mapped lines: {report.n_mapped_lines}")
    for loc in report.locations:
        if loc.verdict == LocationVerdict.MAPPED.value:
            print(f"  {loc.generated_line} -> "
                  f"{loc.source_file}:{loc.source_line}:{loc.source_column}")
        else:
            print(f"  {loc.generated_line} -> (unmapped)")

    if args.output_dir:
        print(f"Report written to: {args.output_dir}")

    if report.verdict == MapVerdict.DECODE_ERROR.value:
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
Writer — serialize resolver outputs to JSON files.

Filesystem layout per generated file:
    <output_dir>/sourcemap_report.json
"""
import json
from pathlib import Path

from sourcemap_resolver.io.schema import SourceMapReport

REPORT_FILENAME = "sourcemap_report.json"


def write_report(report: SourceMapReport, output_dir: Path) -> Path:
    """
    Write sourcemap_report.json into *output_dir*.

    Creates *output_dir* if it does not exist.
    Returns the path of the written file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    report_path = output_dir / REPORT_FILENAME
    report_path.write_text(
        json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    return report_path

"""CSV and JSON downloads for an extracted color palette."""

from __future__ import annotations

import csv
import io
import json

from models.color_report import ColorReport


CSV_HEADER = ("hex", "percent", "count")


def palette_csv(report: ColorReport) -> str:
    """
    Palette as CSV text with a 'hex,percent,count' header.

    Uses the top swatches, or every bucket when the top list is empty.
    """
    rows = report.top or report.all_grouped
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for swatch in rows:
        writer.writerow((swatch.hex, f"{swatch.percent:.2f}", swatch.count))
    return output.getvalue().rstrip("\n")


def palette_json(report: ColorReport) -> str:
    return json.dumps(report.to_dict(), indent=2)

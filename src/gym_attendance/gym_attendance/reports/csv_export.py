from __future__ import annotations

import csv
import io

from .service import ReportData


def report_to_csv(data: ReportData) -> bytes:
    """Serialize report rows as CSV (UTF-8 with BOM so spreadsheets detect the encoding)."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=data.fieldnames, extrasaction="ignore")
    writer.writeheader()
    for row in data.rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")

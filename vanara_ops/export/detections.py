"""Detection history export: flat JSON array and CSV table.

CSV layout::

    Timestamp,Detection Type,Confidence,Source
    2025-01-01T00:00:00Z,Motion,0.62,LIDAR

Confidence is written with two decimals.  A field containing a comma,
quote or newline is wrapped in quotes with embedded quotes doubled.
Rows are joined with ``\\n`` and there is no trailing newline.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Iterable

from vanara_ops.domain.detection import Detection
from vanara_ops.foundation.clock import iso_utc

CSV_HEADER = ("Timestamp", "Detection Type", "Confidence", "Source")


def detections_to_json(detections: Iterable[Detection], indent: int | None = 2) -> str:
    return json.dumps([d.to_record() for d in detections], indent=indent, ensure_ascii=False)


def detections_to_csv(detections: Iterable[Detection]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for d in detections:
        writer.writerow((iso_utc(d.timestamp), d.type, f"{d.confidence:.2f}", d.source))
    text = buf.getvalue()
    return text[:-1] if text.endswith("\n") else text

"""Tests for detection history export."""

import json
from datetime import datetime, timezone

from vanara_ops.domain.detection import Detection
from vanara_ops.export.detections import detections_to_csv, detections_to_json

TS = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _d(type: str = "Motion", confidence: float = 0.62, source: str = "LIDAR") -> Detection:
    return Detection(timestamp=TS, type=type, confidence=confidence, source=source)


class TestCsv:
    def test_exact_layout(self) -> None:
        assert detections_to_csv([_d()]) == (
            "Timestamp,Detection Type,Confidence,Source\n"
            "2025-01-01T00:00:00Z,Motion,0.62,LIDAR"
        )

    def test_empty_history_is_header_only(self) -> None:
        assert detections_to_csv([]) == "Timestamp,Detection Type,Confidence,Source"

    def test_confidence_has_two_decimals(self) -> None:
        assert detections_to_csv([_d(confidence=0.9)]).endswith(",0.90,LIDAR")

    def test_fields_with_commas_and_quotes_are_escaped(self) -> None:
        row = detections_to_csv([_d(source='Cam "A", north')]).split("\n")[1]
        assert row == '2025-01-01T00:00:00Z,Motion,0.62,"Cam ""A"", north"'

    def test_rows_keep_history_order(self) -> None:
        rows = detections_to_csv([_d("Thermal"), _d("Motion")]).split("\n")[1:]
        assert [r.split(",")[1] for r in rows] == ["Thermal", "Motion"]


class TestJson:
    def test_flat_records(self) -> None:
        data = json.loads(detections_to_json([_d(), _d("Thermal", 0.71, "IR-Cam")]))
        assert data == [
            {"timestamp": "2025-01-01T00:00:00Z", "type": "Motion", "confidence": 0.62, "source": "LIDAR"},
            {"timestamp": "2025-01-01T00:00:00Z", "type": "Thermal", "confidence": 0.71, "source": "IR-Cam"},
        ]

    def test_empty(self) -> None:
        assert json.loads(detections_to_json([])) == []

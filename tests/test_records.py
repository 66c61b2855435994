"""Tests for resulttriage.records (JSON/YAML record loading)."""

import json
import logging
from datetime import datetime, timezone

import pytest

from resulttriage.errors import RecordFormatError
from resulttriage.models import ResultKind, ResultStatus
from resulttriage.records import load_records, record_from_dict

CAMEL_LAB = {
    "testId": "BLT-2025-0042",
    "type": "lab",
    "patientId": "P-0193",
    "status": "completed",
    "category": "Hematology",
    "requestedDate": "2025-06-02T08:15:00Z",
    "completedDate": "2025-06-03T10:40:00Z",
    "results": '{"Hemoglobin (HB)": {"Hemoglobin Level": "5.5"}}',
}


class TestRecordFromDict:
    def test_camel_case_lab(self):
        record = record_from_dict(CAMEL_LAB)
        assert record.record_id == "BLT-2025-0042"
        assert record.kind == ResultKind.LAB
        assert record.status == ResultStatus.COMPLETED
        assert record.patient_id == "P-0193"
        assert record.exam_type == "Hematology"
        assert record.requested_at == datetime(2025, 6, 2, 8, 15, tzinfo=timezone.utc)
        assert record.panels == CAMEL_LAB["results"]

    def test_snake_case_imaging(self):
        record = record_from_dict({
            "record_id": "US-7",
            "kind": "ultrasound",
            "status": "Pending",
            "requested_at": "2025-06-01",
            "findings": None,
        })
        assert record.kind == ResultKind.ULTRASOUND
        assert record.status == ResultStatus.PENDING
        assert record.panels is None
        assert record.completed_at is None

    def test_exam_id(self):
        record = record_from_dict({"examId": "XR-3", "type": "xray", "status": "completed",
                                   "examType": "Chest X-Ray", "impression": "Normal study"})
        assert record.record_id == "XR-3"
        assert record.exam_type == "Chest X-Ray"
        assert record.impression == "Normal study"

    def test_imaging_results_field_ignored(self):
        record = record_from_dict({"examId": "XR-4", "type": "xray", "status": "completed",
                                   "results": "{}"})
        assert record.panels is None

    @pytest.mark.parametrize("data", [
        {"testId": "X", "type": "mri", "status": "completed"},
        {"testId": "X", "type": "lab", "status": "cancelled"},
        {"testId": "X", "status": "completed"},
        "not a mapping",
    ])
    def test_unusable_records_skipped(self, data, caplog):
        with caplog.at_level(logging.WARNING, logger="resulttriage.records"):
            assert record_from_dict(data) is None
        assert "skipped" in caplog.text

    def test_unparseable_date_kept_as_none(self, caplog):
        data = dict(CAMEL_LAB, requestedDate="yesterday")
        with caplog.at_level(logging.WARNING, logger="resulttriage.records"):
            record = record_from_dict(data)
        assert record.requested_at is None
        assert "unparseable requested date" in caplog.text

    def test_completed_before_requested_logged(self, caplog):
        data = dict(CAMEL_LAB, completedDate="2025-06-01T00:00:00Z")
        with caplog.at_level(logging.WARNING, logger="resulttriage.records"):
            record = record_from_dict(data)
        assert record is not None
        assert "completed before it was requested" in caplog.text


class TestLoadRecords:
    def test_json_list(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps([CAMEL_LAB]))
        [record] = load_records(path)
        assert record.record_id == "BLT-2025-0042"

    def test_json_wrapped(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"records": [CAMEL_LAB, {"type": "mri"}]}))
        assert len(load_records(path)) == 1

    def test_yaml(self, tmp_path):
        path = tmp_path / "records.yaml"
        path.write_text(
            "- testId: BLT-1\n"
            "  type: lab\n"
            "  status: pending\n"
            "  requestedDate: 2025-06-02T08:15:00Z\n"
            "- examId: US-1\n"
            "  type: ultrasound\n"
            "  status: completed\n"
            "  requestedDate: 2025-06-01 08:00:00\n"
            "  completedDate: 2025-06-02 08:00:00\n"
            "  findings: Normal study\n"
        )
        lab, us = load_records(path)
        assert lab.status == ResultStatus.PENDING
        assert lab.requested_at == datetime(2025, 6, 2, 8, 15, tzinfo=timezone.utc)
        assert us.kind == ResultKind.ULTRASOUND
        assert us.completed_at == datetime(2025, 6, 2, 8, 0, tzinfo=timezone.utc)

    def test_yaml_panels_mapping(self, tmp_path):
        path = tmp_path / "records.yml"
        path.write_text(
            "records:\n"
            "  - record_id: BLT-9\n"
            "    kind: lab\n"
            "    status: completed\n"
            "    panels:\n"
            "      Urine Analysis:\n"
            "        Protein: '++'\n"
        )
        [record] = load_records(path)
        assert record.panels == {"Urine Analysis": {"Protein": "++"}}

    def test_empty_file_list(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text("[]")
        assert load_records(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(RecordFormatError):
            load_records(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text("[{")
        with pytest.raises(RecordFormatError):
            load_records(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "records.yaml"
        path.write_text("- a: [1, 2\n")
        with pytest.raises(RecordFormatError):
            load_records(path)

    def test_scalar_top_level(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text('"records"')
        with pytest.raises(RecordFormatError):
            load_records(path)

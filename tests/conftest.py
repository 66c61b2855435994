"""Shared test fixtures for resulttriage tests."""

from datetime import datetime, timedelta, timezone

import pytest

from resulttriage.config import TriageConfig
from resulttriage.models import ResultKind, ResultRecord, ResultStatus

NOW = datetime(2025, 6, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed evaluation time so aging is deterministic."""
    return NOW


@pytest.fixture
def sla_days():
    return {"lab": 3, "xray": 5, "ultrasound": 7}


@pytest.fixture
def normal_phrases():
    return {
        "xray": ["Normal study", "No abnormality detected"],
        "ultrasound": ["Normal study"],
    }


@pytest.fixture
def triage_config(sla_days, normal_phrases):
    return TriageConfig(sla_days=sla_days, normal_phrases=normal_phrases)


@pytest.fixture
def make_lab():
    """Factory for lab records; ``days_ago`` sets requested_at relative to NOW."""

    def _make(panels=None, status="completed", days_ago=2.0, tat_days=1.0, record_id="BLT-1"):
        status = ResultStatus(status)
        requested = NOW - timedelta(days=days_ago)
        completed = requested + timedelta(days=tat_days) if status == ResultStatus.COMPLETED else None
        return ResultRecord(
            record_id=record_id,
            kind=ResultKind.LAB,
            status=status,
            patient_id="P-001",
            requested_at=requested,
            completed_at=completed,
            panels=panels,
            exam_type="Hematology",
        )

    return _make


@pytest.fixture
def make_imaging():
    """Factory for xray/ultrasound records."""

    def _make(kind="xray", findings=None, impression=None, status="completed",
              days_ago=2.0, tat_days=1.0, record_id="XR-1"):
        status = ResultStatus(status)
        requested = NOW - timedelta(days=days_ago)
        completed = requested + timedelta(days=tat_days) if status == ResultStatus.COMPLETED else None
        return ResultRecord(
            record_id=record_id,
            kind=ResultKind(kind),
            status=status,
            patient_id="P-002",
            requested_at=requested,
            completed_at=completed,
            findings=findings,
            impression=impression,
            exam_type="Chest X-Ray" if kind == "xray" else "Obstetric",
        )

    return _make


@pytest.fixture
def sample_records(make_lab, make_imaging):
    """A small mixed batch covering every kind and status."""
    return [
        make_lab({"Hemoglobin (HB)": {"Hemoglobin Level": "5.5"}}, record_id="BLT-1", tat_days=1.0),
        make_lab({"Urine Analysis": {"Protein": "++"}}, record_id="BLT-2", tat_days=2.0),
        make_lab({"Complete Blood Count (CBC)": {"Hemoglobin": "13.5"}}, record_id="BLT-3", tat_days=3.0),
        make_lab(status="pending", days_ago=5, record_id="BLT-4"),
        make_lab(status="pending", days_ago=1, record_id="BLT-5"),
        make_imaging(findings="Normal study", impression="Normal study", record_id="XR-1", tat_days=2.0),
        make_imaging(findings="Right lower lobe consolidation", impression="Pneumonia",
                     record_id="XR-2", tat_days=4.0),
        make_imaging(kind="ultrasound", status="pending", days_ago=8, record_id="US-1"),
    ]

"""Loader for result records exported as JSON or YAML.

Accepts either a top-level list of records or a mapping with a ``records``
list. Each record may use snake_case keys or the camelCase keys of the
clinic application's export:

    - testId: BLT-2025-0042       # or examId / record_id
      type: lab                   # lab | xray | ultrasound
      patientId: P-0193
      status: completed
      requestedDate: 2025-06-02T08:15:00Z
      completedDate: 2025-06-03T10:40:00Z
      results: '{"Complete Blood Count": {"Hemoglobin": "7.5"}}'

Records that cannot be triaged (unknown kind or status, not a mapping) are
skipped with a warning; inconsistent timestamps are kept and logged so the
analyses can decide what to exclude.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

try:
    import yaml
except ImportError as e:
    raise ImportError(
        "PyYAML is required for loading records. Install with: pip install pyyaml"
    ) from e

from resulttriage.core.utils import coerce_datetime
from resulttriage.errors import RecordFormatError
from resulttriage.models import ResultKind, ResultRecord, ResultStatus

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

# Target field -> accepted source keys, first match wins
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "record_id": ("record_id", "testId", "examId", "id"),
    "kind": ("kind", "type"),
    "status": ("status",),
    "patient_id": ("patient_id", "patientId"),
    "requested_at": ("requested_at", "requestedDate"),
    "completed_at": ("completed_at", "completedDate"),
    "panels": ("panels", "results"),
    "findings": ("findings",),
    "impression": ("impression",),
    "exam_type": ("exam_type", "examType", "category", "tests"),
}


def load_records(path: str | Path) -> list[ResultRecord]:
    """Read a records file and return the records that can be triaged.

    The format is chosen by suffix: .yaml/.yml is YAML, anything else JSON.

    Raises RecordFormatError if the file cannot be read or parsed, or its
    top level is neither a list nor a mapping with a ``records`` list.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RecordFormatError(f"Cannot read {path}: {e.strerror or e}") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            raw = yaml.safe_load(text)
        else:
            raw = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RecordFormatError(f"Cannot parse {path}: {e}") from e

    if isinstance(raw, Mapping):
        raw = raw.get("records")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise RecordFormatError(f"{path}: expected a list of records")
    return parse_records(raw, source=str(path))


def parse_records(items: list, source: str = "<records>") -> list[ResultRecord]:
    records = []
    for index, item in enumerate(items):
        record = record_from_dict(item, label=f"{source}[{index}]")
        if record is not None:
            records.append(record)
    logger.debug("loaded %d of %d records from %s", len(records), len(items), source)
    return records


def record_from_dict(data: Any, label: str = "record") -> ResultRecord | None:
    """Build a ResultRecord from one exported mapping, or None if it is unusable."""
    if not isinstance(data, Mapping):
        logger.warning("%s: skipped, not a mapping", label)
        return None

    values = {name: _first(data, keys) for name, keys in FIELD_KEYS.items()}
    record_id = str(values["record_id"]) if values["record_id"] is not None else label

    kind = _parse_enum(ResultKind, values["kind"])
    if kind is None:
        logger.warning("%s: skipped, unknown result kind %r", record_id, values["kind"])
        return None
    status = _parse_enum(ResultStatus, values["status"])
    if status is None:
        logger.warning("%s: skipped, unknown status %r", record_id, values["status"])
        return None

    requested_at = _parse_timestamp(values["requested_at"], record_id, "requested")
    completed_at = _parse_timestamp(values["completed_at"], record_id, "completed")
    if status == ResultStatus.COMPLETED and completed_at is None:
        logger.warning("%s: completed without a completion date", record_id)
    if status == ResultStatus.PENDING and completed_at is not None:
        logger.warning("%s: pending but has a completion date", record_id)
    if requested_at and completed_at and completed_at < requested_at:
        logger.warning("%s: completed before it was requested", record_id)

    return ResultRecord(
        record_id=record_id,
        kind=kind,
        status=status,
        patient_id=str(values["patient_id"] or ""),
        requested_at=requested_at,
        completed_at=completed_at,
        panels=values["panels"] if kind == ResultKind.LAB else None,
        findings=values["findings"],
        impression=values["impression"],
        exam_type=str(values["exam_type"] or ""),
    )


def _first(data: Mapping, keys: tuple[str, ...]):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _parse_enum(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return None


def _parse_timestamp(value, record_id: str, what: str):
    if value is None or value == "":
        return None
    dt = coerce_datetime(value)
    if dt is None:
        logger.warning("%s: unparseable %s date %r", record_id, what, value)
    return dt

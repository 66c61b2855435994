"""Data model for diagnostic result records and the values derived from them.

ResultRecord is the input snapshot handed over by the records subsystem.
Finding, Classification, AgingInfo, TatSample and TatSummary are derived on
demand and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Mapping

NO_DATA = "no data"


class ResultKind(str, Enum):
    """Diagnostic department that owns a result."""

    LAB = "lab"
    XRAY = "xray"
    ULTRASOUND = "ultrasound"


class ResultStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Severity(IntEnum):
    """Clinical urgency of a finding, ordered NONE < ABNORMAL < CRITICAL."""

    NONE = 0
    ABNORMAL = 1
    CRITICAL = 2

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass
class ResultRecord:
    """One lab test order or imaging exam, as retrieved from the host."""

    record_id: str
    kind: ResultKind
    status: ResultStatus
    patient_id: str = ""
    requested_at: datetime | None = None
    completed_at: datetime | None = None  # present iff status is completed
    # Lab only: panel -> field -> raw value, or the serialized JSON blob as stored
    panels: Mapping[str, Any] | str | None = None
    # Imaging only
    findings: str | None = None
    impression: str | None = None
    exam_type: str = ""  # e.g. "Chest X-Ray", "Obstetric"

    @property
    def is_pending(self) -> bool:
        return self.status == ResultStatus.PENDING

    @property
    def is_completed(self) -> bool:
        return self.status == ResultStatus.COMPLETED


@dataclass(frozen=True)
class Finding:
    """One rule match for one field (or field combination) of a lab panel."""

    panel: str
    field: str
    severity: Severity
    message: str

    def to_dict(self) -> dict:
        return {
            "panel": self.panel,
            "field": self.field,
            "severity": self.severity.label,
            "message": self.message,
        }


@dataclass(frozen=True)
class Classification:
    """Overall severity of one record plus the findings that produced it."""

    overall_severity: Severity = Severity.NONE
    findings: tuple[Finding, ...] = ()

    @property
    def is_abnormal(self) -> bool:
        return self.overall_severity >= Severity.ABNORMAL

    @property
    def is_critical(self) -> bool:
        return self.overall_severity == Severity.CRITICAL

    def to_dict(self) -> dict:
        return {
            "overall_severity": self.overall_severity.label,
            "is_abnormal": self.is_abnormal,
            "is_critical": self.is_critical,
            "findings": [f.to_dict() for f in self.findings],
        }


@dataclass(frozen=True)
class AgingInfo:
    """How long a pending order has been waiting, and whether it breached SLA."""

    days_old: int
    is_overdue: bool
    sla_days: int | None = None  # None when no SLA is configured for the kind


@dataclass(frozen=True)
class TatSample:
    """Turnaround time of one completed record, in fractional days."""

    kind: ResultKind
    days: float


@dataclass
class TatSummary:
    """Mean turnaround per kind over a batch of completed records.

    ``means`` maps every kind to its mean rounded to one decimal, or to
    NO_DATA when the batch held no usable sample for that kind.
    """

    means: dict[ResultKind, float | str] = field(default_factory=dict)
    counts: dict[ResultKind, int] = field(default_factory=dict)
    overall: float | str = NO_DATA

    def mean(self, kind: ResultKind | str) -> float | str:
        return self.means.get(ResultKind(kind), NO_DATA)

    def display(self, kind: ResultKind | str) -> str:
        value = self.mean(kind)
        if value == NO_DATA:
            return NO_DATA
        return f"{value:.1f} days"

    def to_dict(self) -> dict:
        return {
            "means": {k.value: v for k, v in self.means.items()},
            "counts": {k.value: v for k, v in self.counts.items()},
            "overall": self.overall,
        }

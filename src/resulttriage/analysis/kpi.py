"""Dashboard counts over a batch of result records."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping

from resulttriage.analysis.aging import compute_aging
from resulttriage.models import ResultKind, ResultRecord
from resulttriage.severity import classify_record


def results_kpi(
    records: Iterable[ResultRecord],
    now: datetime,
    sla_days: Mapping[str, int],
    normal_phrases: Mapping[str, Iterable[str]] | None = None,
) -> dict:
    """Count records by kind, status, severity and overdue state.

    Returns dict with:
    - total: Number of records
    - lab / xray / ultrasound: Records per kind
    - completed / pending: Records per status
    - overdue: Pending records past their SLA
    - abnormal: Completed records flagged abnormal (critical included)
    - critical: Completed records flagged critical
    """
    counts = {
        "total": 0,
        **{kind.value: 0 for kind in ResultKind},
        "completed": 0,
        "pending": 0,
        "overdue": 0,
        "abnormal": 0,
        "critical": 0,
    }
    for record in records:
        counts["total"] += 1
        counts[ResultKind(record.kind).value] += 1
        if record.is_pending:
            counts["pending"] += 1
            aging = compute_aging(record, now, sla_days)
            if aging is not None and aging.is_overdue:
                counts["overdue"] += 1
        elif record.is_completed:
            counts["completed"] += 1
            classification = classify_record(record, normal_phrases)
            if classification.is_abnormal:
                counts["abnormal"] += 1
            if classification.is_critical:
                counts["critical"] += 1
    return counts

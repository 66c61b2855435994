"""Export triaged records as CSV or as a markdown worklist.

The CSV carries one row per record with the derived flags (severity, key
finding, aging, turnaround) next to the identifying fields, for loading
into a spreadsheet. The markdown worklist is what the front desk prints:
counts, overdue orders oldest first, then abnormal results most severe
first.
"""

from __future__ import annotations

import csv
from datetime import datetime
from typing import Iterable

from resulttriage.analysis.aging import compute_aging, overdue_records
from resulttriage.analysis.kpi import results_kpi
from resulttriage.analysis.turnaround import summarize_tat, tat_sample
from resulttriage.config import TriageConfig
from resulttriage.formatters.markdown import MarkdownWriter
from resulttriage.models import ResultKind, ResultRecord, ResultStatus
from resulttriage.severity import classify_record, key_finding

CSV_COLUMNS = [
    "record_id",
    "kind",
    "patient_id",
    "exam_type",
    "status",
    "requested_at",
    "completed_at",
    "severity",
    "is_abnormal",
    "is_critical",
    "key_finding",
    "days_old",
    "is_overdue",
    "tat_days",
]


def _iso(value) -> str:
    return value.isoformat() if isinstance(value, datetime) else (value or "")


def triage_row(record: ResultRecord, now: datetime, config: TriageConfig) -> dict:
    """Flatten one record and its derived flags into a CSV row."""
    classification = classify_record(record, config.normal_phrases)
    aging = compute_aging(record, now, config.sla_days)
    sample = tat_sample(record)
    return {
        "record_id": record.record_id,
        "kind": ResultKind(record.kind).value,
        "patient_id": record.patient_id,
        "exam_type": record.exam_type,
        "status": ResultStatus(record.status).value,
        "requested_at": _iso(record.requested_at),
        "completed_at": _iso(record.completed_at),
        "severity": classification.overall_severity.label,
        "is_abnormal": classification.is_abnormal,
        "is_critical": classification.is_critical,
        "key_finding": key_finding(classification) or "",
        "days_old": aging.days_old if aging else "",
        "is_overdue": aging.is_overdue if aging else False,
        "tat_days": f"{sample.days:.1f}" if sample else "",
    }


def export_csv(
    records: Iterable[ResultRecord],
    now: datetime,
    config: TriageConfig,
    output_path: str = "resulttriage_export.csv",
) -> str:
    """Write one CSV row per record. Returns the output file path."""
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow(triage_row(record, now, config))
    return output_path


def _build_worklist(
    records: list[ResultRecord], now: datetime, config: TriageConfig
) -> MarkdownWriter:
    md = MarkdownWriter()
    md.heading("Results Triage Worklist", level=1)
    md.w(f"*Generated: {now.isoformat(timespec='minutes')}*")
    if config.source:
        md.w(f"*Configuration: {config.source}*")
    md.w()

    kpi = results_kpi(records, now, config.sla_days, config.normal_phrases)
    md.heading("Overview")
    for key, count in kpi.items():
        md.bullet(key.replace("_", " ").title(), count)
    md.w()

    tat = summarize_tat(records)
    md.heading("Average Turnaround")
    md.table(
        ["Department", "Average", "Samples"],
        [[kind.value, tat.display(kind), tat.counts.get(kind, 0)] for kind in ResultKind],
    )

    md.separator()
    md.heading("Overdue Orders")
    overdue = overdue_records(records, now, config.sla_days)
    if overdue:
        md.table(
            ["Record", "Kind", "Patient", "Exam", "Requested", "Days Old", "SLA"],
            [
                [
                    r.record_id,
                    ResultKind(r.kind).value,
                    r.patient_id,
                    r.exam_type,
                    _iso(r.requested_at),
                    a.days_old,
                    a.sla_days,
                ]
                for r, a in overdue
            ],
        )
    else:
        md.w("*No overdue orders.*")
        md.w()

    md.separator()
    md.heading("Abnormal Results")
    flagged = []
    for record in records:
        classification = classify_record(record, config.normal_phrases)
        if classification.is_abnormal:
            flagged.append((record, classification))
    flagged.sort(key=lambda pair: -pair[1].overall_severity)
    if flagged:
        md.table(
            ["Record", "Kind", "Patient", "Severity", "Key Finding"],
            [
                [
                    r.record_id,
                    ResultKind(r.kind).value,
                    r.patient_id,
                    c.overall_severity.label.upper(),
                    key_finding(c) or "Report flagged for review",
                ]
                for r, c in flagged
            ],
        )
    else:
        md.w("*No abnormal results.*")
        md.w()

    return md


def render_worklist(records: Iterable[ResultRecord], now: datetime, config: TriageConfig) -> str:
    """Build the markdown worklist for a batch of records."""
    return _build_worklist(list(records), now, config).text()


def export_markdown(
    records: Iterable[ResultRecord],
    now: datetime,
    config: TriageConfig,
    output_path: str = "resulttriage_worklist.md",
) -> str:
    """Write the markdown worklist. Returns the output file path."""
    _build_worklist(list(records), now, config).write_to_file(output_path)
    return output_path

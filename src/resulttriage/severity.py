"""Severity aggregation: findings -> one Classification per record.

``classify_record`` is the entry point used by the KPI rollup, the exports
and the CLI. It is a pure function of the record (and the imaging phrase
catalog), so it is recomputed whenever a record is shown.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from resulttriage.imaging import classify_imaging_text
from resulttriage.models import Classification, Finding, ResultKind, ResultRecord, Severity
from resulttriage.rules.catalog import PANEL_CATALOG, PanelRules
from resulttriage.rules.evaluator import evaluate_payload


def aggregate_findings(findings: Iterable[Finding]) -> Classification:
    """Overall severity is the most severe finding; no findings means NONE."""
    findings = tuple(findings)
    overall = max((f.severity for f in findings), default=Severity.NONE)
    return Classification(overall_severity=overall, findings=findings)


def aggregate_imaging(is_abnormal: bool) -> Classification:
    """Imaging tops out at ABNORMAL: narrative text has no critical tier."""
    return Classification(overall_severity=Severity.ABNORMAL if is_abnormal else Severity.NONE)


def classify_record(
    record: ResultRecord,
    normal_phrases: Mapping[str, Iterable[str]] | None = None,
    catalog: Mapping[str, PanelRules] = PANEL_CATALOG,
) -> Classification:
    """Classify one record.

    Args:
        record: The result snapshot.
        normal_phrases: Imaging normal-report phrases keyed by kind value
            ("xray", "ultrasound"). Ignored for lab records.
        catalog: Panel rule catalog for lab records.

    Pending records are always NONE: severity is reviewed once results
    are final.
    """
    if not record.is_completed:
        return Classification()

    if record.kind == ResultKind.LAB:
        return aggregate_findings(evaluate_payload(record.panels, catalog))

    phrases = (normal_phrases or {}).get(ResultKind(record.kind).value, ())
    return aggregate_imaging(classify_imaging_text(record.findings, record.impression, phrases))


def key_finding(classification: Classification) -> str | None:
    """Message of the first finding at the record's overall severity."""
    for f in classification.findings:
        if f.severity == classification.overall_severity and f.severity > Severity.NONE:
            return f.message
    return None

"""Narrative classifier for X-ray and ultrasound reports.

Imaging reports carry free text only, so the answer is a plain
abnormal/normal flag. A report is normal when every non-empty part
(findings, impression) is one of the clinic's configured normal-report
phrases; any other text is flagged for review. Empty reports are never
flagged.

The phrase list comes from configuration (``[imaging.normal_phrases]``).
With no phrases configured every non-empty report is flagged.
"""

from __future__ import annotations

from typing import Iterable

from resulttriage.core.utils import normalize_text


def classify_imaging_text(
    findings: str | None,
    impression: str | None,
    normal_phrases: Iterable[str] = (),
) -> bool:
    """Return True if the report text should be flagged abnormal."""
    parts = [normalize_text(t) for t in (findings, impression)]
    parts = [p for p in parts if p]
    if not parts:
        return False
    normal = {normalize_text(p) for p in normal_phrases}
    normal.discard("")
    return not all(p in normal for p in parts)

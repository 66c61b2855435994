"""Turnaround time (TAT) statistics over completed results.

TAT is the elapsed time from request to completion in fractional days.
Records that cannot yield a trustworthy sample (not completed, missing or
unparseable dates, completion before request) are left out rather than
counted as zero.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from resulttriage.analysis.aging import SECONDS_PER_DAY
from resulttriage.core.utils import coerce_datetime
from resulttriage.models import NO_DATA, ResultKind, ResultRecord, TatSample, TatSummary


def tat_sample(record: ResultRecord) -> TatSample | None:
    """Turnaround sample for one record, or None if it must be excluded."""
    if not record.is_completed:
        return None
    requested = coerce_datetime(record.requested_at)
    completed = coerce_datetime(record.completed_at)
    if requested is None or completed is None or completed < requested:
        return None
    days = (completed - requested).total_seconds() / SECONDS_PER_DAY
    return TatSample(kind=ResultKind(record.kind), days=days)


def tat_samples(records: Iterable[ResultRecord]) -> list[TatSample]:
    return [s for s in (tat_sample(r) for r in records) if s is not None]


def _mean(values: list[float]) -> float | str:
    if not values:
        return NO_DATA
    mean = sum(values) / len(values)
    # ties round up: 2.25 -> 2.3
    return float(Decimal(str(mean)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize_tat(records: Iterable[ResultRecord]) -> TatSummary:
    """Mean TAT per kind, rounded to one decimal.

    Every kind appears in the summary; a kind with no usable samples reports
    NO_DATA rather than 0.0.
    """
    by_kind: dict[ResultKind, list[float]] = {kind: [] for kind in ResultKind}
    for sample in tat_samples(records):
        by_kind[sample.kind].append(sample.days)

    everything = [d for days in by_kind.values() for d in days]
    return TatSummary(
        means={kind: _mean(days) for kind, days in by_kind.items()},
        counts={kind: len(days) for kind, days in by_kind.items()},
        overall=_mean(everything),
    )

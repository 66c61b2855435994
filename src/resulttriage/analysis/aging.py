"""Pending-order aging against per-department SLA days."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Mapping

from resulttriage.core.utils import coerce_datetime
from resulttriage.models import AgingInfo, ResultKind, ResultRecord

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def days_between(start, end) -> int:
    """Whole days elapsed from ``start`` to ``end``, floored, never negative.

    Unparseable or missing timestamps count as zero days.
    """
    start_dt = coerce_datetime(start)
    end_dt = coerce_datetime(end)
    if start_dt is None or end_dt is None:
        return 0
    elapsed = (end_dt - start_dt).total_seconds()
    if elapsed <= 0:
        return 0
    return math.floor(elapsed / SECONDS_PER_DAY)


def compute_aging(
    record: ResultRecord,
    now: datetime,
    sla_days: Mapping[str, int],
) -> AgingInfo | None:
    """Aging of a pending record; None for records that are not pending.

    A record is overdue when it is strictly older than its kind's SLA, so an
    order requested exactly SLA days ago is still on time. Kinds without a
    configured SLA are never overdue. A pending record that already carries a
    completion date is inconsistent and gets no aging either.
    """
    if not record.is_pending:
        return None
    if record.completed_at is not None:
        logger.debug("%s: pending with a completion date; excluded from aging", record.record_id)
        return None

    kind = ResultKind(record.kind).value
    days_old = days_between(record.requested_at, now)
    sla = sla_days.get(kind)
    if sla is None:
        logger.warning("no SLA days configured for %s results; not flagging overdue", kind)
        return AgingInfo(days_old=days_old, is_overdue=False, sla_days=None)
    return AgingInfo(days_old=days_old, is_overdue=days_old > sla, sla_days=sla)


def overdue_records(
    records: Iterable[ResultRecord],
    now: datetime,
    sla_days: Mapping[str, int],
) -> list[tuple[ResultRecord, AgingInfo]]:
    """Pending records past their SLA, oldest first."""
    overdue = []
    for record in records:
        aging = compute_aging(record, now, sla_days)
        if aging is not None and aging.is_overdue:
            overdue.append((record, aging))
    overdue.sort(key=lambda pair: -pair[1].days_old)
    return overdue

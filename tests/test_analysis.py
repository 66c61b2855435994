"""Tests for resulttriage.analysis: aging, turnaround and KPI counts."""

import logging
from datetime import datetime, timedelta

import pytest

from resulttriage.analysis.aging import compute_aging, days_between, overdue_records
from resulttriage.analysis.kpi import results_kpi
from resulttriage.analysis.turnaround import summarize_tat, tat_sample
from resulttriage.models import NO_DATA, AgingInfo, ResultKind, ResultRecord, ResultStatus


class TestDaysBetween:
    def test_floors_partial_days(self, now):
        assert days_between(now - timedelta(days=2, hours=23), now) == 2

    def test_future_is_zero(self, now):
        assert days_between(now + timedelta(days=3), now) == 0

    def test_missing_is_zero(self, now):
        assert days_between(None, now) == 0
        assert days_between("not a date", now) == 0

    def test_naive_taken_as_utc(self, now):
        naive = datetime(2025, 6, 5, 9, 0)
        assert days_between(naive, now) == 5

    def test_iso_strings(self):
        assert days_between("2025-06-01T00:00:00Z", "2025-06-04T12:00:00Z") == 3


class TestComputeAging:
    def test_concrete_overdue_scenario(self, make_lab, now):
        record = make_lab(status="pending", days_ago=10)
        aging = compute_aging(record, now, {"lab": 7})
        assert aging == AgingInfo(days_old=10, is_overdue=True, sla_days=7)

    def test_exactly_at_sla_is_not_overdue(self, make_lab, now):
        aging = compute_aging(make_lab(status="pending", days_ago=3), now, {"lab": 3})
        assert aging.days_old == 3
        assert not aging.is_overdue

    def test_one_day_past_sla_is_overdue(self, make_lab, now):
        aging = compute_aging(make_lab(status="pending", days_ago=4), now, {"lab": 3})
        assert aging.is_overdue

    def test_completed_record_has_no_aging(self, make_lab, now, sla_days):
        assert compute_aging(make_lab(days_ago=30), now, sla_days) is None

    def test_future_request_clamped(self, make_lab, now, sla_days):
        aging = compute_aging(make_lab(status="pending", days_ago=-2), now, sla_days)
        assert aging.days_old == 0
        assert not aging.is_overdue

    def test_missing_requested_date(self, now, sla_days):
        record = ResultRecord(record_id="BLT-9", kind=ResultKind.LAB, status=ResultStatus.PENDING)
        aging = compute_aging(record, now, sla_days)
        assert aging.days_old == 0
        assert not aging.is_overdue

    def test_pending_with_completion_date_has_no_aging(self, make_lab, now, sla_days):
        record = make_lab(status="pending", days_ago=10)
        record.completed_at = now - timedelta(days=1)
        assert compute_aging(record, now, sla_days) is None

    def test_kind_without_sla_never_overdue(self, make_imaging, now, caplog):
        record = make_imaging(kind="ultrasound", status="pending", days_ago=90)
        with caplog.at_level(logging.WARNING, logger="resulttriage.analysis.aging"):
            aging = compute_aging(record, now, {"lab": 3})
        assert aging == AgingInfo(days_old=90, is_overdue=False, sla_days=None)
        assert "ultrasound" in caplog.text

    def test_zero_sla(self, make_lab, now):
        assert compute_aging(make_lab(status="pending", days_ago=1), now, {"lab": 0}).is_overdue
        assert not compute_aging(make_lab(status="pending", days_ago=0.5), now, {"lab": 0}).is_overdue


class TestOverdueRecords:
    def test_oldest_first(self, sample_records, now, sla_days):
        overdue = overdue_records(sample_records, now, sla_days)
        assert [r.record_id for r, _ in overdue] == ["US-1", "BLT-4"]
        assert [a.days_old for _, a in overdue] == [8, 5]

    def test_none_overdue(self, make_lab, now, sla_days):
        assert overdue_records([make_lab(status="pending", days_ago=1)], now, sla_days) == []


class TestTatSample:
    def test_completed(self, make_imaging):
        sample = tat_sample(make_imaging(tat_days=2.5))
        assert sample.kind == ResultKind.XRAY
        assert sample.days == pytest.approx(2.5)

    def test_pending_excluded(self, make_lab):
        assert tat_sample(make_lab(status="pending")) is None

    def test_missing_completion_excluded(self, make_lab):
        record = make_lab()
        record.completed_at = None
        assert tat_sample(record) is None

    def test_completed_before_requested_excluded(self, make_lab):
        record = make_lab()
        record.completed_at = record.requested_at - timedelta(hours=1)
        assert tat_sample(record) is None

    def test_string_dates(self):
        record = ResultRecord(
            record_id="XR-7",
            kind=ResultKind.XRAY,
            status=ResultStatus.COMPLETED,
            requested_at="2025-06-01 08:00:00",
            completed_at="2025-06-02T20:00:00Z",
        )
        assert tat_sample(record).days == pytest.approx(1.5)


class TestSummarizeTat:
    def test_concrete_xray_mean(self, make_imaging):
        records = [make_imaging(tat_days=2, record_id="XR-1"), make_imaging(tat_days=4, record_id="XR-2")]
        summary = summarize_tat(records)
        assert summary.mean(ResultKind.XRAY) == 3.0
        assert summary.display("xray") == "3.0 days"

    def test_no_data_not_zero(self):
        summary = summarize_tat([])
        for kind in ResultKind:
            assert summary.mean(kind) == NO_DATA
            assert summary.display(kind) == NO_DATA
            assert summary.counts[kind] == 0
        assert summary.overall == NO_DATA

    def test_rounded_to_one_decimal(self, make_lab):
        records = [make_lab(tat_days=1.0), make_lab(tat_days=1.0), make_lab(tat_days=2.0)]
        assert summarize_tat(records).mean("lab") == 1.3

    def test_ties_round_up(self, make_lab):
        records = [make_lab(tat_days=2.0), make_lab(tat_days=2.5)]
        summary = summarize_tat(records)
        assert summary.mean("lab") == 2.3
        assert summary.display("lab") == "2.3 days"

    def test_invalid_samples_excluded(self, make_lab):
        bad = make_lab(tat_days=10)
        bad.completed_at = bad.requested_at - timedelta(days=1)
        summary = summarize_tat([make_lab(tat_days=2), bad, make_lab(status="pending")])
        assert summary.mean("lab") == 2.0
        assert summary.counts[ResultKind.LAB] == 1

    def test_mixed_batch(self, sample_records):
        summary = summarize_tat(sample_records)
        assert summary.mean("lab") == 2.0
        assert summary.mean("xray") == 3.0
        assert summary.mean("ultrasound") == NO_DATA
        assert summary.overall == 2.4

    def test_to_dict(self, sample_records):
        d = summarize_tat(sample_records).to_dict()
        assert d["means"] == {"lab": 2.0, "xray": 3.0, "ultrasound": NO_DATA}
        assert d["counts"] == {"lab": 3, "xray": 2, "ultrasound": 0}


class TestResultsKpi:
    def test_mixed_batch(self, sample_records, now, sla_days, normal_phrases):
        kpi = results_kpi(sample_records, now, sla_days, normal_phrases)
        assert kpi == {
            "total": 8,
            "lab": 5,
            "xray": 2,
            "ultrasound": 1,
            "completed": 5,
            "pending": 3,
            "overdue": 2,
            "abnormal": 3,
            "critical": 1,
        }

    def test_empty(self, now, sla_days):
        kpi = results_kpi([], now, sla_days)
        assert all(v == 0 for v in kpi.values())

    def test_pending_critical_values_not_counted(self, make_lab, now, sla_days):
        record = make_lab({"Hemoglobin (HB)": {"Hemoglobin Level": "3.0"}}, status="pending", days_ago=0)
        kpi = results_kpi([record], now, sla_days)
        assert kpi["critical"] == 0
        assert kpi["abnormal"] == 0

    def test_without_phrases_imaging_text_is_abnormal(self, make_imaging, now, sla_days):
        kpi = results_kpi([make_imaging(findings="Normal study")], now, sla_days)
        assert kpi["abnormal"] == 1

    def test_pending_with_completion_date_not_overdue(self, make_lab, now, sla_days):
        inconsistent = make_lab(status="pending", days_ago=10, record_id="BLT-7")
        inconsistent.completed_at = now - timedelta(days=1)
        stale = make_lab(status="pending", days_ago=10, record_id="BLT-8")
        kpi = results_kpi([inconsistent, stale], now, sla_days)
        assert kpi["pending"] == 2
        assert kpi["overdue"] == 1
        assert [r.record_id for r, _ in overdue_records([inconsistent, stale], now, sla_days)] == ["BLT-8"]

    def test_accepts_iterator(self, sample_records, now, sla_days):
        assert results_kpi(iter(sample_records), now, sla_days)["total"] == 8

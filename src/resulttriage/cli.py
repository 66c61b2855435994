#!/usr/bin/env python3
"""CLI entry point for resulttriage package.

Usage:
    python -m resulttriage classify <records> [--config resulttriage.toml] [--json]
    python -m resulttriage overdue <records> [--now 2025-06-10T09:00:00Z]
    python -m resulttriage tat <records>
    python -m resulttriage kpi <records> [--json]
    python -m resulttriage export <records> --output worklist.md [--format markdown|csv]
    python -m resulttriage init-config [--output resulttriage.toml] [--force]
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone

from resulttriage.config import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="resulttriage",
        description="Flag abnormal diagnostic results and overdue orders.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # --- classify ---
    classify_parser = sub.add_parser("classify", help="Classify each record by severity")
    _add_common(classify_parser)
    classify_parser.add_argument("--json", action="store_true", help="Print classifications as JSON")

    # --- overdue ---
    overdue_parser = sub.add_parser("overdue", help="List pending orders past their SLA")
    _add_common(overdue_parser)

    # --- tat ---
    tat_parser = sub.add_parser("tat", help="Average turnaround time per department")
    _add_common(tat_parser)

    # --- kpi ---
    kpi_parser = sub.add_parser("kpi", help="Dashboard counts")
    _add_common(kpi_parser)
    kpi_parser.add_argument("--json", action="store_true", help="Print counts as JSON")

    # --- export ---
    export_parser = sub.add_parser("export", help="Export triaged records as CSV or markdown")
    _add_common(export_parser)
    export_parser.add_argument("--output", default="", help="Output file path")
    export_parser.add_argument(
        "--format", choices=["markdown", "csv"], default="markdown", help="Output format"
    )

    # --- init-config ---
    config_parser = sub.add_parser("init-config", help="Generate resulttriage.toml config")
    config_parser.add_argument("--output", default=DEFAULT_CONFIG_PATH, help="Config file output path")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "classify":
        _handle_classify(args)
    elif args.command == "overdue":
        _handle_overdue(args)
    elif args.command == "tat":
        _handle_tat(args)
    elif args.command == "kpi":
        _handle_kpi(args)
    elif args.command == "export":
        _handle_export(args)
    elif args.command == "init-config":
        _handle_init_config(args)


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("records", help="Records file (.json, .yaml or .yml)")
    p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to resulttriage.toml config file")
    p.add_argument("--now", default="", help="Evaluate as of this ISO timestamp (default: current time)")


def _parse_now(value: str) -> datetime:
    from resulttriage.core.utils import coerce_datetime

    if not value:
        return datetime.now(timezone.utc)
    now = coerce_datetime(value)
    if now is None:
        print(f"Error: --now must be an ISO timestamp, got '{value}'", file=sys.stderr)
        sys.exit(1)
    return now


def _load_inputs(args):
    """Return (records, config, now) for a records command, exiting on bad input."""
    from resulttriage.config import load_config
    from resulttriage.errors import TriageError
    from resulttriage.records import load_records

    now = _parse_now(args.now)
    try:
        config = load_config(args.config)
        records = load_records(args.records)
    except TriageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    logger.debug("evaluating %d records as of %s", len(records), now.isoformat())
    return records, config, now


def _print_table(headers: list[str], rows: list[list], max_width: int = 60) -> None:
    """Print rows as an aligned text table."""
    cells = [[str(v) if v is not None else "" for v in row] for row in rows]
    col_widths = [len(h) for h in headers]
    for row in cells:
        for i, val in enumerate(row):
            col_widths[i] = max(col_widths[i], min(len(val), max_width))

    fmt = " | ".join(f"{{:<{w}}}" for w in col_widths)
    print(fmt.format(*headers))
    print("-+-".join("-" * w for w in col_widths))
    for row in cells:
        print(fmt.format(*(v[:max_width] for v in row)))


def _handle_classify(args):
    from resulttriage.severity import classify_record, key_finding

    records, config, _ = _load_inputs(args)
    results = [(r, classify_record(r, config.normal_phrases)) for r in records]

    if args.json:
        payload = [{"record_id": r.record_id, **c.to_dict()} for r, c in results]
        print(json.dumps(payload, indent=2))
        return

    if not results:
        print("(no records)")
        return

    _print_table(
        ["Record", "Kind", "Status", "Severity", "Key Finding"],
        [
            [r.record_id, r.kind.value, r.status.value, c.overall_severity.label, key_finding(c) or ""]
            for r, c in results
        ],
    )
    flagged = sum(1 for _, c in results if c.is_abnormal)
    print(f"\n({len(results)} records, {flagged} flagged)")


def _handle_overdue(args):
    from resulttriage.analysis.aging import overdue_records

    records, config, now = _load_inputs(args)
    overdue = overdue_records(records, now, config.sla_days)
    if not overdue:
        print("No overdue orders.")
        return

    _print_table(
        ["Record", "Kind", "Patient", "Exam", "Days Old", "SLA"],
        [[r.record_id, r.kind.value, r.patient_id, r.exam_type, a.days_old, a.sla_days] for r, a in overdue],
    )
    print(f"\n({len(overdue)} overdue)")


def _handle_tat(args):
    from resulttriage.analysis.turnaround import summarize_tat
    from resulttriage.models import NO_DATA, ResultKind

    records, _, _ = _load_inputs(args)
    summary = summarize_tat(records)

    print(f"\n{'='*40}")
    print("Average Turnaround Time")
    print(f"{'='*40}")
    for kind in ResultKind:
        print(f"  {kind.value:<12} {summary.display(kind):>12}   (n={summary.counts.get(kind, 0)})")
    print(f"{'='*40}")
    overall = summary.overall if summary.overall == NO_DATA else f"{summary.overall:.1f} days"
    print(f"  {'overall':<12} {overall:>12}")


def _handle_kpi(args):
    from resulttriage.analysis.kpi import results_kpi

    records, config, now = _load_inputs(args)
    kpi = results_kpi(records, now, config.sla_days, config.normal_phrases)

    if args.json:
        print(json.dumps(kpi, indent=2))
        return

    print(f"\n{'='*30}")
    print("Results KPI")
    print(f"{'='*30}")
    for key, count in kpi.items():
        print(f"  {key:<15} {count:>6}")


def _handle_export(args):
    from resulttriage.export import export_csv, export_markdown

    records, config, now = _load_inputs(args)
    if args.format == "csv":
        output = args.output or "resulttriage_export.csv"
        path = export_csv(records, now, config, output_path=output)
    else:
        output = args.output or "resulttriage_worklist.md"
        path = export_markdown(records, now, config, output_path=output)

    print(f"Exported to {path}")


def _handle_init_config(args):
    from resulttriage.config import generate_config
    from resulttriage.errors import ConfigError

    try:
        path = generate_config(config_path=args.output, force=args.force)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Config generated at {path}")


if __name__ == "__main__":
    main()

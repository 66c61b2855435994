"""Panel rule evaluator: lab result payload -> ordered list of Findings.

Findings come out in catalog order (panel, then field, then combination
rules) so that repeated renders of the same record list them identically.
Unknown panels, unknown fields and unparseable values yield nothing.
"""

from __future__ import annotations

import json
import logging
import operator
from typing import Any, Mapping

from resulttriage.core.utils import normalize_text, parse_plus_grade, parse_titer, try_parse_numeric
from resulttriage.errors import PayloadError
from resulttriage.models import Finding, Severity
from resulttriage.rules.catalog import (
    PANEL_ALIASES,
    PANEL_CATALOG,
    AllOfRule,
    Band,
    CategoricalRule,
    MarkerGradeRule,
    MaxOfFieldsRule,
    PanelRules,
    ThresholdRule,
)

logger = logging.getLogger(__name__)

Panels = dict[str, dict[str, str]]

_COMPARE = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def parse_panels(raw: Any) -> Panels:
    """Decode a stored lab result payload into panel -> field -> value.

    ``raw`` may be the JSON text (str/bytes) as stored by the lab module or an
    already-decoded mapping. Panels whose value is not a mapping are dropped,
    scalar field values are stringified, null values dropped.

    Raises PayloadError if the payload is not decodable or not a mapping.
    """
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadError(f"payload is not UTF-8: {e}") from e
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise PayloadError(f"payload is not valid JSON: {e}") from e
    if not isinstance(raw, Mapping):
        raise PayloadError(f"payload must be an object of panels, got {type(raw).__name__}")

    panels: Panels = {}
    for panel_name, fields in raw.items():
        if not isinstance(fields, Mapping):
            continue
        values = {}
        for field_name, value in fields.items():
            if value is None or isinstance(value, (Mapping, list)):
                continue
            values[str(field_name)] = str(value)
        panels[str(panel_name)] = values
    return panels


def resolve_panel(name: str, catalog: Mapping[str, PanelRules] = PANEL_CATALOG) -> str | None:
    """Return the canonical catalog key for a payload panel name, if any."""
    if name in catalog:
        return name
    if name in PANEL_ALIASES and PANEL_ALIASES[name] in catalog:
        return PANEL_ALIASES[name]
    wanted = _key(name)
    for canonical in catalog:
        if _key(canonical) == wanted:
            return canonical
    for alias, canonical in PANEL_ALIASES.items():
        if _key(alias) == wanted and canonical in catalog:
            return canonical
    return None


def reference_range(
    panel: str, field: str, catalog: Mapping[str, PanelRules] = PANEL_CATALOG
) -> str | None:
    """Display text for a field's normal range, e.g. "12-16 g/dL"."""
    canonical = resolve_panel(panel, catalog)
    if canonical is None:
        return None
    rule = _lookup(catalog[canonical].fields, field)
    if rule is None or not rule.reference:
        return None
    return f"{rule.reference} {rule.unit}".strip()


def evaluate_panels(
    panels: Mapping[str, Mapping[str, str]],
    catalog: Mapping[str, PanelRules] = PANEL_CATALOG,
) -> list[Finding]:
    """Apply the catalog to decoded panels and return findings in catalog order."""
    # Payload panels keyed by canonical catalog name; aliases merge into one.
    by_canonical: dict[str, dict[str, str]] = {}
    for name, fields in panels.items():
        if not isinstance(fields, Mapping):
            continue
        canonical = resolve_panel(str(name), catalog)
        if canonical is None:
            logger.debug("no rules for panel %r", name)
            continue
        merged = by_canonical.setdefault(canonical, {})
        for field_name, value in fields.items():
            if value is None or isinstance(value, (Mapping, list)):
                continue
            merged.setdefault(_key(field_name), str(value))

    findings: list[Finding] = []
    for canonical, rules in catalog.items():
        values = by_canonical.get(canonical)
        if not values:
            continue
        for field_name, rule in rules.fields.items():
            value = values.get(_key(field_name))
            if value is None:
                continue
            finding = _apply_field_rule(canonical, field_name, rule, value)
            if finding is not None:
                findings.append(finding)
        for combo in rules.combinations:
            finding = _apply_combination(canonical, combo, values)
            if finding is not None:
                findings.append(finding)
    return findings


def evaluate_payload(raw: Any, catalog: Mapping[str, PanelRules] = PANEL_CATALOG) -> list[Finding]:
    """Evaluate a stored payload; an unparseable payload yields no findings."""
    try:
        panels = parse_panels(raw)
    except PayloadError as e:
        logger.debug("lab payload not machine-interpretable: %s", e)
        return []
    return evaluate_panels(panels, catalog)


def count_panel_status(
    panels: Mapping[str, Mapping[str, str]],
    catalog: Mapping[str, PanelRules] = PANEL_CATALOG,
) -> dict[str, int]:
    """Count panels by their worst finding.

    Critical panels are counted only under "critical", not also under
    "abnormal". Panels without rules count as normal.
    """
    counts = {"critical": 0, "abnormal": 0, "normal": 0}
    for name, fields in panels.items():
        worst = max(
            (f.severity for f in evaluate_panels({name: fields}, catalog)),
            default=Severity.NONE,
        )
        if worst == Severity.CRITICAL:
            counts["critical"] += 1
        elif worst == Severity.ABNORMAL:
            counts["abnormal"] += 1
        else:
            counts["normal"] += 1
    return counts


# --- rule application ---


def _key(name: str) -> str:
    return " ".join(str(name).split()).lower()


def _lookup(fields: Mapping, name: str):
    if name in fields:
        return fields[name]
    wanted = _key(name)
    for k, v in fields.items():
        if _key(k) == wanted:
            return v
    return None


def _parse_value(value: str, value_format: str) -> float | None:
    if value_format == "titer":
        return parse_titer(value)
    return try_parse_numeric(value)


def _first_band(bands: tuple[Band, ...], number: float) -> Band | None:
    for band in bands:
        compare = _COMPARE.get(band.comparator)
        if compare is not None and compare(number, band.bound):
            return band
    return None


def _finding(panel: str, field: str, severity: Severity, template: str, value: str) -> Finding:
    return Finding(
        panel=panel,
        field=field,
        severity=severity,
        message=template.format(value=value.strip(), field=field),
    )


def _apply_field_rule(panel: str, field: str, rule, value: str) -> Finding | None:
    if isinstance(rule, ThresholdRule):
        number = _parse_value(value, rule.value_format)
        if number is None:
            return None
        band = _first_band(rule.bands, number)
        if band is None:
            return None
        return _finding(panel, field, band.severity, band.message, value)

    if isinstance(rule, CategoricalRule):
        return _apply_categorical(panel, field, rule, value)

    if isinstance(rule, MarkerGradeRule):
        count = parse_plus_grade(value)
        if count <= 0 and rule.trace is not None and normalize_text(value) == "trace":
            return _finding(panel, field, rule.trace.severity, rule.trace.message, value)
        if count <= 0 or not rule.grades:
            return None
        grade = rule.grades[min(count, len(rule.grades)) - 1]
        return _finding(panel, field, grade.severity, grade.message, value)

    return None


def _apply_categorical(panel: str, field: str, rule: CategoricalRule, value: str) -> Finding | None:
    exact = rule.match == "exact"
    text = _match_text(value, exact)
    if not text:
        return None
    if any(_token_matches(token, text, exact) for token in rule.normal):
        return None
    for token in rule.tokens:
        if _token_matches(token.text, text, exact):
            return _finding(panel, field, token.severity, token.message, value)
    if rule.otherwise is not None:
        return _finding(panel, field, rule.otherwise.severity, rule.otherwise.message, value)
    return None


def _match_text(value: str, exact: bool) -> str:
    text = normalize_text(value)
    # "0 - 2" and "0-2" are the same microscopy count
    return "".join(text.split()) if exact else text


def _token_matches(token: str, text: str, exact: bool) -> bool:
    token = _match_text(token, exact)
    return token == text if exact else token in text


def _apply_combination(panel: str, rule, values: Mapping[str, str]) -> Finding | None:
    if isinstance(rule, MaxOfFieldsRule):
        best: tuple[float, str] | None = None
        for field_name in rule.fields:
            raw = values.get(_key(field_name))
            if raw is None:
                continue
            number = _parse_value(raw, rule.value_format)
            if number is not None and (best is None or number > best[0]):
                best = (number, raw)
        if best is None:
            return None
        band = _first_band(rule.bands, best[0])
        if band is None:
            return None
        return _finding(panel, rule.label, band.severity, band.message, best[1])

    if isinstance(rule, AllOfRule):
        last = ""
        for cond in rule.conditions:
            raw = values.get(_key(cond.field))
            if raw is None:
                return None
            text = normalize_text(raw)
            if not any(token.lower() in text for token in cond.tokens):
                return None
            last = raw
        return _finding(panel, rule.label, rule.outcome.severity, rule.outcome.message, last)

    return None

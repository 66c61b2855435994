"""Lab panel rules: the catalog and the evaluator that applies it."""

from resulttriage.rules.catalog import CATALOG_VERSION, PANEL_ALIASES, PANEL_CATALOG
from resulttriage.rules.evaluator import (
    count_panel_status,
    evaluate_panels,
    evaluate_payload,
    parse_panels,
    reference_range,
    resolve_panel,
)

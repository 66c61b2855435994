"""Core parsing utilities."""

from resulttriage.core.utils import (
    coerce_datetime,
    normalize_text,
    parse_plus_grade,
    parse_titer,
    try_parse_numeric,
)

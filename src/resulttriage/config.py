"""Configuration management for resulttriage.

Handles loading and generating TOML config files for clinic-specific
settings: per-department SLA days and the imaging normal-report phrases.
"""

from __future__ import annotations

import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from resulttriage.errors import ConfigError
from resulttriage.models import ResultKind

DEFAULT_CONFIG_PATH = "resulttriage.toml"

IMAGING_KINDS = (ResultKind.XRAY.value, ResultKind.ULTRASOUND.value)

DEFAULT_CONFIG_TEMPLATE = """\
# resulttriage configuration
# Edit freely; values apply to every command that takes --config.

[sla_days]
# Whole days a pending order may wait before it is flagged overdue.
# An order is overdue once it is strictly older than this.
lab = 3
xray = 5
ultrasound = 7

[imaging.normal_phrases]
# A report is normal when its findings and impression are each one of these
# phrases (case, spacing and trailing punctuation are ignored).
# Any other text is flagged abnormal for review.
xray = ["Normal study", "No abnormality detected"]
ultrasound = ["Normal study", "No abnormality detected"]
"""


@dataclass
class TriageConfig:
    """Parsed configuration values."""

    sla_days: dict[str, int] = field(default_factory=dict)  # kind value -> days
    normal_phrases: dict[str, list[str]] = field(default_factory=dict)  # imaging kind -> phrases
    source: str | None = None  # path the values were read from


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> TriageConfig:
    """Load configuration from a TOML file.

    Falls back to an empty configuration if the file doesn't exist: no kind
    then has an SLA, and every non-empty imaging report is flagged.

    Raises ConfigError for unreadable TOML, unknown kinds, or SLA values that
    are not non-negative integers.
    """
    path = Path(config_path)
    if not path.exists():
        print(
            f"Warning: Config file '{config_path}' not found, no SLA days configured. "
            f"Run 'python -m resulttriage init-config' to generate one.",
            file=sys.stderr,
        )
        return _default_config()

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    config = _default_config()
    config.source = str(path)
    if "sla_days" in raw:
        config.sla_days = _parse_sla_days(raw["sla_days"], config_path)
    imaging = raw.get("imaging", {})
    if not isinstance(imaging, dict):
        raise ConfigError(f"{config_path}: [imaging] must be a table")
    if "normal_phrases" in imaging:
        config.normal_phrases = _parse_normal_phrases(imaging["normal_phrases"], config_path)
    return config


def _default_config() -> TriageConfig:
    """Return default (empty) configuration."""
    return TriageConfig()


def _parse_sla_days(section, config_path: str) -> dict[str, int]:
    if not isinstance(section, dict):
        raise ConfigError(f"{config_path}: [sla_days] must be a table")
    known = {k.value for k in ResultKind}
    sla_days = {}
    for kind, days in section.items():
        if kind not in known:
            raise ConfigError(
                f"{config_path}: unknown result kind '{kind}' in [sla_days] "
                f"(expected one of: {', '.join(sorted(known))})"
            )
        # bool is an int subclass; `lab = true` is a typo, not one day
        if isinstance(days, bool) or not isinstance(days, int) or days < 0:
            raise ConfigError(
                f"{config_path}: sla_days.{kind} must be a non-negative integer, got {days!r}"
            )
        sla_days[kind] = days
    return sla_days


def _parse_normal_phrases(section, config_path: str) -> dict[str, list[str]]:
    if not isinstance(section, dict):
        raise ConfigError(f"{config_path}: [imaging.normal_phrases] must be a table")
    phrases = {}
    for kind, values in section.items():
        if kind not in IMAGING_KINDS:
            raise ConfigError(
                f"{config_path}: unknown imaging kind '{kind}' in [imaging.normal_phrases] "
                f"(expected one of: {', '.join(IMAGING_KINDS)})"
            )
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ConfigError(
                f"{config_path}: imaging.normal_phrases.{kind} must be a list of strings"
            )
        phrases[kind] = list(values)
    return phrases


def generate_config(config_path: str = DEFAULT_CONFIG_PATH, force: bool = False) -> str:
    """Write the default config template.

    Refuses to overwrite an existing file unless ``force`` is set.

    Returns the path of the written config file.
    """
    path = Path(config_path)
    if path.exists() and not force:
        raise ConfigError(f"{config_path} already exists (use --force to overwrite)")
    path.write_text(DEFAULT_CONFIG_TEMPLATE)
    return config_path

"""Markdown output formatter for triage worklists."""

from __future__ import annotations

from pathlib import Path


def _cell(value) -> str:
    if value is None:
        return ""
    # Pipes and newlines would break the table row
    return str(value).replace("|", "\\|").replace("\n", " ")


class MarkdownWriter:
    """Builds markdown output incrementally."""

    def __init__(self):
        self._lines: list[str] = []

    def w(self, line: str = "") -> None:
        self._lines.append(line)

    def heading(self, text: str, level: int = 2) -> None:
        self.w(f"{'#' * level} {text}")
        self.w()

    def bullet(self, label: str, value) -> None:
        self.w(f"- **{label}**: {value}")

    def table(self, headers: list[str], rows: list[list]) -> None:
        self.w("| " + " | ".join(headers) + " |")
        self.w("|" + "|".join("---" for _ in headers) + "|")
        for row in rows:
            self.w("| " + " | ".join(_cell(c) for c in row) + " |")
        self.w()

    def separator(self) -> None:
        self.w("---")
        self.w()

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"

    def write_to_file(self, filepath: str | Path) -> int:
        Path(filepath).write_text(self.text(), encoding="utf-8")
        return len(self._lines)

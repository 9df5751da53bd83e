"""Custom exceptions for PPTX template filling."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

DATA_SECTIONS = ("text", "hide", "style", "images")


class TemplateError(Exception):
    """Base class for errors raised while filling a template deck."""


class ImageReplacementError(TemplateError):
    """Raised when a mapped image cannot be decoded, resized or encoded."""


class DataValidationError(ValueError):
    """Raised when the JSON data used to fill a template is invalid.

    Issues are dotted paths into the data (``style.warning.color ...``); they
    are reported grouped by the data section they belong to.
    """

    def __init__(self, issues: list[str], *, source: Optional[Path] = None):
        self.issues = [str(i).strip() for i in issues if str(i).strip()] or ["Invalid template data"]
        self.source = source
        super().__init__(self._format())

    def by_section(self) -> Dict[str, list[str]]:
        """Group issues by data section; issues outside a section go under ``data``."""
        grouped: Dict[str, list[str]] = {}
        for issue in self.issues:
            section, _, rest = issue.partition(".")
            if section in DATA_SECTIONS and rest:
                grouped.setdefault(section, []).append(rest)
            else:
                grouped.setdefault("data", []).append(issue)
        return grouped

    def _format(self) -> str:
        header = "Template data validation failed"
        if self.source is not None:
            header += f" ({self.source})"
        lines = [header + ":"]
        for section, issues in self.by_section().items():
            lines.append(f"{section}:")
            lines.extend(f"  - {issue}" for issue in issues)
        return "\n".join(lines)

"""Public API helpers for filling PPTX templates from files."""

from __future__ import annotations

from pathlib import Path

from .data_mapper import build_mapper
from .templates import process
from .validation import validate_data_file


def save_presentation(prs, output_path: Path) -> Path:
    """Save ``prs`` to ``output_path``, creating parent directories."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    prs.save(str(output))
    return output


def fill_template_file(*, template_path: Path, data_path: Path, output_path: Path) -> Path:
    """Fill a template deck with a JSON data file and save the result."""
    data_path = Path(data_path)
    data = validate_data_file(data_path)
    mapper = build_mapper(data, base_dir=data_path.resolve().parent)
    prs = process(Path(template_path), mapper)
    return save_presentation(prs, output_path)

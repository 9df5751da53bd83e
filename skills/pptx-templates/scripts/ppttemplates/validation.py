"""Validation for the JSON data used to fill a template."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict

from .errors import DATA_SECTIONS, DataValidationError

_SECTIONS = DATA_SECTIONS

_STYLE_FLAGS = ("bold", "italic", "underline")
_STYLE_KEYS = {*_STYLE_FLAGS, "size", "color", "font"}

_IMAGE_FORMATS = {"png", "jpeg", "jpg", "gif", "bmp", "tiff", "tif"}
_IMAGE_MODES = {"crop", "fit"}
_IMAGE_KEYS = {"path", "format", "mode"}

_HEX_COLOR = re.compile(r"#?[0-9A-Fa-f]{6}")


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_text(section: Dict[str, Any], issues: list[str]) -> None:
    for name, value in section.items():
        if not isinstance(value, str) and not _is_number(value):
            issues.append(f"text.{name} must be a string or a number")


def _check_hide(section: Dict[str, Any], issues: list[str]) -> None:
    for name, value in section.items():
        if isinstance(value, bool):
            continue
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            continue
        issues.append(f"hide.{name} must be a boolean or a list of argument strings")


def _check_style(section: Dict[str, Any], issues: list[str]) -> None:
    for name, style in section.items():
        prefix = f"style.{name}"
        if not isinstance(style, dict):
            issues.append(f"{prefix} must be an object")
            continue

        unknown = sorted(set(style) - _STYLE_KEYS)
        if unknown:
            allowed = ", ".join(sorted(_STYLE_KEYS))
            issues.append(f"{prefix} has unsupported keys {', '.join(unknown)} (supported: {allowed})")

        for flag in _STYLE_FLAGS:
            if flag in style and not isinstance(style[flag], bool):
                issues.append(f"{prefix}.{flag} must be a boolean when provided")
        if "size" in style and (not _is_number(style["size"]) or style["size"] <= 0):
            issues.append(f"{prefix}.size must be a positive number of points when provided")
        if "color" in style and not (isinstance(style["color"], str) and _HEX_COLOR.fullmatch(style["color"].strip())):
            issues.append(f"{prefix}.color must be a hex color like '#C00000' when provided")
        if "font" in style and not _is_non_empty_str(style["font"]):
            issues.append(f"{prefix}.font must be a non-empty string when provided")


def _check_images(section: Dict[str, Any], issues: list[str]) -> None:
    for name, image in section.items():
        prefix = f"images.{name}"
        if isinstance(image, str):
            image = {"path": image}
        if not isinstance(image, dict):
            issues.append(f"{prefix} must be a path string or an object with a path")
            continue

        unknown = sorted(set(image) - _IMAGE_KEYS)
        if unknown:
            issues.append(f"{prefix} has unsupported keys {', '.join(unknown)}")

        if not _is_non_empty_str(image.get("path")):
            issues.append(f"{prefix}.path is required and must be a non-empty string")

        fmt = image.get("format")
        if fmt is not None and str(fmt).strip().lower() not in _IMAGE_FORMATS:
            allowed = ", ".join(sorted(_IMAGE_FORMATS))
            issues.append(f"{prefix}.format '{fmt}' is unsupported (supported: {allowed})")

        mode = image.get("mode")
        if mode is not None and str(mode).strip().lower() not in _IMAGE_MODES:
            issues.append(f"{prefix}.mode must be 'crop' or 'fit'")


_CHECKS = {
    "text": _check_text,
    "hide": _check_hide,
    "style": _check_style,
    "images": _check_images,
}


def validate_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate template data and return it unchanged."""
    if not isinstance(data, dict):
        raise DataValidationError(["Root JSON value must be an object"])

    issues: list[str] = []
    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        allowed = ", ".join(_SECTIONS)
        issues.append(f"Unsupported top-level keys: {', '.join(unknown)} (supported: {allowed})")

    for name in _SECTIONS:
        section = data.get(name)
        if section is None:
            continue
        if not isinstance(section, dict):
            issues.append(f"{name} must be an object mapping variable names to values")
            continue
        _CHECKS[name](section, issues)

    if issues:
        raise DataValidationError(issues)

    return data


def validate_data_file(data_path: Path) -> Dict[str, Any]:
    """Load and validate a JSON data file."""
    try:
        raw = data_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataValidationError(["Data file not found"], source=data_path) from exc

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DataValidationError(
            [f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"], source=data_path
        ) from exc

    try:
        return validate_data(data)
    except DataValidationError as exc:
        raise DataValidationError(exc.issues, source=data_path) from None

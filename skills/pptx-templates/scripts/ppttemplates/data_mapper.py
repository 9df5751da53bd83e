"""Build a ``PptMapper`` from validated JSON template data."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from pptx.dml.color import RGBColor
from pptx.util import Pt

from .errors import DataValidationError
from .images import ImageFormat, ImageReplacementMode
from .mapper import PptMapper, Styler


def _parse_rgb_color(value: Any) -> Optional[RGBColor]:
    raw = str(value or "").strip()
    if raw.startswith("#"):
        raw = raw[1:]
    if len(raw) != 6:
        return None
    try:
        return RGBColor.from_string(raw.upper())
    except ValueError:
        return None


def make_styler(style: Dict[str, Any]) -> Styler:
    """Return a run styler applying the font settings of ``style``."""
    color = _parse_rgb_color(style.get("color"))

    def apply(_arg1: Optional[str], run) -> None:
        font = run.font
        for flag in ("bold", "italic", "underline"):
            if flag in style:
                setattr(font, flag, bool(style[flag]))
        if "size" in style:
            font.size = Pt(style["size"])
        if style.get("font"):
            font.name = str(style["font"])
        if color is not None:
            font.color.rgb = color

    return apply


def _hide_predicate(value):
    if isinstance(value, bool):
        return lambda _arg: value
    arguments = set(value)
    return lambda arg: arg in arguments


def _resolve_fs_path(path_like: str, base_dir: Optional[Path]) -> Path:
    p = Path(path_like)
    if p.exists() or p.is_absolute() or base_dir is None:
        return p
    return Path(base_dir) / path_like


def build_mapper(data: Dict[str, Any], *, base_dir: Optional[Path] = None) -> PptMapper:
    """Turn validated template data into a mapper.

    Image paths are taken as given first, then relative to ``base_dir``.
    """
    mapper = PptMapper()

    for name, value in (data.get("text") or {}).items():
        mapper.text(name, str(value))

    for name, value in (data.get("hide") or {}).items():
        mapper.hide(name, _hide_predicate(value))

    for name, style in (data.get("style") or {}).items():
        mapper.style_text(name, make_styler(style))

    missing: list[str] = []
    for name, image in (data.get("images") or {}).items():
        if isinstance(image, str):
            image = {"path": image}
        path = _resolve_fs_path(image["path"], base_dir)
        if not path.is_file():
            missing.append(f"images.{name}.path not found: {path}")
            continue
        mapper.image(
            name,
            path.read_bytes(),
            target_format=ImageFormat.coerce(image.get("format") or "png"),
            replacement_mode=ImageReplacementMode.coerce(image.get("mode") or "crop"),
        )

    if missing:
        raise DataValidationError(missing)

    return mapper

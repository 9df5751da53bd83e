"""Caller-side resolution of template variables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Union

from .images import ImageFormat, ImageReplacementMode

Styler = Callable[[Optional[str], Any], None]
TextValue = Union[str, Callable[[Optional[str]], Optional[str]]]


@dataclass(frozen=True)
class PptImageMapper:
    value: bytes
    target_format: Union[ImageFormat, str] = ImageFormat.PNG
    replacement_mode: Union[ImageReplacementMode, str] = ImageReplacementMode.RESIZE_CROP


class TemplateMapping(Protocol):
    """What the template walker asks about each variable it meets.

    Every lookup returns None when the mapping has no opinion on the variable.
    """

    def hide_mapping(self, name: str, arg1: Optional[str]) -> Optional[bool]: ...

    def style_mapping(self, name: str) -> Optional[Styler]: ...

    def text_mapping(self, name: str, arg1: Optional[str]) -> Optional[str]: ...

    def image_mapping(self, name: str) -> Optional[PptImageMapper]: ...


class PptMapper:
    """Build the variable mapping used to fill a template.

    Builder methods return the mapper so calls can be chained::

        mapper = (
            PptMapper()
            .text("client", "ACME")
            .hide("draft")
            .image("logo", logo_bytes, replacement_mode=ImageReplacementMode.RESIZE_FIT)
        )
    """

    def __init__(self) -> None:
        self._texts: Dict[str, TextValue] = {}
        self._hides: Dict[str, Callable[[Optional[str]], bool]] = {}
        self._stylers: Dict[str, Styler] = {}
        self._images: Dict[str, PptImageMapper] = {}

    def text(self, name: str, value: TextValue) -> "PptMapper":
        """Replace ``$/name/`` in text by ``value`` (or ``value(arg1)`` when callable)."""
        self._texts[name] = value
        return self

    def hide(self, name: str, predicate: Optional[Callable[[Optional[str]], bool]] = None) -> "PptMapper":
        """Hide elements linked to ``name``, always or when ``predicate(arg1)`` holds."""
        self._hides[name] = predicate if predicate is not None else (lambda _arg: True)
        return self

    def style_text(self, name: str, styler: Styler) -> "PptMapper":
        self._stylers[name] = styler
        return self

    def image(
        self,
        name: str,
        value: bytes,
        target_format: Union[ImageFormat, str] = ImageFormat.PNG,
        replacement_mode: Union[ImageReplacementMode, str] = ImageReplacementMode.RESIZE_CROP,
    ) -> "PptMapper":
        self._images[name] = PptImageMapper(value, target_format, replacement_mode)
        return self

    # lookups

    def hide_mapping(self, name: str, arg1: Optional[str]) -> Optional[bool]:
        predicate = self._hides.get(name)
        if predicate is None:
            return None
        return bool(predicate(arg1))

    def style_mapping(self, name: str) -> Optional[Styler]:
        return self._stylers.get(name)

    def text_mapping(self, name: str, arg1: Optional[str]) -> Optional[str]:
        value = self._texts.get(name)
        if value is None:
            return None
        if callable(value):
            value = value(arg1)
            if value is None:
                return None
        return str(value)

    def image_mapping(self, name: str) -> Optional[PptImageMapper]:
        return self._images.get(name)

"""Image resizing used when a picture shape is replaced."""

from __future__ import annotations

import io
from enum import Enum
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import ImageReplacementError


class ImageFormat(Enum):
    """Formats a replacement image can be encoded to (Pillow format names)."""

    PNG = "PNG"
    JPEG = "JPEG"
    GIF = "GIF"
    BMP = "BMP"
    TIFF = "TIFF"

    @classmethod
    def coerce(cls, value) -> "ImageFormat":
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().upper().lstrip(".")
        normalized = {"JPG": "JPEG", "TIF": "TIFF"}.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError as exc:
            allowed = ", ".join(f.value.lower() for f in cls)
            raise ImageReplacementError(
                f"Unsupported image format '{value}' (supported: {allowed})"
            ) from exc


# Modes each encoder writes without a conversion.
_ENCODABLE_MODES = {
    ImageFormat.JPEG: {"RGB", "L", "CMYK"},
    ImageFormat.BMP: {"1", "L", "P", "RGB"},
}


class ImageReplacementMode(Enum):
    """How the replacement image is fitted into the original picture anchor.

    RESIZE_CROP fills the anchor exactly, cropping the centered image when the
    aspect ratios differ; the picture keeps its position and size.
    RESIZE_FIT scales the image proportionally to fit inside the anchor; the
    picture keeps its top-left corner and takes the size of the fitted image.
    """

    RESIZE_FIT = "fit"
    RESIZE_CROP = "crop"

    @classmethod
    def coerce(cls, value) -> "ImageReplacementMode":
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for mode in cls:
            if normalized in {mode.value, mode.name.lower()}:
                return mode
        raise ImageReplacementError(f"Unknown image replacement mode: {value!r}")

    def resize(self, data: bytes, target_format, width: int, height: int) -> bytes:
        return resize_image(data, target_format, width, height, mode=self)


def _open(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageReplacementError(f"Cannot decode replacement image: {exc}") from exc
    return image


def _encode(image: Image.Image, fmt: ImageFormat) -> bytes:
    modes = _ENCODABLE_MODES.get(fmt)
    if modes is not None and image.mode not in modes:
        if image.mode in ("RGBA", "LA", "P"):
            # Flatten transparency on white, as slides usually are.
            rgba = image.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[-1])
            image = background
        else:
            image = image.convert("RGB")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=fmt.value)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageReplacementError(f"Cannot encode replacement image as {fmt.value}: {exc}") from exc
    return buffer.getvalue()


def resize_image(
    data: bytes,
    target_format,
    width: int,
    height: int,
    *,
    mode: ImageReplacementMode = ImageReplacementMode.RESIZE_FIT,
) -> bytes:
    """Resize ``data`` for a ``width`` x ``height`` pixel box and encode it."""
    fmt = ImageFormat.coerce(target_format)
    width, height = int(width), int(height)
    if width <= 0 or height <= 0:
        raise ImageReplacementError(f"Invalid destination size {width}x{height} for image replacement")

    image = _open(data)
    if mode is ImageReplacementMode.RESIZE_CROP:
        resized = ImageOps.fit(image, (width, height), centering=(0.5, 0.5))
    else:
        resized = ImageOps.contain(image, (width, height))
    return _encode(resized, fmt)


def image_dimension(data: bytes) -> Tuple[int, int]:
    """Return the ``(width, height)`` in pixels of encoded image bytes."""
    with _open(data) as image:
        return image.size

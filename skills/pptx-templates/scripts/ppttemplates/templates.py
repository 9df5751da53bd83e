"""Fill a PowerPoint template deck with data from a variable mapping.

Variables are written ``$/name:'argument'/`` (the argument part is optional) and
are found in three places:

- the click hyperlink of a text shape or picture, to hide the whole shape or
  replace the picture;
- the hyperlink of a text run, to hide or style the run (a hidden run that is
  alone in its paragraph removes the paragraph);
- the text of a paragraph, to substitute text.

Each slide is processed in two passes. The first pass reads the shapes and
records what must be removed or replaced; the second pass applies those
changes, shape removals first and picture replacements last.

Templates should not contain SmartArt or embedded Excel charts: python-pptx
does not handle them and the saved deck may end up corrupted.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

from pptx import Presentation
from pptx.shapes.picture import Picture
from pptx.util import Length, Pt

from .errors import TemplateError
from .hyperlinks import clear_run_link, clear_shape_link, run_link_address, shape_link_address
from .images import ImageReplacementMode, image_dimension
from .mapper import PptImageMapper, TemplateMapping
from .variables import PptVariable, parse, replace_text_variables

logger = logging.getLogger(__name__)


class ShapeKind(Enum):
    TEXT = "text"
    TABLE = "table"
    PICTURE = "picture"
    OTHER = "other"


def classify_shape(shape) -> ShapeKind:
    if isinstance(shape, Picture):
        return ShapeKind.PICTURE
    if shape.has_text_frame:
        return ShapeKind.TEXT
    if shape.has_table:
        return ShapeKind.TABLE
    return ShapeKind.OTHER


@dataclass
class PendingImageReplacement:
    picture: Picture
    image_mapper: PptImageMapper
    left: Length
    top: Length
    width: Length
    height: Length


def process(template, mapper: TemplateMapping):
    """Open ``template`` (a path or a binary stream) and fill it with ``mapper``."""
    if isinstance(template, (str, os.PathLike)):
        template = str(template)
    prs = Presentation(template)
    return process_presentation(prs, mapper)


def process_presentation(prs, mapper: TemplateMapping):
    """Fill ``prs`` in place with ``mapper`` and return it."""
    removed_total = 0
    replaced_total = 0
    for slide in prs.slides:
        removed, replaced = _process_slide(slide, mapper)
        removed_total += removed
        replaced_total += replaced

    logger.info(
        "Filled template: %d slide(s), %d shape(s) removed, %d picture(s) replaced",
        len(prs.slides),
        removed_total,
        replaced_total,
    )
    return prs


def remove_at_positions(indexes: Iterable[int], remove_at: Callable[[int], None]) -> int:
    """Remove items given by their positions in the sequence before any removal.

    Each removal shifts the following items down by one, so every target is
    offset by the number of removals already applied.
    """
    removed = 0
    for index in sorted(set(indexes)):
        remove_at(index - removed)
        removed += 1
    return removed


# internal


def _process_slide(slide, mapper: TemplateMapping) -> Tuple[int, int]:
    shapes_to_remove = []
    images_to_replace: list[PendingImageReplacement] = []

    for shape in list(slide.shapes):
        if _process_shape(shape, mapper, images_to_replace):
            shapes_to_remove.append(shape)

    for shape in shapes_to_remove:
        logger.debug("Removing hidden shape '%s'", shape.name)
        _remove_shape(shape)

    for pending in images_to_replace:
        _replace_image(slide, pending)

    return len(shapes_to_remove), len(images_to_replace)


def _process_shape(shape, mapper: TemplateMapping, images_to_replace: list[PendingImageReplacement]) -> bool:
    """Return True when the shape must be removed from its slide."""
    kind = classify_shape(shape)
    if kind is ShapeKind.TEXT:
        return _process_text_shape(shape, mapper)
    if kind is ShapeKind.TABLE:
        return _process_table_shape(shape, mapper)
    if kind is ShapeKind.PICTURE:
        return _process_picture_shape(shape, mapper, images_to_replace)
    return False


def _should_hide(variable: Optional[PptVariable], mapper: TemplateMapping) -> bool:
    if variable is None:
        return False
    return bool(mapper.hide_mapping(variable.name, variable.arg1))


def _shape_variable(shape) -> Optional[PptVariable]:
    variable = parse(shape_link_address(shape))
    if variable is not None:
        # A variable link is a template directive, never a real link.
        clear_shape_link(shape)
    return variable


def _process_text_shape(shape, mapper: TemplateMapping) -> bool:
    if _should_hide(_shape_variable(shape), mapper):
        return True

    _process_text_frame(shape.text_frame, mapper)
    return False


def _process_table_shape(shape, mapper: TemplateMapping) -> bool:
    for row in shape.table.rows:
        for cell in row.cells:
            if cell._tc.txBody is None:
                continue
            _process_text_frame(cell.text_frame, mapper)
    return False


def _process_picture_shape(
    picture: Picture, mapper: TemplateMapping, images_to_replace: list[PendingImageReplacement]
) -> bool:
    variable = _shape_variable(picture)
    if variable is None:
        return False
    if _should_hide(variable, mapper):
        return True

    image_mapper = mapper.image_mapping(variable.name)
    if image_mapper is not None:
        images_to_replace.append(
            PendingImageReplacement(
                picture=picture,
                image_mapper=image_mapper,
                left=picture.left,
                top=picture.top,
                width=picture.width,
                height=picture.height,
            )
        )
    return False


def _process_text_frame(text_frame, mapper: TemplateMapping) -> None:
    to_delete = _process_paragraphs(text_frame.paragraphs, mapper)
    if not to_delete:
        return

    txBody = text_frame._txBody
    remove_at_positions(to_delete, lambda index: txBody.remove(txBody.p_lst[index]))


def _process_paragraphs(paragraphs, mapper: TemplateMapping) -> list[int]:
    """Apply run-level variables and return the indexes of paragraphs to delete."""
    to_delete: list[int] = []
    for index, paragraph in enumerate(paragraphs):
        runs = paragraph.runs
        for run in runs:
            variable = parse(run_link_address(run))
            if variable is None:
                continue

            styler = mapper.style_mapping(variable.name)
            if styler is not None:
                styler(variable.arg1, run)

            if _should_hide(variable, mapper):
                if len(runs) == 1:
                    to_delete.append(index)
                    continue
                # Keep the run itself so sibling formatting stays in place.
                run.text = ""
            clear_run_link(run)

        replace_text_variables(paragraph, mapper)
    return to_delete


def _remove_shape(shape) -> None:
    # python-pptx has no public delete API; detach the shape element directly.
    # Image relationships stay: identical images share one rId across pictures.
    element = shape._element
    element.getparent().remove(element)


def _replace_image(slide, pending: PendingImageReplacement) -> None:
    image_mapper = pending.image_mapper
    anchor = (pending.left, pending.top, pending.width, pending.height)
    if any(value is None for value in anchor):
        raise TemplateError(f"Picture '{pending.picture.name}' has no position or size to replace")

    mode = ImageReplacementMode.coerce(image_mapper.replacement_mode)
    # Anchor points are used as pixels for the resized image.
    data = mode.resize(
        image_mapper.value,
        image_mapper.target_format,
        int(pending.width.pt),
        int(pending.height.pt),
    )

    if mode is ImageReplacementMode.RESIZE_CROP:
        width, height = pending.width, pending.height
    else:
        image_width, image_height = image_dimension(data)
        width, height = Pt(image_width), Pt(image_height)

    new_picture = slide.shapes.add_picture(io.BytesIO(data), pending.left, pending.top, width, height)

    # Take the z-order position of the replaced picture.
    pending.picture._element.addnext(new_picture._element)
    _remove_shape(pending.picture)

    logger.debug(
        "Replaced picture '%s' (%s, %sx%s EMU)",
        pending.picture.name,
        mode.name,
        int(width),
        int(height),
    )

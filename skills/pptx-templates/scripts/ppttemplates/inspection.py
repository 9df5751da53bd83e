"""List the variables a template deck expects, without modifying it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .hyperlinks import run_link_address, shape_link_address
from .templates import ShapeKind, classify_shape
from .variables import PptVariable, find_variables, parse

SHAPE_LINK = "shape-link"
PICTURE_LINK = "picture-link"
RUN_LINK = "run-link"
TEXT = "text"


@dataclass(frozen=True)
class VariableOccurrence:
    slide_number: int
    shape_name: str
    channel: str
    variable: PptVariable


def _text_frames(shape, kind: ShapeKind) -> Iterator:
    if kind is ShapeKind.TEXT:
        yield shape.text_frame
    elif kind is ShapeKind.TABLE:
        for row in shape.table.rows:
            for cell in row.cells:
                if cell._tc.txBody is not None:
                    yield cell.text_frame


def _shape_occurrences(slide_number: int, shape) -> Iterator[VariableOccurrence]:
    kind = classify_shape(shape)
    if kind is ShapeKind.OTHER:
        return

    if kind in (ShapeKind.TEXT, ShapeKind.PICTURE):
        variable = parse(shape_link_address(shape))
        if variable is not None:
            channel = PICTURE_LINK if kind is ShapeKind.PICTURE else SHAPE_LINK
            yield VariableOccurrence(slide_number, shape.name, channel, variable)

    for text_frame in _text_frames(shape, kind):
        for paragraph in text_frame.paragraphs:
            runs = paragraph.runs
            for run in runs:
                variable = parse(run_link_address(run))
                if variable is not None:
                    yield VariableOccurrence(slide_number, shape.name, RUN_LINK, variable)
            joined = "".join(run.text for run in runs)
            for _start, _end, variable in find_variables(joined):
                yield VariableOccurrence(slide_number, shape.name, TEXT, variable)


def list_template_variables(prs) -> list[VariableOccurrence]:
    """Return every variable occurrence of ``prs`` in slide, shape, then paragraph order."""
    occurrences: list[VariableOccurrence] = []
    for slide_number, slide in enumerate(prs.slides, start=1):
        for shape in slide.shapes:
            occurrences.extend(_shape_occurrences(slide_number, shape))
    return occurrences

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from PIL import Image
from pptx import Presentation
from pptx.util import Pt

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

BLANK_LAYOUT = 6


def image_bytes(width: int, height: int, *, fmt: str = "PNG", mode: str = "RGB", color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


def add_textbox(slide, *paragraphs):
    """Add a textbox; each paragraph is a list of ``(text, link)`` runs."""
    shape = slide.shapes.add_textbox(Pt(10), Pt(10), Pt(300), Pt(100))
    text_frame = shape.text_frame
    for idx, runs in enumerate(paragraphs):
        paragraph = text_frame.paragraphs[0] if idx == 0 else text_frame.add_paragraph()
        for text, link in runs:
            run = paragraph.add_run()
            run.text = text
            if link:
                run.hyperlink.address = link
    return shape


@pytest.fixture
def deck():
    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
    return prs, slide


@pytest.fixture
def png():
    return image_bytes

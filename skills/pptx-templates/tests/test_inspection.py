from __future__ import annotations

import io
import sys
from pathlib import Path

from pptx.util import Pt

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from conftest import add_textbox, image_bytes  # noqa: E402
from ppttemplates import PptVariable, list_template_variables  # noqa: E402


def test_list_template_variables_covers_every_channel(deck) -> None:
    prs, slide = deck
    box = add_textbox(slide, [("Hello $/client/ ", None), ("more", "$/detail:'x'/")])
    box.click_action.hyperlink.address = "$/block/"
    picture = slide.shapes.add_picture(io.BytesIO(image_bytes(10, 10)), Pt(0), Pt(0), Pt(20), Pt(20))
    picture.click_action.hyperlink.address = "$/logo/"
    table = slide.shapes.add_table(1, 1, Pt(0), Pt(50), Pt(100), Pt(20)).table
    table.cell(0, 0).text_frame.paragraphs[0].add_run().text = "$/owner/"

    found = [(o.slide_number, o.channel, o.variable) for o in list_template_variables(prs)]

    assert found == [
        (1, "shape-link", PptVariable("block")),
        (1, "run-link", PptVariable("detail", "x")),
        (1, "text", PptVariable("client")),
        (1, "picture-link", PptVariable("logo")),
        (1, "text", PptVariable("owner")),
    ]


def test_list_template_variables_does_not_modify_deck(deck) -> None:
    prs, slide = deck
    add_textbox(slide, [("x", "$/link/")])
    before = slide._element.xml

    assert len(list_template_variables(prs)) == 1
    assert slide._element.xml == before

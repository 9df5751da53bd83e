"""Read and clear click hyperlinks on text runs and shapes."""

from __future__ import annotations

from typing import Optional

from pptx.enum.action import PP_ACTION


def _url_target(hlink, part) -> Optional[str]:
    if hlink is None or not hlink.rId:
        return None
    # Slide jumps, file links and macros carry an action verb; plain URLs do not.
    if hlink.action:
        return None
    rel = part.rels.get(hlink.rId)
    if rel is None or not rel.is_external:
        return None
    return rel.target_ref


def run_link_address(run) -> Optional[str]:
    """Return the URL a text run links to, or None for no/non-URL link."""
    rPr = run._r.rPr
    if rPr is None:
        return None
    return _url_target(rPr.hlinkClick, run.part)


def shape_link_address(shape) -> Optional[str]:
    """Return the URL a shape's click action points to, or None."""
    click_action = shape.click_action
    if click_action.action != PP_ACTION.HYPERLINK:
        return None
    return click_action.hyperlink.address


def clear_run_link(run) -> None:
    run.hyperlink.address = None


def clear_shape_link(shape) -> None:
    shape.click_action.hyperlink.address = None

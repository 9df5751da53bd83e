"""Template variable grammar and the in-text substitution channel.

A variable is written ``$/name/`` or ``$/name:'argument'/``. The name may not
contain ``/`` or ``:``; inside the argument ``\\'`` stands for a literal quote.
Variables appear either as the target of a hyperlink (see ``templates``) or
directly in the text of a paragraph, possibly split over several runs.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

_VARIABLE_PATTERN = r"\$/(?P<name>[^/:]+)(?::'(?P<arg1>(?:\\.|[^'\\])*)')?/"
_VARIABLE_RE = re.compile(_VARIABLE_PATTERN)


@dataclass(frozen=True)
class PptVariable:
    name: str
    arg1: Optional[str] = None


def _from_match(match: re.Match) -> PptVariable:
    arg1 = match.group("arg1")
    if arg1 is not None:
        arg1 = arg1.replace("\\'", "'")
    return PptVariable(match.group("name"), arg1)


def parse(text: Optional[str]) -> Optional[PptVariable]:
    """Parse ``text`` as a whole; return None when it is not a variable."""
    if not text:
        return None
    match = _VARIABLE_RE.fullmatch(text)
    if match is None:
        return None
    return _from_match(match)


def find_variables(text: Optional[str]) -> Iterator[Tuple[int, int, PptVariable]]:
    """Yield ``(start, end, variable)`` for each variable embedded in ``text``."""
    if not text or "$/" not in text:
        return
    for match in _VARIABLE_RE.finditer(text):
        yield match.start(), match.end(), _from_match(match)


def _splice(texts: list[str], starts: list[int], start: int, end: int, value: str) -> None:
    first = bisect_right(starts, start) - 1
    last = bisect_right(starts, end - 1) - 1
    head = texts[first][: start - starts[first]]
    tail = texts[last][end - starts[last] :]

    if first == last:
        texts[first] = head + value + tail
        return

    # The replacement takes the formatting of the run where the variable starts.
    texts[first] = head + value
    for idx in range(first + 1, last):
        texts[idx] = ""
    texts[last] = tail


def replace_text_variables(paragraph, mapping) -> int:
    """Substitute mapped text variables found in the runs of ``paragraph``.

    Returns the number of substituted occurrences. Occurrences without a text
    mapping are left as they are.
    """
    runs = list(paragraph.runs)
    if not runs:
        return 0

    original = [run.text for run in runs]
    joined = "".join(original)

    replacements: list[Tuple[int, int, str]] = []
    for start, end, variable in find_variables(joined):
        value = mapping.text_mapping(variable.name, variable.arg1)
        if value is not None:
            replacements.append((start, end, str(value)))
    if not replacements:
        return 0

    starts: list[int] = []
    offset = 0
    for text in original:
        starts.append(offset)
        offset += len(text)

    texts = list(original)
    # Right to left so the offsets of earlier occurrences stay valid.
    for start, end, value in reversed(replacements):
        _splice(texts, starts, start, end, value)

    for run, before, after in zip(runs, original, texts):
        if before != after:
            run.text = after
    return len(replacements)

import re
from typing import List

from sowgen.core.models import StyledRun
from sowgen.core.signature import UNDERLINE_RE

BOLD_RE = re.compile(r"\*\*(.*?)\*\*")

# Short blanks are widened so every signature line renders the same length.
MIN_UNDERLINE_WIDTH = 30


def _split_underlines(text: str, bold: bool) -> List[StyledRun]:
    runs: List[StyledRun] = []
    last = 0
    for m in UNDERLINE_RE.finditer(text):
        if m.start() > last:
            runs.append(StyledRun(text[last:m.start()], bold))
        runs.append(StyledRun(m.group(0).ljust(MIN_UNDERLINE_WIDTH, "_"), False))
        last = m.end()
    if last < len(text):
        runs.append(StyledRun(text[last:], bold))
    return runs


def format_inline(text: str) -> List[StyledRun]:
    """
    Split `text` into styled runs.

    `**...**` pairs are matched left to right without overlap and become bold
    runs with the markers removed; an unpaired `**` stays literal. Runs of
    four or more underscores are split out as their own plain run, padded to
    MIN_UNDERLINE_WIDTH.
    """
    runs: List[StyledRun] = []
    last = 0
    for m in BOLD_RE.finditer(text):
        runs.extend(_split_underlines(text[last:m.start()], False))
        runs.extend(_split_underlines(m.group(1), True))
        last = m.end()
    runs.extend(_split_underlines(text[last:], False))

    if not runs:
        return [StyledRun(text, False)]
    return runs


def plain_text(text: str) -> str:
    """`text` with bold markers removed."""
    return "".join(r.text for r in format_inline(text))

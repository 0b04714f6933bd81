"""Content cleaner: trims end-of-content markers and trailing boilerplate."""

import re
from typing import List

_END_MARKER_RE = re.compile(r"^-{3,}$")

# Applied repeatedly to the tail of the text until none of them match.
_TRAILING_PATTERNS: List[re.Pattern] = [
    re.compile(r"(?:^|\n)[ \t]*This section is designed to[^\n]*\s*$", re.IGNORECASE),
    re.compile(r"(?:^|\n)[ \t]*\**Note:\**[^\n]*\s*$", re.IGNORECASE),
    re.compile(r"(?:^|\n)[ \t]*-+[ \t]*\s*$"),
]

_EXTRA_NEWLINES_RE = re.compile(r"\n{3,}")


def _cut_at_end_marker(text: str) -> str:
    lines = text.split("\n")
    half = len(lines) / 2
    # The last dash-only line in the second half of the text marks the end.
    for i in range(len(lines) - 1, -1, -1):
        if i < half:
            break
        if _END_MARKER_RE.match(lines[i].strip()):
            return "\n".join(lines[:i])
    return text


def _strip_trailing_boilerplate(text: str) -> str:
    changed = True
    while changed:
        changed = False
        text = text.rstrip()
        for pattern in _TRAILING_PATTERNS:
            stripped = pattern.sub("", text, count=1)
            if stripped != text:
                text = stripped
                changed = True
    return text


def _clean_once(text: str) -> str:
    text = _cut_at_end_marker(text)
    text = _strip_trailing_boilerplate(text)
    text = _EXTRA_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def clean(raw: str) -> str:
    """
    Return `raw` without its end marker, trailing boilerplate and extra blank lines.

    Every step only removes characters, so the loop reaches a fixed point and
    cleaning an already-cleaned string returns it unchanged.
    """
    text = (raw or "").replace("\r\n", "\n").replace("\r", "\n")
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned

"""
Heuristics for signature blocks.

Signature blocks ("By: ____", "Name:", "Date:" and a bold company name above
them) keep their line structure when paragraphs are accumulated. All of the
rules live here so the parser never has to know what they are.
"""

import re
from typing import Iterable, Sequence, Tuple

SIGNATURE_LABELS: Tuple[str, ...] = ("By:", "Name:", "Title:", "Date:")

UNDERLINE_RE = re.compile(r"_{4,}")


def company_markers(names: Iterable[str]) -> Tuple[str, ...]:
    """Bold, upper-cased company names as they appear above a signature."""
    return tuple(f"**{n.strip().upper()}**" for n in names if n and n.strip())


def is_signature_content(line: str, paragraph: str, markers: Sequence[str] = ()) -> bool:
    for needle in (*SIGNATURE_LABELS, *markers):
        if needle in line or needle in paragraph:
            return True
    return False


def has_signature_underline(text: str) -> bool:
    return UNDERLINE_RE.search(text) is not None

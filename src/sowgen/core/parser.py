"""
Block parser for the restricted Markdown dialect produced by section generation.

The parser is line oriented and keeps a single accumulator whose meaning
depends on the active ParseMode. Switching modes always flushes the
accumulator first, so at most one of paragraph/list/table is ever open.
Malformed input never raises; it degrades into whatever blocks fit best.
"""

import logging
import re
from enum import Enum
from typing import List, Optional, Sequence

from sowgen.core.models import (
    Block,
    HeaderBlock,
    ListBlock,
    ListItem,
    ParagraphBlock,
    SignatureLineBlock,
    TableBlock,
)
from sowgen.core.signature import has_signature_underline, is_signature_content

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_BULLET_RE = re.compile(r"^(\s*)[-*+]\s+(.+)$")
_NUMBERED_RE = re.compile(r"^(\s*)\d+\.\s+(.+)$")
_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")


class ParseMode(Enum):
    IDLE = "idle"
    PARAGRAPH = "paragraph"
    LIST = "list"
    TABLE = "table"


def indent_level(indent: str) -> int:
    """One level per two leading spaces; a tab counts as one level."""
    return len(indent.expandtabs(2)) // 2


def split_table_row(line: str) -> Optional[List[str]]:
    """Cells of a `|`-delimited row, or None when the line is not a table row."""
    if "|" not in line:
        return None
    cells = [c.strip() for c in line.split("|")]
    while cells and not cells[0]:
        cells.pop(0)
    while cells and not cells[-1]:
        cells.pop()
    if len(cells) < 2:
        return None
    return cells


def is_separator_row(cells: Sequence[str]) -> bool:
    return all(_SEPARATOR_CELL_RE.match(c) for c in cells)


class BlockParser:
    def __init__(self, signature_markers: Sequence[str] = (), continue_after_colon: bool = True):
        """
        signature_markers: extra substrings (usually bold company names) that
            mark a paragraph as part of a signature block.
        continue_after_colon: a plain line right after a list item ending in
            ':' becomes a nested item instead of starting a paragraph.
        """
        self.signature_markers = tuple(signature_markers)
        self.continue_after_colon = continue_after_colon
        self._reset()

    def _reset(self) -> None:
        self._blocks: List[Block] = []
        self._mode = ParseMode.IDLE
        self._buffer: list = []

    def parse(self, text: str) -> List[Block]:
        self._reset()
        for line in (text or "").splitlines():
            self._feed(line)
        self._flush()
        blocks = self._blocks
        self._reset()
        return blocks

    def _feed(self, line: str) -> None:
        stripped = line.strip()
        if not stripped:
            self._flush()
            return

        m = _HEADER_RE.match(stripped)
        if m:
            self._flush()
            self._blocks.append(HeaderBlock(text=m.group(2).strip(), level=min(len(m.group(1)), 6)))
            return

        m = _BULLET_RE.match(line) or _NUMBERED_RE.match(line)
        if m:
            self._switch(ParseMode.LIST)
            self._buffer.append(ListItem(text=m.group(2).strip(), indent_level=indent_level(m.group(1))))
            return

        cells = split_table_row(stripped)
        if cells is not None:
            self._switch(ParseMode.TABLE)
            if not is_separator_row(cells):
                self._buffer.append(cells)
            return

        if self._mode is ParseMode.LIST and self.continue_after_colon:
            last = self._buffer[-1]
            if last.text.endswith(":"):
                self._buffer.append(ListItem(text=stripped, indent_level=last.indent_level + 1))
                return

        self._switch(ParseMode.PARAGRAPH)
        if self._buffer:
            current = "".join(self._buffer)
            sep = "\n" if is_signature_content(stripped, current, self.signature_markers) else " "
            self._buffer.append(sep + stripped)
        else:
            self._buffer.append(stripped)

    def _switch(self, mode: ParseMode) -> None:
        if self._mode is not mode:
            self._flush()
            self._mode = mode

    def _flush(self) -> None:
        buffer, mode = self._buffer, self._mode
        self._buffer = []
        self._mode = ParseMode.IDLE
        if not buffer:
            return

        if mode is ParseMode.LIST:
            self._blocks.append(ListBlock(items=buffer))
        elif mode is ParseMode.TABLE:
            self._blocks.append(TableBlock(rows=_normalize_rows(buffer)))
        elif mode is ParseMode.PARAGRAPH:
            text = "".join(buffer).strip()
            if has_signature_underline(text):
                self._blocks.append(SignatureLineBlock(text=text))
            else:
                self._blocks.append(ParagraphBlock(text=text))


def _normalize_rows(rows: List[List[str]]) -> List[List[str]]:
    width = max(len(r) for r in rows)
    if any(len(r) != width for r in rows):
        logger.debug("Padding ragged table rows to %d columns", width)
    return [r + [""] * (width - len(r)) for r in rows]


def parse(cleaned: str, signature_markers: Sequence[str] = (), continue_after_colon: bool = True) -> List[Block]:
    """Parse cleaned section text into an ordered list of blocks."""
    return BlockParser(signature_markers, continue_after_colon).parse(cleaned)

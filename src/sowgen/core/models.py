from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


@dataclass
class StyledRun:
    """A span of inline text, optionally bold."""
    text: str
    bold: bool = False


@dataclass
class Block:
    """Base block in a section body."""
    pass


@dataclass
class HeaderBlock(Block):
    text: str
    level: int = 1


@dataclass
class ParagraphBlock(Block):
    # `runs` stays empty until the assembler resolves inline formatting
    text: str
    runs: List[StyledRun] = field(default_factory=list)


@dataclass
class SignatureLineBlock(Block):
    text: str
    runs: List[StyledRun] = field(default_factory=list)


@dataclass
class ListItem:
    text: str
    indent_level: int = 0
    runs: List[StyledRun] = field(default_factory=list)


@dataclass
class ListBlock(Block):
    items: List[ListItem] = field(default_factory=list)


@dataclass
class TableBlock(Block):
    # Rows of cells; the first row is the header row
    rows: List[List[str]] = field(default_factory=list)


class SectionStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    SUCCESS = "success"
    MODIFIED = "modified"
    ERROR = "error"

    @property
    def is_exportable(self) -> bool:
        return self in (SectionStatus.SUCCESS, SectionStatus.MODIFIED)


@dataclass(frozen=True)
class Section:
    """A proposal section as kept by the surrounding application."""
    id: str
    title: str
    content: str = ""
    status: SectionStatus = SectionStatus.IDLE
    error_message: Optional[str] = None


@dataclass
class TitleInfo:
    client_name: str
    project_title: str
    preparer_name: str
    date: date
    client_address: str = ""
    preparer_address: str = ""
    preparer_email: str = ""
    preparer_phone: str = ""


@dataclass
class TocEntry:
    index: int
    title: str


@dataclass
class SectionContent:
    index: int
    title: str
    blocks: List[Block] = field(default_factory=list)
    section_id: str = ""


@dataclass
class DocumentModel:
    """Represents an assembled Statement of Work ready for rendering."""
    title: TitleInfo
    toc: List[TocEntry] = field(default_factory=list)
    sections: List[SectionContent] = field(default_factory=list)

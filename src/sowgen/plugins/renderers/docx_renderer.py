import logging
from io import BytesIO
from typing import Any, Iterable, List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Inches, Pt

from sowgen.core.inline import plain_text
from sowgen.core.models import (
    DocumentModel,
    HeaderBlock,
    ListBlock,
    ParagraphBlock,
    SectionContent,
    SignatureLineBlock,
    StyledRun,
    TableBlock,
    TitleInfo,
    TocEntry,
)
from sowgen.i18n.i18n import i18n
from sowgen.plugins.registry import DocumentRenderer, PluginRegistry

logger = logging.getLogger(__name__)

FONT_NAME = "Arial"
LIST_INDENT_INCHES = 0.25

# Title page and TOC take the first two pages.
FRONT_MATTER_PAGES = 2


def body_heading_level(level: int) -> int:
    """Section titles use Heading 1, so body headers start one tier lower."""
    return min(level + 1, 4)


def _setup_styles(doc) -> None:
    normal = doc.styles["Normal"]
    normal.font.name = FONT_NAME
    normal.font.size = Pt(11)
    for level, size in ((1, 14), (2, 12)):
        h = doc.styles[f"Heading {level}"]
        h.font.name = FONT_NAME
        h.font.size = Pt(size)
        h.font.bold = True


class DocxRenderer(DocumentRenderer):
    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".docx"]

    def begin(self, model: DocumentModel) -> None:
        self.doc = Document()
        _setup_styles(self.doc)

    def _line(self, text: str, size: int, bold: bool = False, center: bool = False, after: int = 6) -> None:
        p = self.doc.add_paragraph()
        if center:
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        p.paragraph_format.space_after = Pt(after)
        run = p.add_run(text)
        run.bold = bold
        run.font.size = Pt(size)

    def render_title_page(self, title: TitleInfo) -> None:
        self._line(i18n.t("doc_title"), 18, bold=True, center=True, after=20)
        self._line(title.project_title or i18n.t("fallback_project"), 14, bold=True, center=True, after=30)

        self._line(i18n.t("prepared_for"), 12, bold=True, after=10)
        self._line(title.client_name or i18n.t("fallback_client"), 11, after=5)
        if title.client_address:
            self._line(title.client_address, 10, after=5)

        self._line(i18n.t("prepared_by"), 12, bold=True, after=10)
        self._line(title.preparer_name or i18n.t("fallback_preparer"), 11, after=5)
        if title.preparer_address:
            self._line(title.preparer_address, 10, after=5)
        if title.preparer_email:
            self._line(f"{i18n.t('email_label')}: {title.preparer_email}", 10, after=5)
        if title.preparer_phone:
            self._line(f"{i18n.t('phone_label')}: {title.preparer_phone}", 10, after=5)

        self._line(i18n.date(title.date), 10, center=True, after=20)
        self.doc.add_page_break()

    def render_toc(self, toc: List[TocEntry]) -> None:
        self.doc.add_heading(i18n.t("toc_heading"), level=1)
        for entry in toc:
            p = self.doc.add_paragraph()
            p.paragraph_format.space_after = Pt(5)
            p.add_run(f"{entry.index}. {entry.title}")
            p.add_run(f"\t{entry.index + FRONT_MATTER_PAGES}")
        self.doc.add_page_break()

    def start_section(self, section: SectionContent, position: int) -> None:
        if position > 0:
            self.doc.add_page_break()
        self.doc.add_heading(f"{section.index}. {section.title}", level=1)

    def render_section_error(self, section: SectionContent) -> None:
        p = self.doc.add_paragraph()
        p.paragraph_format.space_after = Pt(10)
        p.add_run(i18n.t("section_error"))

    def checkpoint(self) -> Any:
        # Content is inserted before the trailing sectPr, so count only what precedes it.
        body = self.doc.element.body
        return len(body) - (1 if body.sectPr is not None else 0)

    def rollback(self, mark: Any) -> None:
        body = self.doc.element.body
        for child in body[mark:]:
            if child.tag != qn("w:sectPr"):
                body.remove(child)

    def finish(self) -> bytes:
        buf = BytesIO()
        self.doc.save(buf)
        return buf.getvalue()

    def _add_runs(self, paragraph, runs: Iterable[StyledRun]) -> None:
        for r in runs:
            # Run.text turns "\n" into a line break
            run = paragraph.add_run(r.text)
            if r.bold:
                run.bold = True

    def visit_header(self, block: HeaderBlock) -> None:
        self.doc.add_heading(plain_text(block.text), level=body_heading_level(block.level))

    def visit_paragraph(self, block: ParagraphBlock) -> None:
        p = self.doc.add_paragraph()
        p.paragraph_format.space_after = Pt(10)
        self._add_runs(p, block.runs)

    def visit_signature(self, block: SignatureLineBlock) -> None:
        p = self.doc.add_paragraph()
        p.paragraph_format.space_before = Pt(12)
        p.paragraph_format.space_after = Pt(12)
        self._add_runs(p, block.runs)

    def visit_list(self, block: ListBlock) -> None:
        for item in block.items:
            p = self.doc.add_paragraph(style="List Bullet")
            p.paragraph_format.left_indent = Inches(LIST_INDENT_INCHES * (item.indent_level + 1))
            p.paragraph_format.space_after = Pt(5)
            self._add_runs(p, item.runs)

    def visit_table(self, block: TableBlock) -> None:
        if not block.rows:
            return
        cols = max(len(row) for row in block.rows)
        table = self.doc.add_table(rows=len(block.rows), cols=cols)
        table.style = "Table Grid"
        for i, row in enumerate(block.rows):
            for j, cell_text in enumerate(row):
                run = table.cell(i, j).paragraphs[0].add_run(plain_text(cell_text))
                run.bold = i == 0
        # keep following content off the table border
        self.doc.add_paragraph()


PluginRegistry.register_renderer(DocxRenderer)

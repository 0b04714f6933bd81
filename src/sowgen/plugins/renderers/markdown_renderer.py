import re
from typing import Any, Dict, Iterable, List

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


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9 -]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def section_anchors(toc: Iterable[TocEntry]) -> Dict[int, str]:
    """Unique anchor per section index; titles with no ASCII slug get `section-N`."""
    anchors: Dict[int, str] = {}
    used = set()
    for entry in toc:
        base = slugify(entry.title) or f"section-{entry.index}"
        anchor, n = base, 1
        while anchor in used:
            n += 1
            anchor = f"{base}-{n}"
        used.add(anchor)
        anchors[entry.index] = anchor
    return anchors


def format_runs(runs: Iterable[StyledRun]) -> str:
    return "".join(f"**{r.text}**" if r.bold and r.text.strip() else r.text for r in runs)


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


class MarkdownRenderer(DocumentRenderer):
    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".md"]

    def begin(self, model: DocumentModel) -> None:
        self.lines: List[str] = []
        self.anchors = section_anchors(model.toc)

    def _emit(self, *lines: str) -> None:
        self.lines.extend(lines)

    def render_title_page(self, title: TitleInfo) -> None:
        self._emit(f"# {i18n.t('doc_title')}", "")
        self._emit(f"## {title.project_title or i18n.t('fallback_project')}", "")

        self._emit(f"**{i18n.t('prepared_for')}**", "")
        self._emit(title.client_name or i18n.t("fallback_client"), "")
        if title.client_address:
            self._emit(title.client_address, "")

        self._emit(f"**{i18n.t('prepared_by')}**", "")
        self._emit(title.preparer_name or i18n.t("fallback_preparer"), "")
        if title.preparer_address:
            self._emit(title.preparer_address, "")
        if title.preparer_email:
            self._emit(f"{i18n.t('email_label')}: {title.preparer_email}", "")
        if title.preparer_phone:
            self._emit(f"{i18n.t('phone_label')}: {title.preparer_phone}", "")

        self._emit(f"**{i18n.t('date_label')}** {i18n.date(title.date)}", "")
        self._emit("---", "")

    def render_toc(self, toc: List[TocEntry]) -> None:
        self._emit(f"## {i18n.t('toc_heading')}", "")
        for entry in toc:
            self._emit(f"{entry.index}. [{entry.title}](#{self.anchors[entry.index]})")
        self._emit("", "---", "")

    def start_section(self, section: SectionContent, position: int) -> None:
        if position > 0:
            self._emit("---", "")
        self._emit(f"## {section.index}. {section.title} {{#{self.anchors[section.index]}}}", "")

    def render_section_error(self, section: SectionContent) -> None:
        self._emit(i18n.t("section_error"), "")

    def checkpoint(self) -> Any:
        return len(self.lines)

    def rollback(self, mark: Any) -> None:
        del self.lines[mark:]

    def finish(self) -> str:
        return "\n".join(self.lines).rstrip() + "\n"

    def visit_header(self, block: HeaderBlock) -> None:
        self._emit(f"{'#' * min(block.level + 2, 6)} {block.text}", "")

    def visit_paragraph(self, block: ParagraphBlock) -> None:
        # Signature-style paragraphs keep their line structure.
        self._emit(format_runs(block.runs).replace("\n", "  \n"), "")

    def visit_signature(self, block: SignatureLineBlock) -> None:
        # Hard line breaks keep the signature layout; the blank lines give it room.
        text = format_runs(block.runs).replace("\n", "  \n")
        self._emit("", text, "", "")

    def visit_list(self, block: ListBlock) -> None:
        for item in block.items:
            self._emit(f"{'  ' * item.indent_level}- {format_runs(item.runs)}")
        self._emit("")

    def visit_table(self, block: TableBlock) -> None:
        if not block.rows:
            return
        cols = max(len(row) for row in block.rows)
        for i, row in enumerate(block.rows):
            cells = [_escape_cell(c) for c in row] + [""] * (cols - len(row))
            self._emit("| " + " | ".join(cells) + " |")
            if i == 0:
                self._emit("|" + "---|" * cols)
        self._emit("")


PluginRegistry.register_renderer(MarkdownRenderer)

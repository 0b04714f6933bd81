import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Type, Union

from sowgen.core.models import (
    Block,
    DocumentModel,
    HeaderBlock,
    ListBlock,
    ParagraphBlock,
    SectionContent,
    SignatureLineBlock,
    TableBlock,
    TitleInfo,
    TocEntry,
)

logger = logging.getLogger(__name__)


class DocumentRenderer(ABC):
    """
    Walks a DocumentModel and projects it into one output format.

    A renderer instance renders a single document. Subclasses implement the
    visit_* methods plus the page-level hooks; block dispatch and per-section
    error recovery live here so every format behaves the same way.
    """

    @classmethod
    @abstractmethod
    def get_supported_extensions(cls) -> list[str]:
        """e.g., ['.docx']"""
        pass

    def render(self, model: DocumentModel) -> Union[bytes, str]:
        self.begin(model)
        self.render_title_page(model.title)
        self.render_toc(model.toc)
        for position, section in enumerate(model.sections):
            mark = self.checkpoint()
            try:
                self.start_section(section, position)
                for block in section.blocks:
                    self.visit(block)
            except Exception:
                logger.exception("Error rendering section %d '%s'", section.index, section.title)
                self.rollback(mark)
                self.start_section(section, position)
                self.render_section_error(section)
        return self.finish()

    def visit(self, block: Block) -> None:
        if isinstance(block, HeaderBlock):
            self.visit_header(block)
        elif isinstance(block, SignatureLineBlock):
            self.visit_signature(block)
        elif isinstance(block, ParagraphBlock):
            self.visit_paragraph(block)
        elif isinstance(block, ListBlock):
            self.visit_list(block)
        elif isinstance(block, TableBlock):
            self.visit_table(block)
        else:
            raise TypeError(f"Unsupported block type: {type(block).__name__}")

    @abstractmethod
    def begin(self, model: DocumentModel) -> None:
        pass

    @abstractmethod
    def render_title_page(self, title: TitleInfo) -> None:
        pass

    @abstractmethod
    def render_toc(self, toc: List[TocEntry]) -> None:
        pass

    @abstractmethod
    def start_section(self, section: SectionContent, position: int) -> None:
        """Emit the separator (if any) and the numbered section title."""
        pass

    @abstractmethod
    def render_section_error(self, section: SectionContent) -> None:
        pass

    @abstractmethod
    def checkpoint(self) -> Any:
        """Opaque marker of the output produced so far."""
        pass

    @abstractmethod
    def rollback(self, mark: Any) -> None:
        """Discard everything produced after `mark`."""
        pass

    @abstractmethod
    def finish(self) -> Union[bytes, str]:
        pass

    @abstractmethod
    def visit_header(self, block: HeaderBlock) -> None:
        pass

    @abstractmethod
    def visit_paragraph(self, block: ParagraphBlock) -> None:
        pass

    @abstractmethod
    def visit_list(self, block: ListBlock) -> None:
        pass

    @abstractmethod
    def visit_table(self, block: TableBlock) -> None:
        pass

    @abstractmethod
    def visit_signature(self, block: SignatureLineBlock) -> None:
        pass


class PluginRegistry:
    _renderers: Dict[str, Type[DocumentRenderer]] = {}

    @classmethod
    def register_renderer(cls, renderer_cls: Type[DocumentRenderer]) -> None:
        for ext in renderer_cls.get_supported_extensions():
            cls._renderers[ext.lower()] = renderer_cls

    @classmethod
    def get_renderer(cls, ext: str) -> Type[DocumentRenderer]:
        return cls._renderers.get(ext.lower())

    @classmethod
    def available_outputs(cls) -> list[str]:
        return sorted(cls._renderers.keys())

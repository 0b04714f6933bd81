import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence

from sowgen.core.cleaner import clean
from sowgen.core.config import ProposalConfig
from sowgen.core.inline import format_inline
from sowgen.core.models import (
    Block,
    DocumentModel,
    ListBlock,
    ParagraphBlock,
    Section,
    SectionContent,
    SignatureLineBlock,
    TitleInfo,
    TocEntry,
)
from sowgen.core.parser import parse
from sowgen.core.signature import company_markers

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Content not available."


def build_title(config: ProposalConfig, today: Optional[date] = None) -> TitleInfo:
    return TitleInfo(
        client_name=config.client_company.name,
        project_title=config.project.title,
        preparer_name=config.your_company.name,
        date=today or date.today(),
        client_address=config.client_company.address,
        preparer_address=config.your_company.address,
        preparer_email=config.your_company.email,
        preparer_phone=config.your_company.phone,
    )


def resolve_inline(block: Block) -> Block:
    """Return a copy of `block` with its styled runs filled in."""
    if isinstance(block, (ParagraphBlock, SignatureLineBlock)):
        return replace(block, runs=format_inline(block.text))
    if isinstance(block, ListBlock):
        return ListBlock(items=[replace(item, runs=format_inline(item.text)) for item in block.items])
    return block


def section_blocks(content: str, markers: Sequence[str] = ()) -> List[Block]:
    cleaned = clean(content)
    blocks = parse(cleaned, markers) if cleaned.strip() else []
    if not blocks:
        return [ParagraphBlock(text=PLACEHOLDER_TEXT, runs=format_inline(PLACEHOLDER_TEXT))]
    return [resolve_inline(b) for b in blocks]


def assemble(config: ProposalConfig, sections: Sequence[Section], today: Optional[date] = None) -> DocumentModel:
    """
    Combine every exportable section into one DocumentModel.

    Only sections in `success` or `modified` state are included; they keep
    their relative order and are numbered from 1. `sections` is not modified.
    """
    included = [s for s in sections if s.status.is_exportable]
    logger.info("Assembling %d of %d sections", len(included), len(sections))

    markers = company_markers([config.your_company.name, config.client_company.name])
    model = DocumentModel(title=build_title(config, today))

    for index, section in enumerate(included, start=1):
        blocks = section_blocks(section.content, markers)
        logger.debug("Section %d '%s': %d blocks", index, section.title, len(blocks))
        model.toc.append(TocEntry(index=index, title=section.title))
        model.sections.append(
            SectionContent(index=index, title=section.title, blocks=blocks, section_id=section.id)
        )

    return model

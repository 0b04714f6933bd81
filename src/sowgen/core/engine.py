import logging
from datetime import date
from pathlib import Path
from typing import Optional, Sequence, Union

import sowgen.plugins  # Ensure renderers are registered
from sowgen.core.assembler import assemble
from sowgen.core.config import ProposalConfig
from sowgen.core.errors import ExportFailedError, UnsupportedFormatError
from sowgen.core.models import Section
from sowgen.plugins.registry import PluginRegistry
from sowgen.utils.paths import export_path

logger = logging.getLogger(__name__)


class CoreEngine:
    """
    Runs the clean -> parse -> format -> assemble -> render pipeline for one export.
    Does not know about block syntax or output formats, only routing.
    """

    @staticmethod
    def export(
        config: ProposalConfig,
        sections: Sequence[Section],
        out_ext: str,
        today: Optional[date] = None,
    ) -> Union[bytes, str]:
        """
        Render the exportable `sections` into the format registered for `out_ext`.
        Per-section problems are handled by the renderer; anything else is an ExportFailedError.
        """
        out_ext = out_ext if out_ext.startswith(".") else f".{out_ext}"
        RendererCls = PluginRegistry.get_renderer(out_ext)
        if not RendererCls:
            raise UnsupportedFormatError(f"No renderer found for extension '{out_ext}'")

        try:
            model = assemble(config, sections, today)
            payload = RendererCls().render(model)
        except Exception as e:
            raise ExportFailedError(f"Export failed: {e}") from e

        logger.info("Rendered %d sections to %s (%d %s)", len(model.sections), out_ext,
                    len(payload), "bytes" if isinstance(payload, bytes) else "chars")
        return payload

    @staticmethod
    def export_to_file(
        config: ProposalConfig,
        sections: Sequence[Section],
        output_dir: str,
        out_ext: str,
        today: Optional[date] = None,
    ) -> Path:
        """Export and save as `{client}_{project}_SOW{ext}` inside `output_dir`."""
        # Render fully before touching the filesystem so a failure leaves no file behind.
        payload = CoreEngine.export(config, sections, out_ext, today)

        target = export_path(config, output_dir, out_ext if out_ext.startswith(".") else f".{out_ext}")
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, bytes):
            target.write_bytes(payload)
        else:
            target.write_text(payload, encoding="utf-8", newline="\n")
        return target


def assemble_and_render_docx(config: ProposalConfig, sections: Sequence[Section], today: Optional[date] = None) -> bytes:
    return CoreEngine.export(config, sections, ".docx", today)


def assemble_and_render_markdown(config: ProposalConfig, sections: Sequence[Section], today: Optional[date] = None) -> str:
    return CoreEngine.export(config, sections, ".md", today)

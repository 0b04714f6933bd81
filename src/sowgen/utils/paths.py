import re
from pathlib import Path

from sowgen.core.config import ProposalConfig

_UNSAFE_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_filename(name: str) -> str:
    return _UNSAFE_RE.sub("_", name).strip()


def export_filename(config: ProposalConfig, ext: str) -> str:
    """`{client}_{project}_SOW{ext}`, e.g. `Acme_Website Redesign_SOW.docx`."""
    ext = ext if ext.startswith(".") else f".{ext}"
    client = config.client_company.name.strip() or "Client"
    project = config.project.title.strip() or "Project"
    return safe_filename(f"{client}_{project}_SOW") + ext


def export_path(config: ProposalConfig, output_dir: str, ext: str) -> Path:
    return Path(output_dir) / export_filename(config, ext)
